from pydantic import BaseModel, ConfigDict


class BaseLeagueModel(BaseModel):
    """Shared configuration: admin corrections assigned to a record are validated like construction."""
    model_config = ConfigDict(validate_assignment=True)
