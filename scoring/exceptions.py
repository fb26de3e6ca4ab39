class ScoringError(Exception):
    """Base for all handicap and match-scoring errors."""


class InvalidInputError(ScoringError, ValueError):
    """Malformed input: length mismatch, negative score, non-positive slope or hole count."""


class MissingCounterpartError(ScoringError):
    """Only one side of a match has a score; points cannot be computed yet."""


class StateViolationError(ScoringError):
    """Write attempted against a locked match day."""
