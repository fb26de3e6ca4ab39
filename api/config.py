"""Runtime configuration from the environment (and a local .env, if present)."""

import os

from dotenv import load_dotenv

from scoring.handicap import PLAYING_HANDICAP_ALLOWANCE

load_dotenv()

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]
ALLOWANCE = float(os.environ.get("PLAYING_HANDICAP_ALLOWANCE", PLAYING_HANDICAP_ALLOWANCE))
