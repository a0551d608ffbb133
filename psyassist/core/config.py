# /psyassist/core/config.py

"""
Runtime configuration, read once from the environment.

A `.env` file in the working directory is loaded first so local development
does not need exported variables. Every value has a default that is safe for
a single-user SQLite setup.
"""

import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./psyassist.db")

# Prefix of the downloaded report file name: <prefix>_<child_name>.txt
REPORT_FILE_PREFIX = os.getenv("REPORT_FILE_PREFIX", "assessment_report")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]
