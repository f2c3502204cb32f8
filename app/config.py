"""
Environment-driven settings. Read once at import time.

Validation limits are deliberately absent: they are module constants in
app.validation and are not configurable at run time.
"""

import os


class Settings:
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if ENVIRONMENT == "development" else "INFO")
    APP_TITLE = os.getenv("APP_TITLE", "Healthcare Market Research Catalog")


settings = Settings()
