# fare_estimator/config.py
import os

# -----------------------------------------------------------------------------
# Runtime settings (environment overrides)
# -----------------------------------------------------------------------------
# IANA zone used to turn epoch seconds into wall-clock for the day/night tariff
FARE_TIMEZONE = os.getenv("FARE_TIMEZONE", "UTC")

FARE_OUTPUT_PATH = os.getenv("FARE_OUTPUT_PATH", "estimated_fares.csv")

# rows per pandas read chunk; input is streamed, never loaded whole
FARE_CHUNK_SIZE = int(os.getenv("FARE_CHUNK_SIZE", "10000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = os.getenv("LOG_JSON", "0").lower() in {"1", "true", "yes"}
