import os

STORE_BACKEND = os.getenv("STORE_BACKEND", "redis").lower()  # redis | memory | none

REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", 6379))
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD", None)
REDIS_DB = int(os.getenv("REDIS_DB", 0))

# Operation history is capped; once it grows past MAX_OPERATIONS only the
# newest TRIMMED_OPERATIONS survive.
MAX_OPERATIONS = 100
TRIMMED_OPERATIONS = 50

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
