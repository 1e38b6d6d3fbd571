# src/config.py
import os

# Backend base url, e.g. http://localhost:3000/api
API_BASE_URL = (os.environ.get("RESOURCE_API_URL") or "http://localhost:3000/api").rstrip("/")

# Optional auto sign-in (both must be set)
API_TOKEN = os.environ.get("RESOURCE_API_TOKEN") or ""
USER_ID = os.environ.get("RESOURCE_USER_ID") or ""

LOG_LEVEL = (os.environ.get("RESOURCE_LOG_LEVEL") or "INFO").upper()

HTTP_TIMEOUT = 10  # seconds

# toast durations (ms)
SUCCESS_TOAST_MS = 3000
ERROR_TOAST_MS = 5000
