"""Static values shared by the TrackProfit server."""

PROJECT_NAME = "TrackProfit"
API_V1_STR = "/api/v1"
VERSION = "1.0.0"
SCHEMA_VERSION = "v1"

USER_ID_HEADER = "X-User-Id"
CSRF_HEADER = "X-CSRF-Token"
SERVICE_TOKEN_HEADER = "X-Service-Token"
