"""Static server constants."""

PROJECT_NAME = "Notes Backend"
VERSION = "1.0.0"
SCHEMA_VERSION = "v1"

API_V1_STR = "/api/v1"

TOKEN_COOKIE_NAME = "token"
