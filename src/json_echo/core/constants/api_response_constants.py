"""Constants for API response values."""

# Content types
CONTENT_TYPE_JSON = "application/json"

# Error payload field and messages
FIELD_MESSAGE = "message"
INVALID_JSON_MESSAGE = "Invalid JSON"

# Serialization defaults
DEFAULT_JSON_INDENT = 4
DEFAULT_JSON_MAX_DEPTH = 512

# Methods served by the echo endpoint
ECHO_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
