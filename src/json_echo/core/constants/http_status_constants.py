"""Constants for HTTP status messages.

This module contains constants for common HTTP status messages to make the test suite
less fragile and more maintainable.
"""

# 4xx Client Errors
HTTP_405_METHOD_NOT_ALLOWED_MESSAGE = "Method Not Allowed"

# 5xx Server Errors
HTTP_500_INTERNAL_SERVER_ERROR_MESSAGE = "Internal Server Error"
