"""Constants module for the JSON echo service.

This module contains constants used throughout the application and tests
to make the codebase more maintainable and the tests less fragile.
"""

from .api_response_constants import *  # noqa: F403
from .http_status_constants import *  # noqa: F403
