"""Microsoft Graph endpoints and client defaults."""

from datetime import timedelta

CLIENT_VERSION = "0.1.0"

DEFAULT_BASE_URL = "https://graph.microsoft.com/v1.0"
DEFAULT_TOKEN_URL = "https://login.microsoftonline.com/common/oauth2/v2.0/token"
DEFAULT_SCOPE = "mail.read calendars.read user.read offline_access"
DEFAULT_USER_AGENT = f"outlook-client/{CLIENT_VERSION}"
DEFAULT_TIMEOUT = 60.0

# Default width of calendarView and message date windows
DEFAULT_LIST_WINDOW = timedelta(days=7)

# Format for startDateTime/endDateTime query parameters
QUERY_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

SESSION_BASE_PATH = "/me"
