# Environment variables
ENV_BASE_URL = "STOREDESK_API_URL"
ENV_TIMEOUT = "STOREDESK_TIMEOUT"
ENV_DEV_MODE = "STOREDESK_DEV_MODE"
ENV_DEV_ACCESS_TOKEN = "STOREDESK_DEV_ACCESS_TOKEN"
ENV_HOSTNAME = "STOREDESK_HOSTNAME"
ENV_LOGIN_PATH = "STOREDESK_LOGIN_PATH"
ENV_SESSION_FILE = "STOREDESK_SESSION_FILE"

# Headers
HEADER_AUTHORIZATION = "Authorization"
HEADER_COMPANY_SUBDOMAIN = "X-Company-Subdomain"
HEADER_SUBDOMAIN = "X-Subdomain"
HEADER_REQUEST_ID = "X-Request-ID"

# Paths
API_VERSION_PREFIX = "v1/"
REFRESH_ENDPOINT = "auth/refresh"
DEFAULT_LOGIN_PATH = "/auth/login"
DEFAULT_PUBLIC_ROUTE_PREFIXES = (
    "/test-public",
    "/home",
    "/shop",
    "/auth/",
    "/payment/",
)
DEFAULT_BEST_EFFORT_PATHS = ("whatsapp/messages/read",)
EXPECTED_NOT_FOUND_PATHS = ("orders-new/simple/",)

# Local files
DOTENV_FILE = ".env"
SESSION_DIR = ".storedesk"
SESSION_FILE = "session.json"

# Transport
DEFAULT_TIMEOUT = 30.0
REQUEST_ID_LENGTH = 9

# Status handling
SILENT_STATUS_CODES = frozenset({401, 404, 503})
DEFAULT_ERROR_MESSAGE = "An unexpected error occurred"
