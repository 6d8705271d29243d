"""Default values shared by configuration and the upstream client."""

DEFAULT_API_URL = "https://api.recipesage.com"
DEFAULT_LOGIN_PATH = "/trpc/users.login"
DEFAULT_REQUEST_TIMEOUT = 30.0  # seconds
DEFAULT_LOG_LEVEL = "INFO"
