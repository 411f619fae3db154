import os
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

# Load .env file variables into environment
load_dotenv(verbose=True)

DEFAULT_API_BASE_URL = "http://127.0.0.1:8080"
DEFAULT_TEST_USER_PASSWORD = "test123456"
DEFAULT_TIMEOUT_SECONDS = 10.0


class Settings:
    """Fixture configuration settings loaded from environment variables."""

    # --- Target Service Settings ---
    API_BASE_URL: str = DEFAULT_API_BASE_URL
    API_TIMEOUT_SECONDS: float = DEFAULT_TIMEOUT_SECONDS

    # --- Test Account Settings ---
    TEST_USER_PASSWORD: str = DEFAULT_TEST_USER_PASSWORD
    API_STATIC_TOKEN: Optional[str] = None

    # --- Fixture Table Settings ---
    FIXTURE_TABLE_FILEPATH: Optional[str] = None

    # --- Helper Methods using os.getenv ---
    def get_api_base_url(self) -> str:
        """Returns the base URL of the service under test."""
        url = os.getenv("API_BASE_URL", DEFAULT_API_BASE_URL)
        parsed = urlparse(url)
        if not all([parsed.scheme, parsed.netloc]):
            raise ValueError(f"Invalid API_BASE_URL format: {url}")
        return url.rstrip("/")

    def get_api_timeout(self) -> float:
        """Returns the HTTP timeout in seconds."""
        timeout_str = os.getenv("API_TIMEOUT_SECONDS")
        if timeout_str is None:
            return DEFAULT_TIMEOUT_SECONDS
        try:
            timeout = float(timeout_str)
        except ValueError:
            raise ValueError("API_TIMEOUT_SECONDS environment variable must be a number.")
        if timeout <= 0:
            raise ValueError("API_TIMEOUT_SECONDS environment variable must be positive.")
        return timeout

    def get_test_user_password(self) -> str:
        return os.getenv("TEST_USER_PASSWORD", DEFAULT_TEST_USER_PASSWORD)

    def get_static_token(self) -> str | None:
        """Returns a pre-issued bearer token, if set. Empty values count as unset."""
        return os.getenv("API_STATIC_TOKEN") or None

    def get_fixture_table_filepath(self) -> str | None:
        """Returns the path to a JSON fixture table override, if set."""
        return os.getenv("FIXTURE_TABLE_FILEPATH") or None

    def get_log_level(self, default: str = "INFO") -> str:
        """Returns the configured log level name, upper-cased."""
        return os.getenv("LOG_LEVEL", default).upper()
