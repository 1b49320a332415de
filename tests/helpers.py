"""Settings and builders shared by the test modules."""

from palapizza.config import Config

STORE_URL = "https://script.example.com/macros/s/abc/exec"
SUBMIT_URL = "https://script.example.com/macros/s/submit/exec"
STORE_SECRET = "store-shared-secret"
SESSION_SECRET = "test-session-secret"
ADMIN_PASSWORD = "pizza-staff"
COOKIE_NAME = "admin_session"

SETTINGS = {
    "admin_password": ADMIN_PASSWORD,
    "admin_session_secret": SESSION_SECRET,
    "store_url": STORE_URL,
    "store_secret": STORE_SECRET,
    "submit_url": SUBMIT_URL,
    "llm_api_key": "sk-test",
}


def make_config(**overrides) -> Config:
    """Config isolated from the environment and any local .env file."""
    return Config(_env_file=None, **{**SETTINGS, **overrides})
