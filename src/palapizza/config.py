from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False
    cors_origins: list[str] = []

    # Staff panel credentials. Empty values are reported as a server misconfiguration at request time.
    admin_password: str = ""
    admin_session_secret: str = ""
    session_cookie_name: str = "admin_session"
    session_cookie_secure: bool | None = None  # None: set Secure only when the request came over https
    session_max_age: int = 60 * 60 * 24 * 7  # 7 days
    session_clock_leeway: int = 0  # seconds a token timestamp may lie in the future
    staff_login_path: str = "/pannello/login"

    # Spreadsheet web-app holding the orders
    store_url: str = ""
    store_secret: str = ""  # shared secret appended to every store request
    submit_url: str = ""  # web-app receiving new orders, defaults to store_url
    store_sheet: str = "Ordini"
    store_timeout: float = 15.0

    restaurant_name: str = "Pala Pizza"
    llm_model: str = "gpt-4.1-mini"
    llm_api_key: str = ""

    model_config = {
        "env_file": [".env"],
        "env_prefix": "PALAPIZZA_",
        "extra": "ignore",
    }

    @property
    def order_submit_url(self) -> str:
        return self.submit_url or self.store_url
