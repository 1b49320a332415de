import hmac

import structlog

from palapizza.core.core import Service
from palapizza.core.modules.session.models import SessionToken, TokenStatus
from palapizza.core.modules.session.tokens import check_token, issue_token
from palapizza.errors import AuthenticationError, ConfigurationError

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Issues and verifies staff session tokens using the configured secret."""

    def ensure_configured(self) -> None:
        """Raise ConfigurationError unless both the admin password and the signing secret are set."""
        config = self.core.config
        if not config.admin_password or not config.admin_session_secret:
            raise ConfigurationError("PALAPIZZA_ADMIN_PASSWORD o PALAPIZZA_ADMIN_SESSION_SECRET mancanti")

    def ensure_secret(self) -> None:
        if not self.core.config.admin_session_secret:
            raise ConfigurationError("PALAPIZZA_ADMIN_SESSION_SECRET mancante")

    @property
    def is_secret_configured(self) -> bool:
        return bool(self.core.config.admin_session_secret)

    def login(self, password: str) -> SessionToken:
        """Exchange the admin password for a fresh session token."""
        self.ensure_configured()
        expected = self.core.config.admin_password
        if not hmac.compare_digest(password.encode("utf-8"), expected.encode("utf-8")):
            logger.warning("staff_login_failed")
            raise AuthenticationError("Password errata")
        logger.info("staff_login")
        return issue_token(self.core.config.admin_session_secret)

    def check(self, token: str | None) -> TokenStatus:
        config = self.core.config
        status = check_token(
            token,
            config.admin_session_secret,
            max_age=config.session_max_age,
            leeway=config.session_clock_leeway,
        )
        if status is not TokenStatus.VALID and token:
            logger.info("session_token_rejected", reason=status.value)
        return status

    def is_valid(self, token: str | None) -> bool:
        if not self.is_secret_configured:
            return False
        return self.check(token) is TokenStatus.VALID
