from palapizza.core.core import Service
from palapizza.errors import AuthenticationError


class AccessService(Service):
    def ensure_staff(self, token: str | None) -> None:
        """Ensure the bearer of the cookie is logged in as staff."""
        session = self.core.services.session
        session.ensure_secret()
        if not session.is_valid(token):
            raise AuthenticationError
