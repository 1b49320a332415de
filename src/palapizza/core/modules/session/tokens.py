"""Stateless signed session tokens.

Token format: ``{issued_at}.{hex_hmac_sha256}`` where the HMAC is keyed with the
session secret and computed over the decimal timestamp string.

Nothing is stored server-side. A token stays valid until its window elapses;
rotating the secret invalidates every outstanding token at once.
"""

import hashlib
import hmac

from palapizza.core.modules.session.models import SessionToken, TokenStatus
from palapizza.utils import unix_now

TOKEN_MAX_AGE = 60 * 60 * 24 * 7
SEPARATOR = "."
MAX_TIMESTAMP_DIGITS = 12


def sign(secret: str, issued_at: str) -> str:
    return hmac.new(secret.encode("utf-8"), issued_at.encode("utf-8"), hashlib.sha256).hexdigest()


def issue_token(secret: str, now: int | None = None) -> SessionToken:
    """Issue a token for the given instant (defaults to the current time)."""
    if not secret:
        raise ValueError("Session secret must not be empty")
    issued_at = str(unix_now() if now is None else now)
    return SessionToken(f"{issued_at}{SEPARATOR}{sign(secret, issued_at)}")


def check_token(
    token: object, secret: str, now: int | None = None, max_age: int = TOKEN_MAX_AGE, leeway: int = 0
) -> TokenStatus:
    """Classify a presented token. Never raises on malformed input.

    A token is valid while ``0 <= now - issued_at <= max_age``; ``leeway`` lets the
    timestamp sit that many seconds in the future to absorb clock skew.
    """
    if not isinstance(token, str) or not token or not secret:
        return TokenStatus.MALFORMED

    parts = token.split(SEPARATOR)
    if len(parts) != 2:
        return TokenStatus.MALFORMED

    issued_at_str, signature = parts
    # int() would also accept "+1", " 1" and "1_0", which sign to different strings
    if len(issued_at_str) > MAX_TIMESTAMP_DIGITS or not (issued_at_str.isascii() and issued_at_str.isdigit()):
        return TokenStatus.MALFORMED
    issued_at = int(issued_at_str)

    expected = sign(secret, issued_at_str)
    if not signature.isascii() or not hmac.compare_digest(expected.encode("ascii"), signature.encode("ascii")):
        return TokenStatus.SIGNATURE_MISMATCH

    age = (unix_now() if now is None else now) - issued_at
    if age < -leeway or age > max_age:
        return TokenStatus.EXPIRED

    return TokenStatus.VALID


def verify_token(
    token: object, secret: str, now: int | None = None, max_age: int = TOKEN_MAX_AGE, leeway: int = 0
) -> bool:
    """Return True only for a token issued under ``secret`` within the validity window."""
    return check_token(token, secret, now=now, max_age=max_age, leeway=leeway) is TokenStatus.VALID
