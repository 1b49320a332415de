"""Session token models."""

from enum import StrEnum
from typing import NewType

SessionToken = NewType("SessionToken", str)


class TokenStatus(StrEnum):
    """Outcome of a token check. Only VALID grants access, the rest are logged and collapse into a 401."""

    VALID = "valid"
    MALFORMED = "malformed"
    SIGNATURE_MISMATCH = "signature_mismatch"
    EXPIRED = "expired"
