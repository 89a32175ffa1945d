import hmac
from datetime import datetime, timedelta, timezone
from typing import Sequence

import jwt
from jwt import InvalidTokenError

ADMIN_ROLE = "admin"


class AdminGate:
    """Compares a candidate password against the configured shared secret."""

    def __init__(self, secret: str) -> None:
        self._secret = secret

    def authenticate(self, candidate: str | None) -> bool:
        if not candidate or not self._secret:
            return False
        return hmac.compare_digest(candidate.encode("utf-8"), self._secret.encode("utf-8"))


def create_access_token(
    *,
    subject: str,
    secret: str,
    role: str = ADMIN_ROLE,
    algorithm: str = "HS256",
    expires_delta: timedelta | None = None,
) -> str:
    now = datetime.now(timezone.utc)
    exp = now + (expires_delta or timedelta(minutes=30))
    payload = {"sub": subject, "role": role, "iat": now, "exp": exp}
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(
    token: str,
    *,
    secret: str,
    algorithms: Sequence[str],
) -> tuple[str, str]:
    """Return ``(subject, role)`` from a valid token. Raises ValueError otherwise."""
    try:
        payload = jwt.decode(token, secret, algorithms=list(algorithms))
    except InvalidTokenError as exc:  # includes ExpiredSignatureError
        raise ValueError("invalid token") from exc

    sub = payload.get("sub")
    role = payload.get("role")
    if not isinstance(sub, str) or not sub:
        raise ValueError("token missing sub")
    if not isinstance(role, str) or not role:
        raise ValueError("token missing role")
    return sub, role
