"""
Auth module: token issuance/verification, password hashing and the
request guard dependencies.

Tokens are HS256 JWTs carrying the subject id, its role and the issue and
expiry timestamps. The guard trusts those claims for the lifetime of the
token and does not look the identity up again; a deleted account keeps a
working token until it expires.
"""

import base64
import hashlib
import hmac
import logging
import secrets
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Optional

from fastapi import Depends, Request
from jose import jwt, JWTError, ExpiredSignatureError

from homecare.config import get_settings
from homecare.exceptions import Forbidden, TokenExpired, TokenMalformed, Unauthenticated

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

CLIENT = "client"
NURSE = "nurse"
ROLES = (CLIENT, NURSE)


@dataclass(frozen=True)
class Identity:
    """Authenticated principal attached to each request."""
    id: int
    role: str                     # "client" | "nurse"

    @property
    def is_client(self) -> bool:
        return self.role == CLIENT

    @property
    def is_nurse(self) -> bool:
        return self.role == NURSE


class TokenService:
    """Issues and verifies signed, time-bound identity assertions."""

    def __init__(self, secret: str, ttl_seconds: int = 3600):
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self.ttl_seconds = ttl_seconds

    def issue(self, subject_id: int, role: str, now: Optional[float] = None) -> str:
        if role not in ROLES:
            raise ValueError(f"unknown role {role!r}")
        issued_at = int(now if now is not None else time.time())
        payload = {
            "sub": str(subject_id),
            "role": role,
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> Identity:
        """Return the token's identity or raise TokenMalformed / TokenExpired."""
        try:
            payload = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except ExpiredSignatureError:
            raise TokenExpired("Token expired")
        except JWTError:
            raise TokenMalformed("Token malformed")

        role = payload.get("role")
        if role not in ROLES or "exp" not in payload or "iat" not in payload:
            raise TokenMalformed("Token missing required claims")
        try:
            subject_id = int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise TokenMalformed("Token subject is not an identity id")
        return Identity(id=subject_id, role=role)


@lru_cache()
def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(settings.jwt_secret_key, settings.token_expire_seconds)


def create_token(subject_id: int, role: str) -> str:
    """Create a signed token for the given identity."""
    return get_token_service().issue(subject_id, role)


# Passwords: scrypt with a random per-password salt.
_SCRYPT_N = 2**14
_SCRYPT_R = 8
_SCRYPT_P = 1
_KEY_LEN = 32
_SALT_BYTES = 16


def _encode(value: bytes) -> str:
    return base64.urlsafe_b64encode(value).decode("ascii").rstrip("=")


def _decode(value: str) -> bytes:
    padding = "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode(value + padding)


def hash_password(password: str) -> str:
    salt = secrets.token_bytes(_SALT_BYTES)
    key = hashlib.scrypt(
        password.encode("utf-8"), salt=salt, n=_SCRYPT_N, r=_SCRYPT_R, p=_SCRYPT_P, dklen=_KEY_LEN
    )
    return f"scrypt${_SCRYPT_N}${_SCRYPT_R}${_SCRYPT_P}${_encode(salt)}${_encode(key)}"


def verify_password(password: str, hashed: str) -> bool:
    try:
        _, n_str, r_str, p_str, salt_b64, key_b64 = hashed.split("$", 5)
        salt = _decode(salt_b64)
        expected = _decode(key_b64)
        candidate = hashlib.scrypt(
            password.encode("utf-8"),
            salt=salt,
            n=int(n_str),
            r=int(r_str),
            p=int(p_str),
            dklen=len(expected),
        )
    except (ValueError, TypeError):
        return False
    return hmac.compare_digest(candidate, expected)


async def get_current_user(request: Request) -> Identity:
    """
    FastAPI dependency. Extracts the bearer token from the Authorization
    header and returns the identity it asserts. Missing, malformed and
    expired tokens all surface as the same 401.
    """
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthenticated("Not authenticated")
    try:
        identity = get_token_service().verify(token.strip())
    except Unauthenticated as exc:
        logger.debug("Rejected bearer token: %s", exc.message)
        raise Unauthenticated("Invalid or expired token")
    request.state.identity = identity
    return identity


def require_role(role: str) -> Callable[[Identity], Identity]:
    """Dependency factory that admits only identities with ``role``."""

    def _role_dependency(current_user: Identity = Depends(get_current_user)) -> Identity:
        if current_user.role != role:
            raise Forbidden(f"Only a {role} may perform this action")
        return current_user

    return _role_dependency


require_client = require_role(CLIENT)
require_nurse = require_role(NURSE)
