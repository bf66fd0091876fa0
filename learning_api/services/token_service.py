"""Bearer token issuance and verification (JWT, ES256).

POST /auth issues the token; ``require_user`` in api/dependencies.py
verifies it.  Both go through this module so they agree on the key and
the claim set.

The signing key is read from JWT_PRIVATE_KEY (PEM, EC P-256).  Without
it an ephemeral key is generated at import: tokens then stop verifying
after a restart and are not shared between worker processes.
"""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime, timedelta

import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from learning_api.core.config import SETTINGS

logger = logging.getLogger(__name__)

ALGORITHM = "ES256"
ISSUER = "learning-platform-api"
AUDIENCE = "learning-platform"


def _load_private_key(pem: str | None) -> ec.EllipticCurvePrivateKey:
    if pem is None:
        logger.info("JWT_PRIVATE_KEY not set; using an ephemeral signing key")
        return ec.generate_private_key(ec.SECP256R1())
    key = serialization.load_pem_private_key(pem.encode(), password=None)
    if not isinstance(key, ec.EllipticCurvePrivateKey):
        raise ValueError("JWT_PRIVATE_KEY must be an EC private key")
    return key


_private_key = _load_private_key(SETTINGS.jwt_private_key)
_public_key = _private_key.public_key()


def create_access_token(*, sub: str, ttl_minutes: int | None = None) -> str:
    now = datetime.now(UTC)
    ttl = ttl_minutes if ttl_minutes is not None else SETTINGS.access_token_ttl_min
    payload = {
        "sub": sub,
        "iss": ISSUER,
        "aud": AUDIENCE,
        "iat": now,
        "exp": now + timedelta(minutes=ttl),
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(payload, _private_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verify signature, issuer, audience and expiry; return the claims.

    Raises jwt.ExpiredSignatureError or jwt.InvalidTokenError.
    """
    return jwt.decode(
        token,
        _public_key,
        algorithms=[ALGORITHM],
        issuer=ISSUER,
        audience=AUDIENCE,
        options={"require": ["sub", "exp", "iat", "jti"]},
    )
