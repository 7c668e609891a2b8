"""JWT access token creation and validation (ES256).

The login flow (issuance) and the require_user dependency (validation)
share one TokenIssuer so they agree on key and claims schema.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

import jwt
from cryptography.hazmat.primitives.asymmetric import ec

ALGORITHM = "ES256"
ISSUER = "msusers"
AUDIENCE = "msusers"
DEFAULT_TTL_MIN = 15


class TokenIssuer(Protocol):
    def issue(self, subject: str) -> str: ...
    def decode(self, token: str) -> dict[str, Any]: ...


class JwtTokenIssuer:
    """Signs bearer tokens bound to a subject (the user's email).

    Dev/test: an ephemeral EC key pair is generated per instance, so
    tokens do not survive a restart.  Pass a private key to pin it.
    """

    def __init__(
        self,
        *,
        private_key: ec.EllipticCurvePrivateKey | None = None,
        ttl_min: int = DEFAULT_TTL_MIN,
    ) -> None:
        self._private_key = private_key or ec.generate_private_key(ec.SECP256R1())
        self._public_key = self._private_key.public_key()
        self.ttl_min = ttl_min

    def issue(self, subject: str) -> str:
        """Build and sign a JWT for *subject*.

        Claims: sub, iss, aud, exp, iat, jti.
        """
        if not subject:
            raise ValueError("subject must be non-empty")
        now = datetime.now(UTC)
        payload = {
            "sub": subject,
            "iss": ISSUER,
            "aud": AUDIENCE,
            "exp": now + timedelta(minutes=self.ttl_min),
            "iat": now,
            "jti": str(uuid.uuid4()),
        }
        return jwt.encode(payload, self._private_key, algorithm=ALGORITHM)

    def decode(self, token: str) -> dict[str, Any]:
        """Verify signature and claims, return the payload.

        Pins algorithm to ES256 to prevent alg:none and alg-switching attacks.

        Raises jwt.ExpiredSignatureError, jwt.InvalidTokenError on failure.
        """
        return jwt.decode(
            token,
            self._public_key,
            algorithms=[ALGORITHM],
            issuer=ISSUER,
            audience=AUDIENCE,
            options={"require": ["sub", "exp", "iat", "jti"]},
        )
