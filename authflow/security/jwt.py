"""JWT token issuance and verification.

Reference ``TokenManager`` implementation backed by python-jose. Every
issued token carries a unique ``jti`` so revocation markers can be keyed
on it rather than on the raw token string.
"""

from datetime import UTC
from datetime import datetime
from datetime import timedelta
from typing import Any
from uuid import uuid4

from jose import ExpiredSignatureError
from jose import JWTError
from jose import jwt

from authflow.core.config import get_settings
from authflow.domains.auth.ports import TokenClaims
from authflow.domains.auth.ports import VerifiedToken
from authflow.exceptions import ExpiredTokenException
from authflow.exceptions import InvalidTokenException


# Claims managed by the token manager itself
_RESERVED_CLAIMS = frozenset({"jti", "exp", "iat"})


class JWTTokenManager:
    """JWT token generation and verification service.

    Usage:
        ```python
        token_manager = JWTTokenManager(secret_key="...", expiration=timedelta(minutes=5))

        token = await token_manager.issue({"sub": str(user.pk), "email": user.email})
        verified = await token_manager.verify(token)
        verified.claims["sub"], verified.jti, verified.exp
        ```

    Any argument left as None falls back to the ``jwt`` section of the settings.
    """

    def __init__(
        self,
        secret_key: str | None = None,
        algorithm: str | None = None,
        expiration: timedelta | None = None,
    ) -> None:
        """Initialize token manager.

        Args:
            secret_key: HMAC signing key.
            algorithm: JWS algorithm name.
            expiration: Default token lifetime.

        Raises:
            ValueError: If no secret key is configured.
        """
        jwt_settings = get_settings().jwt
        self._secret_key = secret_key or jwt_settings.secret_key.get_secret_value()
        self._algorithm = algorithm or jwt_settings.algorithm
        self._expiration = expiration or jwt_settings.access_expiration

        if not self._secret_key:
            raise ValueError("JWT secret key is not configured")

    async def issue(self, claims: TokenClaims, *, expires_in_seconds: int | None = None) -> str:
        """Create a signed JWT carrying the given claims.

        Args:
            claims: Token claims; must include ``sub``.
            expires_in_seconds: Lifetime override. Defaults to the configured expiration.

        Returns:
            Encoded JWT.
        """
        now = datetime.now(UTC)
        lifetime = (
            timedelta(seconds=expires_in_seconds) if expires_in_seconds is not None else self._expiration
        )
        exp = now + lifetime

        payload: dict[str, Any] = {key: value for key, value in claims.items() if key not in _RESERVED_CLAIMS}
        payload["sub"] = str(claims["sub"])
        payload["jti"] = str(uuid4())
        payload["iat"] = int(now.timestamp())
        payload["exp"] = int(exp.timestamp())

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    async def verify(self, token: str) -> VerifiedToken:
        """Verify signature and expiration and return the decoded token.

        Args:
            token: Encoded JWT.

        Returns:
            VerifiedToken with claims, jti and exp.

        Raises:
            ExpiredTokenException: If token has expired.
            InvalidTokenException: If token is malformed, has a bad signature,
                or carries no subject.
        """
        payload = self._decode_token(token)

        if not payload.get("sub"):
            raise InvalidTokenException()

        return VerifiedToken(
            claims=payload,
            jti=payload.get("jti"),
            exp=payload.get("exp"),
        )

    def _decode_token(self, token: str) -> dict[str, Any]:
        """Decode and verify JWT token signature and expiration.

        Raises:
            InvalidTokenException: If token is malformed or invalid signature.
            ExpiredTokenException: If token has expired.
        """
        try:
            return jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )
        except ExpiredSignatureError:
            raise ExpiredTokenException() from None
        except JWTError:
            raise InvalidTokenException() from None
