"""Bearer token issuance and verification using PyJWT."""

import logging
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import jwt

from userhub_common.errors import UnauthorizedError
from userhub_common.models.principal import AuthenticatedPrincipal
from userhub_common.models.user import User

logger = logging.getLogger(__name__)


class TokenService:
    """Issue and verify signed access tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 60,
        issuer: str | None = None,
    ) -> None:
        """Initialize the token service.

        Args:
            secret_key: Signing key
            algorithm: JWT signing algorithm
            access_token_expire_minutes: Lifetime of issued tokens
            issuer: Optional ``iss`` claim, checked on verification when set
        """
        if not secret_key:
            raise ValueError("secret_key is required")

        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expire_minutes = access_token_expire_minutes
        self.issuer = issuer

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return self.access_token_expire_minutes * 60

    def issue(self, user: User) -> str:
        """Create an access token for a user.

        Args:
            user: Authenticated user

        Returns:
            Encoded JWT
        """
        now = datetime.now(UTC)
        claims = {
            "sub": str(user.id),
            "email": user.email,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=self.access_token_expire_minutes)).timestamp()),
            "jti": str(uuid4()),
        }
        if self.issuer:
            claims["iss"] = self.issuer

        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> AuthenticatedPrincipal:
        """Verify a token and resolve the caller.

        Args:
            token: Encoded JWT from the Authorization header

        Returns:
            AuthenticatedPrincipal for the token subject

        Raises:
            UnauthorizedError: If the token is expired, tampered with or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise UnauthorizedError("token has expired") from e
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected token: %s", e)
            raise UnauthorizedError("invalid token") from e

        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError) as e:
            raise UnauthorizedError("invalid token subject") from e

        return AuthenticatedPrincipal(user_id=user_id, email=payload.get("email"))
