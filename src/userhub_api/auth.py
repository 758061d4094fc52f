"""Bearer token authentication dependency."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from userhub_api.services import get_token_service
from userhub_common.errors import UnauthorizedError
from userhub_common.models.principal import AuthenticatedPrincipal
from userhub_common.security import TokenService

bearer_scheme = HTTPBearer(auto_error=False, description="Bearer + user token")


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> AuthenticatedPrincipal:
    """Resolve the caller from the Authorization header.

    Raises:
        UnauthorizedError: If the header is missing or the token is invalid
    """
    if credentials is None:
        raise UnauthorizedError("missing bearer token")
    return tokens.verify(credentials.credentials)
