"""User API routes: register, login, update profile, delete account."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from userhub_api.auth import get_current_principal
from userhub_api.models.response import ResponseEnvelope, envelope_response, new_response
from userhub_api.services import get_user_service
from userhub_common.models.principal import AuthenticatedPrincipal
from userhub_common.models.user import CreateUserRequest, DeleteResponse, LoginRequest, UpdateUserRequest
from userhub_common.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"], redirect_slashes=False)

DELETED_MESSAGE = "your account has been successfully deleted"

_BAD_REQUEST = {400: {"model": ResponseEnvelope, "description": "Bad Request"}}
_UNAUTHORIZED = {401: {"model": ResponseEnvelope, "description": "Missing or invalid bearer token"}}
_NOT_FOUND = {404: {"model": ResponseEnvelope, "description": "Record not found"}}
_CONFLICT = {409: {"model": ResponseEnvelope, "description": "Data conflict, like email already exists"}}
_UNPROCESSABLE = {422: {"model": ResponseEnvelope, "description": "Malformed or invalid request body"}}


# Sync handlers: each request runs in the threadpool.
@router.post(
    "/register",
    summary="Create new user",
    response_model=ResponseEnvelope,
    responses={**_BAD_REQUEST, **_CONFLICT, **_UNPROCESSABLE},
)
def create_user(
    request: CreateUserRequest,
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    """Register a new user.

    The envelope reports 201 while the transport status is 200.
    """
    user = service.create(request)
    return envelope_response(status.HTTP_200_OK, new_response(status.HTTP_201_CREATED, user))


@router.post(
    "/login",
    summary="Login user",
    response_model=ResponseEnvelope,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_UNPROCESSABLE},
)
def login_user(
    request: LoginRequest,
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    """Exchange credentials for a bearer token."""
    login = service.login(request)
    return envelope_response(status.HTTP_200_OK, new_response(status.HTTP_200_OK, login))


@router.put(
    "",
    summary="Update user",
    response_model=ResponseEnvelope,
    responses={**_BAD_REQUEST, **_UNAUTHORIZED, **_NOT_FOUND, **_CONFLICT, **_UNPROCESSABLE},
)
def update_user(
    request: UpdateUserRequest,
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    """Update the caller's own profile. Any ``id`` in the body is ignored."""
    if request.id is not None and request.id != principal.user_id:
        logger.warning("Ignoring body id %s for user %s", request.id, principal.user_id)

    request = request.model_copy(update={"id": principal.user_id})
    user = service.update(request)
    return envelope_response(status.HTTP_200_OK, new_response(status.HTTP_200_OK, user))


@router.delete(
    "",
    summary="Delete user",
    response_model=ResponseEnvelope,
    responses={**_BAD_REQUEST, **_UNAUTHORIZED, **_NOT_FOUND},
)
def delete_user(
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    """Delete the caller's own account."""
    service.delete_by_id(principal.user_id)
    return envelope_response(status.HTTP_200_OK, new_response(status.HTTP_200_OK, DeleteResponse(message=DELETED_MESSAGE)))
