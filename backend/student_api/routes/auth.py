"""
Student API — Auth Route Handlers
==================================

What:  POST /auth/register and POST /auth/login.
How:   Delegates to user_service with the hasher and token service that
       create_app() attached to app.state.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends

from student_api.auth.dependencies import get_password_hasher, get_token_service
from student_api.auth.passwords import PasswordHasher
from student_api.auth.tokens import TokenService
from student_api.database import DocumentStore, get_store
from student_api.schemas.auth import Credentials, TokenResponse
from student_api.schemas.common import CreatedResponse, ErrorResponse
from student_api.services.user_service import user_service

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    status_code=201,
    response_model=CreatedResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Register a user",
)
async def register(
    credentials: Optional[Credentials] = Body(default=None),
    store: DocumentStore = Depends(get_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> CreatedResponse:
    user_id = await user_service.register(store, hasher, credentials)
    return CreatedResponse(message="User registered successfully", id=user_id)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Exchange credentials for a bearer token",
)
async def login(
    credentials: Optional[Credentials] = Body(default=None),
    store: DocumentStore = Depends(get_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> TokenResponse:
    """
    The 401 body is the same whether the email is unknown or the password
    is wrong.
    """
    token = await user_service.login(store, hasher, tokens, credentials)
    return TokenResponse(token=token)
