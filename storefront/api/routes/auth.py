"""Signup and login endpoints for the Storefront API."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from storefront.api.dependencies import get_auth_service
from storefront.api.schemas import (
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
)
from storefront.services.auth import AuthService

# Configure module logger
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post("/signup", response_model=SignupResponse)
def signup(
    payload: Optional[SignupRequest] = None,
    auth: AuthService = Depends(get_auth_service),
) -> SignupResponse:
    """Register a new user.

    Example:
        POST /auth/signup {"name": "Ann", "email": "ann@example.com", "password": "pw"}
        Returns the new user without its password.
    """
    payload = payload or SignupRequest()
    user = auth.signup(payload.name, payload.email, payload.password)
    return SignupResponse(message="Signup success", user=user)


@router.post("/login", response_model=LoginResponse)
def login(
    payload: Optional[LoginRequest] = None,
    auth: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """Check credentials and return an opaque session token."""
    payload = payload or LoginRequest()
    token, user = auth.login(payload.email, payload.password)
    return LoginResponse(message="Login success", token=token, user=user)
