from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from bankapp.api.deps import get_auth_service, get_current_user_id
from bankapp.api.mappers.user_mapper import user_to_response
from bankapp.api.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from bankapp.api.schemas.common import ApiResponse, MessageResponse
from bankapp.services.auth_service import Registration

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=ApiResponse[AuthResponse], status_code=201)
def register(payload: RegisterRequest) -> ApiResponse[AuthResponse]:
    result = get_auth_service().register(
        Registration(
            email=payload.email,
            password=payload.password,
            first_name=payload.first_name,
            last_name=payload.last_name,
            phone_number=payload.phone_number,
            date_of_birth=payload.date_of_birth,
            address=payload.address,
        )
    )
    return ApiResponse(
        message="User registered successfully",
        data=AuthResponse(user=user_to_response(result.user), token=result.token),
    )


@router.post("/login", response_model=ApiResponse[AuthResponse])
def login(payload: LoginRequest) -> ApiResponse[AuthResponse]:
    result = get_auth_service().login(payload.email.strip().lower(), payload.password)
    return ApiResponse(
        message="Login successful",
        data=AuthResponse(user=user_to_response(result.user), token=result.token),
    )


@router.post("/logout", response_model=MessageResponse)
def logout(user_id: str = Depends(get_current_user_id)) -> MessageResponse:
    # tokens are stateless; the client drops it
    logger.info("User %s logged out", user_id)
    return MessageResponse(message="Logout successful")


@router.get("/me", response_model=ApiResponse[UserResponse])
def me(user_id: str = Depends(get_current_user_id)) -> ApiResponse[UserResponse]:
    user = get_auth_service().verify_user(user_id)
    return ApiResponse(data=user_to_response(user))
