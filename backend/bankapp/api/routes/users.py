from __future__ import annotations

from fastapi import APIRouter, Depends

from bankapp.api.deps import get_current_user_id, get_user_service
from bankapp.api.mappers.user_mapper import user_to_response
from bankapp.api.schemas.auth import UserResponse
from bankapp.api.schemas.common import ApiResponse, MessageResponse
from bankapp.api.schemas.users import ChangePasswordRequest, UpdateProfileRequest

router = APIRouter(prefix="/api/user", tags=["user"])


@router.get("/profile", response_model=ApiResponse[UserResponse])
def get_profile(user_id: str = Depends(get_current_user_id)) -> ApiResponse[UserResponse]:
    return ApiResponse(data=user_to_response(get_user_service().get_profile(user_id)))


@router.put("/profile", response_model=ApiResponse[UserResponse])
def update_profile(
    payload: UpdateProfileRequest,
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[UserResponse]:
    user = get_user_service().update_profile(user_id, payload.model_dump(exclude_unset=True))
    return ApiResponse(message="Profile updated successfully", data=user_to_response(user))


@router.put("/password", response_model=MessageResponse)
def change_password(
    payload: ChangePasswordRequest,
    user_id: str = Depends(get_current_user_id),
) -> MessageResponse:
    get_user_service().change_password(user_id, payload.current_password, payload.new_password)
    return MessageResponse(message="Password changed successfully")
