from __future__ import annotations

from fastapi import APIRouter, Depends

from bankapp.api.deps import get_card_service, get_current_user_id
from bankapp.api.mappers.card_mapper import card_to_response, created_card_to_response
from bankapp.api.schemas.cards import (
    CardCreatedResponse,
    CardCreateRequest,
    CardResponse,
    CardStatusUpdateRequest,
)
from bankapp.api.schemas.common import ApiResponse, MessageResponse
from bankapp.services.card_service import NewCard

router = APIRouter(prefix="/api/cards", tags=["cards"])


@router.get("", response_model=ApiResponse[list[CardResponse]])
def list_cards(user_id: str = Depends(get_current_user_id)) -> ApiResponse[list[CardResponse]]:
    pairs = get_card_service().list_user_cards(user_id)
    return ApiResponse(data=[card_to_response(card, account) for card, account in pairs])


@router.post("", response_model=ApiResponse[CardCreatedResponse], status_code=201)
def create_card(
    payload: CardCreateRequest,
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[CardCreatedResponse]:
    card, account = get_card_service().create_card(
        user_id,
        NewCard(
            account_id=payload.account_id,
            card_type=payload.card_type,
            cardholder_name=payload.cardholder_name,
            expiry_date=payload.expiry_date,
            credit_limit=payload.credit_limit,
        ),
    )
    return ApiResponse(message="Card created successfully", data=created_card_to_response(card, account))


@router.get("/{card_id}", response_model=ApiResponse[CardResponse])
def get_card(card_id: str, user_id: str = Depends(get_current_user_id)) -> ApiResponse[CardResponse]:
    card, account = get_card_service().get_card(card_id, user_id)
    return ApiResponse(data=card_to_response(card, account))


@router.patch("/{card_id}/status", response_model=ApiResponse[CardResponse])
def update_card_status(
    card_id: str,
    payload: CardStatusUpdateRequest,
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[CardResponse]:
    card, account = get_card_service().update_status(card_id, payload.status, user_id)
    return ApiResponse(message="Card status updated successfully", data=card_to_response(card, account))


@router.delete("/{card_id}", response_model=MessageResponse)
def delete_card(card_id: str, user_id: str = Depends(get_current_user_id)) -> MessageResponse:
    get_card_service().delete_card(card_id, user_id)
    return MessageResponse(message="Card deleted successfully")
