from __future__ import annotations

from fastapi import APIRouter, Depends

from bankapp.api.deps import get_current_user_id, get_transaction_service
from bankapp.api.mappers.account_mapper import account_to_response, entry_to_response
from bankapp.api.schemas.common import ApiResponse
from bankapp.api.schemas.transactions import PostingRequest, PostingResponse
from bankapp.services.transaction_service import PostingResult

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


def _posting_response(result: PostingResult, message: str) -> ApiResponse[PostingResponse]:
    return ApiResponse(
        message=message,
        data=PostingResponse(
            transaction=entry_to_response(result.entry),
            account=account_to_response(result.account),
        ),
    )


@router.post("/deposit", response_model=ApiResponse[PostingResponse])
def deposit(payload: PostingRequest, user_id: str = Depends(get_current_user_id)) -> ApiResponse[PostingResponse]:
    result = get_transaction_service().deposit(
        user_id, payload.account_id, payload.amount, payload.description, card_id=payload.card_id
    )
    return _posting_response(result, "Deposit successful")


@router.post("/withdraw", response_model=ApiResponse[PostingResponse])
def withdraw(payload: PostingRequest, user_id: str = Depends(get_current_user_id)) -> ApiResponse[PostingResponse]:
    result = get_transaction_service().withdraw(
        user_id, payload.account_id, payload.amount, payload.description, card_id=payload.card_id
    )
    return _posting_response(result, "Withdrawal successful")
