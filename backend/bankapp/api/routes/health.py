from __future__ import annotations

from fastapi import APIRouter

from bankapp.db_base import utcnow

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict:
    return {"status": "ok", "timestamp": utcnow().isoformat()}
