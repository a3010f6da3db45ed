"""Versioned liveness probe for clients that only route ``/api/v1``."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/ping")
async def ping(request: Request) -> dict[str, str]:
    """Answer with the request id so callers can correlate it with server logs."""
    return {"ping": "pong", "request_id": request.state.request_id}
