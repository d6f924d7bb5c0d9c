"""Health check endpoint."""

from fastapi import APIRouter, Request
from sqlalchemy import select

from ....deps import SessionDep
from ..rate_limit import limiter, current_rate_limit

router = APIRouter(tags=["health"])


@router.get("/healthz")
@limiter.limit(current_rate_limit)
async def healthz(request: Request, sess: SessionDep):
    """Report whether the database answers a trivial query."""
    status = {"db": "ok"}

    try:
        await sess.scalar(select(1))
    except Exception:
        status["db"] = "error"

    return status
