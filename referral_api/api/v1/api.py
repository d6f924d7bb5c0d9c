from fastapi import APIRouter

from .endpoints import referrals


# Create main API router
api_router = APIRouter()

# Include referral endpoints (public access)
api_router.include_router(referrals.router)
