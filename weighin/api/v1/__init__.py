"""API v1 router aggregation."""

from fastapi import APIRouter

from weighin.api.v1.endpoints import auth, goals, health, partners, users, weights

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, tags=["users"])
api_router.include_router(weights.router, prefix="/weight", tags=["weight"])
api_router.include_router(goals.router, prefix="/goals", tags=["goals"])
api_router.include_router(partners.router, prefix="/partners", tags=["partners"])
