"""Routes API / API routes."""

from fastapi import APIRouter

from vehicle_log.api import (
    log_records,
    users,
    vehicles,
)

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(vehicles.router, prefix="/vehicles", tags=["vehicles"])
api_router.include_router(log_records.router, prefix="/log_records", tags=["log_records"])
