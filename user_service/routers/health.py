import os

from fastapi import APIRouter

from user_service.models.schemas import HealthResponse
from user_service.settings import APP_VERSION

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health_check():
    """Liveness probe."""
    return {
        "message": "Server is healthy",
        "version": APP_VERSION,
        "pid": os.getpid(),
    }
