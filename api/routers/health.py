# File: api/routers/health.py

from fastapi import APIRouter

from domain.models import HealthResponse
from domain.services.drug_service import DrugService

router = APIRouter()

@router.get("/", response_model=HealthResponse, summary="Health check")
def health_check() -> HealthResponse:
    return DrugService.health()
