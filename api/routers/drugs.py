# File: api/routers/drugs.py

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query

from domain.errors import DataAccessError, DrugNotFoundError
from domain.models import Drug
from domain.repository import DrugRepository
from domain.services.drug_service import DrugService
from infrastructure.db import get_pool
from infrastructure.postgres_repository import PostgresDrugRepository

router = APIRouter(prefix="/api/drugs")

def get_repo() -> DrugRepository:
    return PostgresDrugRepository(get_pool())

def get_drug_service(
    repo: DrugRepository = Depends(get_repo)
) -> DrugService:
    return DrugService(repo)

@router.get(
    "/search",
    response_model=List[Drug],
    summary="Search drugs by generic or synonym name"
)
def search_drugs(
    q: str = Query(..., description="Case-insensitive substring of generic_name or syn_name; may be empty"),
    service: DrugService = Depends(get_drug_service)
) -> List[Drug]:
    try:
        return service.search(q)
    except DataAccessError:
        raise HTTPException(status_code=500, detail="Internal Server Error")

@router.get(
    "/{drug_id}",
    response_model=Drug,
    summary="Get a drug by id"
)
def get_drug_by_id(
    drug_id: int,
    service: DrugService = Depends(get_drug_service)
) -> Drug:
    try:
        return service.get(drug_id)
    except DrugNotFoundError:
        raise HTTPException(status_code=404, detail="Not Found")
    except DataAccessError:
        raise HTTPException(status_code=500, detail="Internal Server Error")
