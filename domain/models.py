# File: domain/models.py

from typing import List, Optional
from pydantic import BaseModel, Field

class DrugCategory(BaseModel):
    id:        int
    code:      str
    name:      str
    level:     int = Field(..., ge=1, le=4)
    parent_id: Optional[int] = None

class Drug(BaseModel):
    id:              int
    category_id:     Optional[int] = None
    generic_name:    str
    syn_name:        Optional[str] = None
    detail:          Optional[str] = None
    drug_type:       Optional[str] = None
    dosage_forms:    List[str] = Field(default_factory=list)
    ed_level:        Optional[str] = None
    recommendations: Optional[str] = None
    conditions:      Optional[str] = None
    warnings:        Optional[str] = None
    notes:           Optional[str] = None
    footnote:        Optional[str] = None
    source_code:     Optional[str] = None

class NewDrug(BaseModel):
    """A drug row as produced by the seeder, before the database assigns an id."""
    category_id:     Optional[int] = None
    generic_name:    str = Field(..., min_length=1)
    syn_name:        Optional[str] = None
    detail:          Optional[str] = None
    drug_type:       Optional[str] = None
    dosage_forms:    List[str] = Field(default_factory=list)
    ed_level:        Optional[str] = None
    recommendations: Optional[str] = None
    conditions:      Optional[str] = None
    warnings:        Optional[str] = None
    notes:           Optional[str] = None
    footnote:        Optional[str] = None
    source_code:     Optional[str] = None

class HealthResponse(BaseModel):
    status: str = "OK"

class SeedSummary(BaseModel):
    rows_read:           int = Field(0, ge=0)
    categories_upserted: int = Field(0, ge=0)
    drugs_inserted:      int = Field(0, ge=0)
