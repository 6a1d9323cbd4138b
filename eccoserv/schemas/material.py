"""
EccoServ - Material Usage Schemas
"""
from decimal import Decimal
from pydantic import AliasChoices, Field
from typing import List, Optional
from datetime import datetime

from .base import CamelModel, Money


class MaterialInput(CamelModel):
    """Item enviado pelo formulário da visita ({type, quantity} ou camelCase completo)"""
    material_type: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("materialType", "material_type", "type"),
    )
    quantity_grams: Decimal = Field(
        ...,
        ge=0,
        decimal_places=2,
        validation_alias=AliasChoices("quantityGrams", "quantity_grams", "quantity"),
    )
    notes: Optional[str] = None


class MaterialsCreate(CamelModel):
    materials: List[MaterialInput]


class MaterialUsageOut(CamelModel):
    id: str
    visit_id: str
    material_type: str
    quantity_grams: Money
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class MaterialConsumptionRow(CamelModel):
    material_type: str
    total_grams: float
    total_kilograms: float
    visit_count: int
    average_per_visit: float
    days_with_usage: int


class MaterialConsumptionReport(CamelModel):
    period: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    consumption: List[MaterialConsumptionRow]
