"""
EccoServ - Visit / Scheduled Visit Schemas
"""
from pydantic import BeforeValidator, ConfigDict, Field
from typing import Annotated, List, Optional
from datetime import datetime

from eccoserv.models import VisitType, VisitStatus, ScheduledVisitStatus
from .base import CamelModel, StrList, UtcDateTime, lenient_enum
from .material import MaterialInput


def _blank_to_none(value):
    # Campos opcionais chegam como "" quando vêm de multipart
    if isinstance(value, str) and not value.strip():
        return None
    return value


OptionalDateTime = Annotated[Optional[UtcDateTime], BeforeValidator(_blank_to_none)]


class VisitCreate(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    well_id: str = Field(..., min_length=1)
    provider_id: str = Field(..., min_length=1)
    visit_date: UtcDateTime
    service_type: str = Field(..., min_length=1, max_length=100)
    visit_type: VisitType
    next_visit_date: OptionalDateTime = None
    observations: str = Field(..., min_length=1)
    status: VisitStatus = VisitStatus.PENDING
    materials: List[MaterialInput] = Field(default_factory=list)


class VisitStatusUpdate(CamelModel):
    status: VisitStatus


class ScheduledVisitCreate(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    well_id: str = Field(..., min_length=1)
    provider_id: str = Field(..., min_length=1)
    scheduled_date: UtcDateTime
    service_type: str = Field(..., min_length=1, max_length=100)
    notes: Optional[str] = None


class ScheduledVisitStatusUpdate(CamelModel):
    status: ScheduledVisitStatus


class VisitOut(CamelModel):
    id: str
    well_id: str
    provider_id: str
    visit_date: datetime
    service_type: str
    visit_type: Annotated[VisitType, lenient_enum(VisitType, VisitType.UNIQUE)]
    next_visit_date: Optional[datetime] = None
    observations: str
    status: Annotated[VisitStatus, lenient_enum(VisitStatus, VisitStatus.PENDING)]
    photos: StrList = Field(default_factory=list)
    documents: StrList = Field(default_factory=list)
    created_at: Optional[datetime] = None


class ScheduledVisitOut(CamelModel):
    id: str
    well_id: str
    provider_id: str
    scheduled_date: datetime
    service_type: str
    status: Annotated[ScheduledVisitStatus, lenient_enum(ScheduledVisitStatus, ScheduledVisitStatus.SCHEDULED)]
    notes: Optional[str] = None
    created_from_visit_id: Optional[str] = None
    created_at: Optional[datetime] = None
