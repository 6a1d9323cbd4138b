"""
EccoServ - Well Schemas
"""
from pydantic import Field
from typing import Annotated, Optional
from datetime import datetime

from eccoserv.models import WellStatus
from .base import CamelModel, lenient_enum


class WellCreate(CamelModel):
    client_id: str
    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=50)
    location: Optional[str] = None
    status: WellStatus = WellStatus.ACTIVE


class WellStatusUpdate(CamelModel):
    status: WellStatus


class WellOut(CamelModel):
    id: str
    client_id: str
    name: str
    type: str
    location: Optional[str] = None
    status: Annotated[WellStatus, lenient_enum(WellStatus, WellStatus.ACTIVE)]
    created_at: Optional[datetime] = None
