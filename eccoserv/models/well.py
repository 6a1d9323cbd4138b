"""
EccoServ - Well Model
"""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, ForeignKey

from eccoserv.database import Base


class WellStatus(str, enum.Enum):
    """Status do poço"""
    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    ATTENTION = "attention"
    INACTIVE = "inactive"
    PROBLEM = "problem"


class Well(Base):
    """Poço de um cliente (ativo atendido nas visitas)"""
    __tablename__ = "wells"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    client_id = Column(String(36), ForeignKey("clients.id"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    type = Column(String(50), nullable=False)  # residential, industrial, agricultural
    location = Column(Text)
    status = Column(String(20), nullable=False, default=WellStatus.ACTIVE.value)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
