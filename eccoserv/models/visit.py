"""
EccoServ - Visit Models
Visitas realizadas e visitas agendadas
"""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, ForeignKey, JSON

from eccoserv.database import Base


class VisitType(str, enum.Enum):
    UNIQUE = "unique"
    PERIODIC = "periodic"


class VisitStatus(str, enum.Enum):
    """Status da visita"""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ScheduledVisitStatus(str, enum.Enum):
    """Status do agendamento"""
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Visit(Base):
    """Visita de manutenção feita por um prestador em um poço"""
    __tablename__ = "visits"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    well_id = Column(String(36), ForeignKey("wells.id"), nullable=False, index=True)
    provider_id = Column(String(36), ForeignKey("providers.id"), nullable=False, index=True)

    visit_date = Column(DateTime, nullable=False)
    service_type = Column(String(100), nullable=False)
    visit_type = Column(String(20), nullable=False, default=VisitType.UNIQUE.value)
    next_visit_date = Column(DateTime)
    observations = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default=VisitStatus.PENDING.value)

    # Nomes dos arquivos salvos em UPLOAD_DIR
    photos = Column(JSON, default=list)
    documents = Column(JSON, default=list)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class ScheduledVisit(Base):
    """Visita futura, manual ou gerada a partir de uma visita periódica"""
    __tablename__ = "scheduled_visits"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    well_id = Column(String(36), ForeignKey("wells.id"), nullable=False, index=True)
    provider_id = Column(String(36), ForeignKey("providers.id"), nullable=False, index=True)

    scheduled_date = Column(DateTime, nullable=False)
    service_type = Column(String(100), nullable=False)
    status = Column(String(20), nullable=False, default=ScheduledVisitStatus.SCHEDULED.value)
    notes = Column(Text)

    created_from_visit_id = Column(String(36), ForeignKey("visits.id"), index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
