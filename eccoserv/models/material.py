"""
EccoServ - Material Usage Model
Registro de produto químico consumido em uma visita
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, Numeric, ForeignKey

from eccoserv.database import Base


# Catálogo fixo de produtos aceitos nas visitas
MATERIAL_CATALOG = (
    "Hipoclorito de Cálcio (Cloro Granulado)",
    "Hipoclorito de Sódio (Cloro Líquido)",
    "Pastilha de Cloro",
    "Sulfato de Alumínio",
    "Barrilha (Carbonato de Sódio)",
    "Cal Hidratada",
    "Polímero Floculante",
    "Ácido Clorídrico (Ácido Muriático)",
)


class MaterialUsage(Base):
    """Quantidade (em gramas) de um material usada numa visita"""
    __tablename__ = "material_usage"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    visit_id = Column(String(36), ForeignKey("visits.id"), nullable=False, index=True)

    material_type = Column(String(100), nullable=False, index=True)
    quantity_grams = Column(Numeric(12, 2), nullable=False)
    notes = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
