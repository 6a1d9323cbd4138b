"""
EccoServ - User / Client / Provider Models
Identidade (User) e perfis 1:1 de cliente e prestador
"""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, ForeignKey, JSON

from eccoserv.database import Base


class UserType(str, enum.Enum):
    """Tipos de usuário"""
    CLIENT = "client"
    PROVIDER = "provider"
    ADMIN = "admin"


class User(Base):
    """Identidade raiz; possui no máximo um perfil Client ou Provider"""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    user_type = Column(String(20), nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Client(Base):
    """Perfil de cliente (dono de poços)"""
    __tablename__ = "clients"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False, index=True)

    address = Column(Text)
    phone = Column(String(30))

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Provider(Base):
    """Perfil de prestador (técnico de manutenção)"""
    __tablename__ = "providers"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False, index=True)

    specialties = Column(JSON, default=list)
    phone = Column(String(30))

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
