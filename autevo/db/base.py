# autevo/db/base.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class BaseModel(Base):
    """Abstract base model with common fields"""
    __abstract__ = True

    id = Column(String(36), primary_key=True, default=new_id, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class TenantScopedMixin:
    """Marker for rows that belong to exactly one tenant"""
    __tenant_scoped__ = True
