from sqlalchemy import Boolean, Column, DateTime

from governance_service.database import utcnow


class AuditColumnsMixin:
    """Timestamps and the soft-delete flag shared by every governed record."""

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    deleted = Column(Boolean, default=False, nullable=False, index=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
