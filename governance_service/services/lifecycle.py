"""Soft-delete / hard-delete lifecycle rules for governed records.

A record is *active* until it is soft-deleted. Soft deletion is reversible through
:func:`restore`. A purge (hard delete) is only allowed for a record that is already
soft-deleted and whose grace period has elapsed.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Mapping

from governance_service.database import utcnow
from governance_service.exceptions import BusinessRuleViolationError


def as_utc(value: datetime) -> datetime:
    # sqlite hands back naive datetimes; they were written as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_deleted(record: Any) -> bool:
    if isinstance(record, Mapping):
        return bool(record.get("deleted"))
    return bool(getattr(record, "deleted", False))


def count_active(records: Iterable[Any]) -> int:
    return sum(1 for record in records if not is_deleted(record))


def mark_deleted(record: Any, when: datetime | None = None) -> datetime:
    stamp = when or utcnow()
    record.deleted = True
    record.deleted_at = stamp
    return stamp


def restore(record: Any) -> None:
    if not record.deleted:
        raise BusinessRuleViolationError("User is not deleted and cannot be restored")
    record.deleted = False
    record.deleted_at = None


def ensure_purgeable(record: Any, *, grace_period_hours: int, now: datetime | None = None) -> None:
    if not record.deleted:
        raise BusinessRuleViolationError("User must be soft-deleted before hard deletion")
    if record.deleted_at is None:
        raise BusinessRuleViolationError("User deletion timestamp is missing")

    if grace_period_hours <= 0:
        return
    grace_end = as_utc(record.deleted_at) + timedelta(hours=grace_period_hours)
    if as_utc(now or utcnow()) < grace_end:
        raise BusinessRuleViolationError(
            f"Grace period of {grace_period_hours} hours has not elapsed since soft deletion"
        )


def append_audit(record: Any, action: str, details: str, performed_by: str = "SYSTEM") -> None:
    entry = {
        "action": action,
        "timestamp": utcnow().isoformat(),
        "details": details,
        "performedBy": performed_by,
    }
    # Reassign so the JSON column registers the change.
    record.audit_trail = list(record.audit_trail or []) + [entry]
