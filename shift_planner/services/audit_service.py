"""Audit trail service."""
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from datetime import date, datetime, time
from typing import Any, Dict, List, Optional
from enum import Enum
import logging
import uuid

from shift_planner.models.audit_log import AuditLog


logger = logging.getLogger(__name__)


def _jsonable(value: Any) -> Any:
    """Convert audit details into JSON-serializable values."""
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_jsonable(item) for item in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return value


class AuditService:
    """Service for recording and reading audit events."""

    def __init__(self, db: Session):
        """
        Initialize audit service.

        Args:
            db: Database session
        """
        self.db = db

    def record(
        self,
        actor_id: Optional[str],
        action: str,
        entity_type: str,
        entity_id: str,
        details: Optional[Dict[str, Any]] = None
    ) -> Optional[AuditLog]:
        """
        Record an audit event.

        Failures are logged and swallowed so they never fail or roll back
        the operation that triggered them.

        Returns:
            The stored AuditLog, or None if writing failed
        """
        entry = AuditLog(
            id=str(uuid.uuid4()),
            user_id=actor_id,
            action=action,
            entity_type=entity_type,
            entity_id=str(entity_id),
            details=_jsonable(details or {}),
            created_at=datetime.utcnow()
        )
        try:
            self.db.add(entry)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to write audit log {action} on {entity_type}:{entity_id}: {str(e)}")
            return None

        logger.debug(f"Audit: {action} on {entity_type}:{entity_id}")
        return entry

    def find_by_entity(self, entity_type: str, entity_id: str) -> List[AuditLog]:
        return self.db.query(AuditLog).filter(
            AuditLog.entity_type == entity_type,
            AuditLog.entity_id == entity_id
        ).order_by(AuditLog.created_at.desc()).all()

    def find_by_user(self, user_id: str, limit: int = 50) -> List[AuditLog]:
        return self.db.query(AuditLog).filter(
            AuditLog.user_id == user_id
        ).order_by(AuditLog.created_at.desc()).limit(limit).all()
