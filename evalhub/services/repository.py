"""
Persistence helpers shared by the entity services
"""
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from evalhub.errors import DuplicateKey, ValidationFailed

logger = logging.getLogger(__name__)


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when an IntegrityError came from a unique index"""
    if getattr(exc.orig, "pgcode", None) == "23505":
        return True
    text = str(exc.orig).lower()
    return "unique" in text or "duplicate" in text


def commit(db: Session, duplicate_message: str):
    """
    Commit the session, translating unique-index violations

    Raises:
        DuplicateKey: a unique constraint rejected the write
        ValidationFailed: any other integrity failure
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if is_unique_violation(e):
            logger.warning(f"Duplicate key rejected: {duplicate_message}")
            raise DuplicateKey(duplicate_message) from e
        raise ValidationFailed("Invalid data") from e
