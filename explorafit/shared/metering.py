# explorafit/shared/metering.py
"""Spend-then-produce coordination for credit-metered actions.

A metered action debits one credit from a non-premium user and produces an
artifact. Both happen inside one database transaction: the debit is a
conditional UPDATE (see ``debit_credit``), the artifact is flushed in the same
transaction, and a single commit makes both durable. Any failure rolls the
whole unit back, so a committed debit without its artifact cannot exist.
"""
import logging
from typing import Callable, Tuple, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from explorafit.auth.models import User
from explorafit.auth.service import debit_credit
from explorafit.shared.errors import AppError, StorageError, UserNotFound

logger = logging.getLogger(__name__)

T = TypeVar("T")

def is_metered(user: User) -> bool:
    return not user.is_premium

def run_metered(db: Session, user_id: str, produce: Callable[[Session, User], T]) -> Tuple[T, User]:
    """Debit (unless premium), produce, commit; or roll everything back.

    ``produce`` must only add/flush through ``db`` and never commit.
    Returns the artifact and the refreshed user.
    """
    try:
        # re-read the row; a stale identity-map copy could carry an old premium flag
        user = db.get(User, user_id, populate_existing=True)
        if not user:
            raise UserNotFound()
        if is_metered(user):
            debit_credit(db, user.id)
        artifact = produce(db, user)
        db.flush()
        db.commit()
    except AppError:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        logger.warning("metered action hit a constraint user=%s: %s", user_id, e.orig)
        raise StorageError() from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("metered action failed in storage user=%s", user_id)
        raise StorageError() from e
    except Exception:
        db.rollback()
        raise

    db.refresh(user)
    return artifact, user
