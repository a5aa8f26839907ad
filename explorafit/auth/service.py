import logging
import bcrypt
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from explorafit.auth.models import User
from explorafit.shared.config import settings
from explorafit.shared.errors import EmailTaken, InsufficientCredits, InvalidCredentials, UserNotFound, ValidationError

logger = logging.getLogger(__name__)

def hash_password(pw: str) -> str:
    return bcrypt.hashpw(pw.encode(), bcrypt.gensalt()).decode()

def verify_password(pw: str, ph: str) -> bool:
    try: return bcrypt.checkpw(pw.encode(), ph.encode())
    except ValueError: return False

def normalize_email(email: str) -> str:
    return (email or "").strip().lower()

def find_by_email(db: Session, email: str) -> User | None:
    return db.scalars(select(User).where(User.email == normalize_email(email))).first()

def find_by_id(db: Session, user_id: str) -> User | None:
    return db.get(User, user_id)

def create_user(db: Session, email: str, password: str) -> User:
    email = normalize_email(email)
    if not email:
        raise ValidationError("email is required")
    if not password:
        raise ValidationError("password is required")
    if len(password.encode()) > 72:
        raise ValidationError("password must be at most 72 bytes")
    if find_by_email(db, email):
        raise EmailTaken()
    u = User(email=email, password_hash=hash_password(password),
             is_premium=False, credits=settings.STARTING_CREDITS)
    db.add(u)
    try:
        db.commit()
    except IntegrityError:
        # lost a race against a concurrent signup for the same email
        db.rollback()
        raise EmailTaken()
    db.refresh(u)
    logger.info("user signed up id=%s", u.id)
    return u

def authenticate_user(db: Session, email: str, password: str) -> User:
    u = find_by_email(db, email)
    if not u:
        logger.info("login for unknown email=%s", normalize_email(email))
        raise UserNotFound()
    if not verify_password(password, u.password_hash):
        logger.info("login with bad password user=%s", u.id)
        raise InvalidCredentials()
    return u

def debit_credit(db: Session, user_id: str) -> None:
    """Spend one credit with a single conditional UPDATE.

    The balance check lives in the WHERE clause, so two concurrent debits
    against the last credit serialize on the row and only one of them matches.
    Does not commit: the caller owns the transaction.
    """
    res = db.execute(
        update(User)
        .where(User.id == user_id, User.credits > 0)
        .values(credits=User.credits - 1)
        .execution_options(synchronize_session=False)
    )
    if res.rowcount != 1:
        logger.info("debit refused, no credits left user=%s", user_id)
        raise InsufficientCredits()
    logger.debug("debited one credit user=%s", user_id)
