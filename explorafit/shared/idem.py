import json, hashlib, datetime as dt
from fastapi import Header
from sqlalchemy import select, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, Session, mapped_column

from explorafit.shared.db import Base
from explorafit.shared.errors import ValidationError

class IdemRecord(Base):
    __tablename__ = "idempotency_keys"
    __table_args__ = (UniqueConstraint("user_id", "key", name="uq_idem_user_key"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(32), ForeignKey("users.id"), index=True)
    key: Mapped[str] = mapped_column(String(128))
    request_sig: Mapped[str] = mapped_column(String(64))
    route_id: Mapped[str] = mapped_column(String(32), ForeignKey("routes.id"))
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc))

def request_sig(payload: dict) -> str:
    return hashlib.sha256(json.dumps(payload, sort_keys=True, default=str).encode()).hexdigest()

def idem_key_header(
    idem_key: str | None = Header(default=None, alias="Idempotency-Key", max_length=128),
) -> str | None:
    key = (idem_key or "").strip()
    return key or None

def lookup(db: Session, user_id: str, key: str, sig: str) -> IdemRecord | None:
    """Previously recorded result for (user, key), if any.

    Reusing a key for a different request is a client error.
    """
    rec = db.scalars(select(IdemRecord).where(IdemRecord.user_id == user_id, IdemRecord.key == key)).first()
    if rec and rec.request_sig != sig:
        raise ValidationError("idempotency key already used for a different request",
                              details={"code": "idempotency_key_reused"})
    return rec

def record(db: Session, user_id: str, key: str, sig: str, route_id: str) -> None:
    # no commit; lands in the caller's transaction
    db.add(IdemRecord(user_id=user_id, key=key, request_sig=sig, route_id=route_id))
