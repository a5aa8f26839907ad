from datetime import datetime, timezone
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, DateTime, Boolean, Integer, CheckConstraint
from explorafit.shared.config import settings
from explorafit.shared.db import Base
import uuid

def _id32() -> str:
    return uuid.uuid4().hex

class User(Base):
    __tablename__ = "users"
    __table_args__ = (CheckConstraint("credits >= 0", name="ck_users_credits_non_negative"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_id32)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(128))
    is_premium: Mapped[bool] = mapped_column(Boolean, default=False)
    # written only by the metering coordinator (conditional decrement)
    credits: Mapped[int] = mapped_column(Integer, default=lambda: settings.STARTING_CREDITS)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def public(self) -> dict:
        return {"id": self.id, "email": self.email, "is_premium": self.is_premium, "credits": self.credits}
