from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Float, Integer, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from explorafit.shared.db import Base
import uuid, json

def _id32() -> str:
    return uuid.uuid4().hex  # 32 chars

DIFFICULTIES = ("Easy", "Moderate", "Hard")

class Route(Base):
    __tablename__ = "routes"
    # insertion order; tie-breaker when created_at collides
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(32), unique=True, index=True, default=_id32)
    owner_id: Mapped[str] = mapped_column(String(32), ForeignKey("users.id"), index=True)
    name: Mapped[str] = mapped_column(String(200))
    difficulty: Mapped[str] = mapped_column(String(16))  # Easy|Moderate|Hard
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    landmarks: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(200), nullable=True)
    distance_km: Mapped[float] = mapped_column(Float, default=0.0)
    # list[{"lat": float, "lng": float}] stored as JSON text
    polyline_json: Mapped[str] = mapped_column(Text, default="[]")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)

    @property
    def polyline(self) -> list[dict]:
        return json.loads(self.polyline_json or "[]")

    @polyline.setter
    def polyline(self, val: list[dict]):
        self.polyline_json = json.dumps(val or [])
