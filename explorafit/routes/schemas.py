from datetime import datetime, timezone
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List, Literal

from explorafit.auth.schemas import UserOut

Difficulty = Literal["Easy", "Moderate", "Hard"]

class LatLng(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)

class RouteCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    difficulty: Difficulty
    description: Optional[str] = None
    landmarks: Optional[str] = None
    city: Optional[str] = Field(default=None, max_length=200)
    # what the client computed; the stored distance is always recomputed
    distance_km_hint: Optional[float] = Field(default=None, ge=0)
    polyline: List[LatLng] = Field(default_factory=list)

    def metadata(self) -> dict:
        return {
            "name": self.name.strip(),
            "difficulty": self.difficulty,
            "description": self.description or None,
            "landmarks": self.landmarks or None,
            "city": self.city or None,
        }

    def points(self) -> list[dict]:
        return [{"lat": p.lat, "lng": p.lng} for p in self.polyline]

class RouteSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    difficulty: str
    distance_km: float
    city: Optional[str] = None
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _as_utc(cls, v: datetime) -> datetime:
        # SQLite drops the offset on reload; stored values are always UTC
        return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v

class RouteOut(RouteSummary):
    description: Optional[str] = None
    landmarks: Optional[str] = None
    polyline: List[LatLng]

class RouteList(BaseModel):
    ok: bool = True
    items: List[RouteSummary]

class RouteCreated(BaseModel):
    ok: bool = True
    route: RouteOut
    user: UserOut

class RouteDetail(BaseModel):
    ok: bool = True
    route: RouteOut
