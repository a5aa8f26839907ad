# explorafit/shared/config.py
from pydantic import BaseModel
import os

class Settings(BaseModel):
    ENV: str = os.getenv("ENV", "dev")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # storage; empty -> sqlite file under ./storage/
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    DB_BUSY_TIMEOUT_S: float = float(os.getenv("DB_BUSY_TIMEOUT_S", "30"))

    # metering
    STARTING_CREDITS: int = int(os.getenv("STARTING_CREDITS", "3"))

    # JWT signing; the key is required and deliberately has no default
    JWT_KEY: str = os.getenv("JWT_KEY", "")
    JWT_ALG: str = os.getenv("JWT_ALG", "HS256")
    JWT_ISS: str | None = os.getenv("JWT_ISS")
    JWT_AUD: str | None = os.getenv("JWT_AUD")
    JWT_EXPIRE_MIN: int = int(os.getenv("JWT_EXPIRE_MIN", str(7 * 24 * 60)))

    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    def require_signing_key(self) -> str:
        key = (self.JWT_KEY or "").strip()
        if not key:
            raise RuntimeError("JWT_KEY is not set; refusing to sign or verify session tokens")
        return key

    def cors_origins(self) -> list[str]:
        raw = (self.CORS_ORIGINS or "*").strip()
        if raw == "*":
            return ["*"]
        return [o.strip().rstrip("/") for o in raw.split(",") if o.strip()]

settings = Settings()
