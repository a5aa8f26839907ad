# explorafit/shared/auth.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import jwt, JWTError  # python-jose[cryptography]

from explorafit.shared.config import settings
from explorafit.shared.errors import ExpiredToken, InvalidToken, Unauthorized

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False, scheme_name="bearerAuth")

def create_access_token(user_id: str, now: Optional[datetime] = None, minutes: Optional[int] = None) -> str:
    now = now or datetime.now(timezone.utc)
    exp = now + timedelta(minutes=minutes or settings.JWT_EXPIRE_MIN)
    payload: Dict[str, Any] = {
        "sub": user_id,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    if settings.JWT_ISS:
        payload["iss"] = settings.JWT_ISS
    if settings.JWT_AUD:
        payload["aud"] = settings.JWT_AUD
    return jwt.encode(payload, settings.require_signing_key(), algorithm=settings.JWT_ALG)

def verify_token(token: str, now: Optional[datetime] = None) -> str:
    """Resolve a session token to the user id it was issued for.

    Depends only on the token, the signing key and ``now``; there is no
    revocation lookup. Raises ``ExpiredToken`` or ``InvalidToken``.
    """
    key = settings.require_signing_key()
    try:
        payload = jwt.decode(
            token,
            key,
            algorithms=[settings.JWT_ALG],
            audience=settings.JWT_AUD,
            issuer=settings.JWT_ISS,
            options={
                "verify_aud": bool(settings.JWT_AUD),
                "verify_iss": bool(settings.JWT_ISS),
                # expiry is checked below against the caller's clock
                "verify_exp": False,
            },
        )
    except JWTError as e:
        raise InvalidToken(f"invalid token: {e}")

    exp = payload.get("exp")
    if not isinstance(exp, (int, float)):
        raise InvalidToken("invalid token: missing exp")
    now = now or datetime.now(timezone.utc)
    if now.timestamp() >= exp:
        raise ExpiredToken()

    sub = payload.get("sub")
    if not sub or not isinstance(sub, str):
        raise InvalidToken("invalid token: missing sub")
    return sub

def _raw_token(creds: HTTPAuthorizationCredentials | None, authorization: str | None) -> str | None:
    if creds and creds.credentials:
        return creds.credentials.strip()
    # the web client sends the bare token without a scheme
    raw = (authorization or "").strip()
    if raw and " " not in raw:
        return raw
    return None

def optional_user_id(
    creds: HTTPAuthorizationCredentials = Depends(bearer),
    authorization: str | None = Header(default=None, include_in_schema=False),
) -> str | None:
    """Identity if a valid token was presented, otherwise anonymous (None)."""
    token = _raw_token(creds, authorization)
    if not token:
        return None
    try:
        return verify_token(token)
    except InvalidToken as e:
        logger.debug("treating request as anonymous: %s", e.code)
        return None

def require_user_id(user_id: str | None = Depends(optional_user_id)) -> str:
    if not user_id:
        raise Unauthorized()
    return user_id
