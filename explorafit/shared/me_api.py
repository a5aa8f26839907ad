# explorafit/shared/me_api.py
from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from explorafit.shared.db import get_db
from explorafit.shared.auth import require_user_id
from explorafit.shared.errors import UserNotFound
from explorafit.shared.http import ok
from explorafit.shared.metering import is_metered
from explorafit.auth.service import find_by_id
from explorafit.routes.models import Route

router = APIRouter(prefix="/me", tags=["Me"])

@router.get("/credits")
def my_credits(user_id: str = Depends(require_user_id), db: Session = Depends(get_db)):
    user = find_by_id(db, user_id)
    if not user:
        raise UserNotFound()
    route_count = db.scalar(select(func.count()).select_from(Route).where(Route.owner_id == user.id))
    return ok(
        user=user.public(),
        credits=user.credits,
        metered=is_metered(user),
        route_count=route_count or 0,
    )
