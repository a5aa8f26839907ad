from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from explorafit.shared.db import get_db
from explorafit.shared.auth import require_user_id
from explorafit.shared.errors import RouteNotFound
from explorafit.shared.idem import idem_key_header
from explorafit.routes.schemas import RouteCreate, RouteCreated, RouteDetail, RouteList
from explorafit.routes.service import create_route, get_route, list_by_owner

router = APIRouter(prefix="/routes", tags=["Routes"])

@router.get("", response_model=RouteList)
def api_list_routes(user_id: str = Depends(require_user_id), db: Session = Depends(get_db)):
    return {"ok": True, "items": list_by_owner(db, user_id)}

@router.post("", response_model=RouteCreated, status_code=201)
def api_create_route(
    payload: RouteCreate,
    user_id: str = Depends(require_user_id),
    idem_key: str | None = Depends(idem_key_header),
    db: Session = Depends(get_db),
):
    route, user = create_route(db, user_id, payload, idem_key=idem_key)
    return {"ok": True, "route": route, "user": user}

@router.get("/{route_id}", response_model=RouteDetail)
def api_get_route(route_id: str, user_id: str = Depends(require_user_id), db: Session = Depends(get_db)):
    route = get_route(db, user_id, route_id)
    if not route:
        raise RouteNotFound()
    return {"ok": True, "route": route}
