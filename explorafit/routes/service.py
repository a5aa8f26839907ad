import logging
from sqlalchemy import select, desc, asc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from explorafit.auth.models import User
from explorafit.auth.service import find_by_id
from explorafit.routes.distance import compute_length
from explorafit.routes.models import Route
from explorafit.routes.schemas import RouteCreate
from explorafit.shared import idem
from explorafit.shared.errors import InsufficientCredits, RouteNotFound, StorageError, UserNotFound, ValidationError
from explorafit.shared.metering import run_metered

logger = logging.getLogger(__name__)

def list_by_owner(db: Session, user_id: str) -> list[Route]:
    stmt = (
        select(Route)
        .where(Route.owner_id == user_id)
        .order_by(desc(Route.created_at), asc(Route.seq))
    )
    return list(db.scalars(stmt).all())

def get_route(db: Session, user_id: str, route_id: str) -> Route | None:
    route = db.scalars(select(Route).where(Route.id == route_id)).first()
    if not route or route.owner_id != user_id:
        return None
    return route

def insert_route(db: Session, owner_id: str, metadata: dict, distance_km: float, polyline: list[dict]) -> Route:
    # id, seq and created_at are always assigned here, never taken from the caller
    route = Route(
        owner_id=owner_id,
        name=metadata["name"],
        difficulty=metadata["difficulty"],
        description=metadata.get("description"),
        landmarks=metadata.get("landmarks"),
        city=metadata.get("city"),
        distance_km=distance_km,
    )
    route.polyline = polyline
    db.add(route)
    db.flush()
    return route

def _replay(db: Session, user_id: str, rec: idem.IdemRecord) -> tuple[Route, User]:
    route = get_route(db, user_id, rec.route_id)
    user = find_by_id(db, user_id)
    if not user:
        raise UserNotFound()
    if not route:
        raise RouteNotFound()
    logger.info("idempotent replay user=%s route=%s", user_id, route.id)
    return route, user

def create_route(db: Session, user_id: str, payload: RouteCreate, idem_key: str | None = None) -> tuple[Route, User]:
    """Create a route, spending one credit unless the owner is premium.

    Returns the new route and the owner's post-debit state. With an
    ``idem_key``, a repeat of the same request returns the first result
    without spending again.
    """
    points = payload.points()
    if len(points) < 2:
        raise ValidationError("a route needs at least two points", details={"points": len(points)})

    sig = None
    if idem_key:
        sig = idem.request_sig(payload.model_dump(exclude={"distance_km_hint"}))
        rec = idem.lookup(db, user_id, idem_key, sig)
        if rec:
            return _replay(db, user_id, rec)

    distance_km = compute_length(points)
    if payload.distance_km_hint is not None and abs(payload.distance_km_hint - distance_km) > 0.01:
        logger.debug("client distance %.2f differs from computed %.2f user=%s",
                     payload.distance_km_hint, distance_km, user_id)

    def _produce(db: Session, user: User) -> Route:
        route = insert_route(db, user.id, payload.metadata(), distance_km, points)
        if idem_key:
            idem.record(db, user.id, idem_key, sig, route.id)
        return route

    try:
        route, user = run_metered(db, user_id, _produce)
    except (StorageError, InsufficientCredits) as e:
        # a concurrent request with the same key won the race, either on the
        # unique key or on the last credit; hand back its result
        raced = isinstance(e, InsufficientCredits) or isinstance(e.__cause__, IntegrityError)
        if idem_key and raced:
            rec = idem.lookup(db, user_id, idem_key, sig)
            if rec:
                return _replay(db, user_id, rec)
        raise

    logger.info("route created user=%s route=%s distance_km=%.2f credits_left=%s",
                user.id, route.id, route.distance_km, user.credits)
    return route, user
