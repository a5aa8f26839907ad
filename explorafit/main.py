import logging

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.openapi.utils import get_openapi
from sqlalchemy.exc import SQLAlchemyError

from explorafit.shared.config import settings
from explorafit.shared.db import init_db
from explorafit.shared.auth import optional_user_id
from explorafit.shared.errors import AppError
from explorafit.shared.http import app_error_handler, ok, request_validation_handler, storage_error_handler

# Routers Import
from explorafit.auth.api import router as auth_router
from explorafit.routes.api import router as routes_router
from explorafit.shared.me_api import router as me_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

TAGS_METADATA = [
    {"name": "Auth", "description": "Sign up, log in, session tokens"},
    {"name": "Routes", "description": "Create (credit-metered) and list cycling routes"},
    {"name": "Me", "description": "Current user's credit balance"},
    {"name": "Health", "description": "Service health"},
]

PUBLIC_PATHS = ["/auth/signup", "/auth/login", "/auth/token", "/healthz", "/ping"]

app = FastAPI(
    title="ExploraFit API",
    version="0.1.0",
    description="Cycling routes with per-user credit metering.",
    openapi_tags=TAGS_METADATA,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=settings.cors_origins() != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(SQLAlchemyError, storage_error_handler)

# ---- DEV-ONLY error handler (helps you see real errors in Swagger) ----
if settings.ENV == "dev":
    @app.exception_handler(Exception)
    async def _dev_ex_handler(request: Request, exc: Exception):
        logger.exception("unhandled error on %s", request.url.path)
        return JSONResponse(status_code=500, content={"ok": False, "error": {"code": "internal", "message": str(exc)}})

# ----------------------------------------------------------------------


@app.on_event("startup")
def _startup():
    # fail fast: no signing key, no service
    settings.require_signing_key()
    init_db()
    logger.info("explorafit api started env=%s", settings.ENV)

@app.get("/healthz", tags=["Health"])
def healthz():
    return ok()

@app.get("/ping", tags=["Health"])
def ping(user_id: str | None = Depends(optional_user_id)):
    # public; identity is optional here
    return ok(message="Pong", user_id=user_id)

# --- Custom OpenAPI: add bearerAuth + default security for non-public routes ---
def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )
    schema.setdefault("components", {}).setdefault("securitySchemes", {})
    schema["components"]["securitySchemes"]["bearerAuth"] = {
        "type": "http",
        "scheme": "bearer",
        "bearerFormat": "JWT",
    }
    for path, ops in schema.get("paths", {}).items():
        if path in PUBLIC_PATHS:
            continue
        for op in ops.values():
            op.setdefault("security", [{"bearerAuth": []}])
    app.openapi_schema = schema
    return app.openapi_schema

# Routers
app.include_router(auth_router)
app.include_router(routes_router)
app.include_router(me_router)

app.openapi = custom_openapi
