import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from easybuk.admin.router import router as admin_router
from easybuk.auth.router import router as auth_router
from easybuk.config import Settings
from easybuk.core.middleware import (
    error_envelope_middleware,
    request_id_middleware,
    validation_exception_handler,
)
from easybuk.database import close_db, init_db
from easybuk.notifications.router import router as notifications_router
from easybuk.provider.router import router as provider_router
from easybuk.rate_limit import limiter

logger = logging.getLogger(__name__)


# ── OpenAPI metadata ──────────────────────────────────────────────────────────

_DESCRIPTION = """
## EasyBuk Marketplace API

Backend for the EasyBuk services marketplace, where clients book local
service providers:

* **Authentication**: email/password signup and login, 7-day access and
  30-day refresh tokens delivered as HTTP-only cookies, multi-role accounts
  (client, provider, admin).
* **Email verification**: single-use 24-hour links, resendable.
* **Notifications**: per-user in-app inbox with read/unread state.
* **Provider services**: providers publish and toggle their service listings.
* **Admin**: grant and revoke administrator access, with an audit trail.

### Authentication
Protected endpoints read the `auth-token` cookie, falling back to
```
Authorization: Bearer <access_token>
```

### Error shape
```json
{ "detail": "Human-readable message" }
```
Request validation errors are returned as `400` with the Pydantic error list
under `detail`.
"""

_TAGS_METADATA = [
    {
        "name": "auth",
        "description": (
            "Signup, login, cookie refresh/logout, role management and email "
            "verification."
        ),
    },
    {
        "name": "notifications",
        "description": "The signed-in user's in-app notifications.",
    },
    {
        "name": "provider",
        "description": "Service listings of the signed-in provider.",
    },
    {
        "name": "admin",
        "description": "**Admin only.** Grant and revoke administrator access.",
    },
]


# ── Health schema ─────────────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    status: str
    service: str


# ── App factory ───────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    settings.assert_configured()
    init_db(settings)
    logger.info("EasyBuk API started (env=%s)", settings.env_name)
    yield
    await close_db()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    app = FastAPI(
        title="EasyBuk Marketplace API",
        version="1.0.0",
        description=_DESCRIPTION,
        openapi_tags=_TAGS_METADATA,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Attach rate limiter state before middleware
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Middleware is applied in reverse-registration order (last added = outermost).
    # CORS must be outermost so ALL responses (including 429s) carry CORS headers.
    # request_id wraps the error envelope so 500 bodies and headers carry the id.
    app.add_middleware(SlowAPIMiddleware)
    app.middleware("http")(error_envelope_middleware)
    app.middleware("http")(request_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )

    app.include_router(auth_router, prefix="/api")
    app.include_router(notifications_router, prefix="/api")
    app.include_router(provider_router, prefix="/api")
    app.include_router(admin_router, prefix="/api")

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="easybuk")

    return app


app = create_app()
