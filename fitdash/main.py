import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from fitdash.config import settings
from fitdash.core.rate_limit import limiter
from fitdash.modules.auth import routes as auth_routes
from fitdash.modules.profiles import routes as profiles_routes
from fitdash.modules.gyms import routes as gyms_routes
from fitdash.modules.checkins import routes as checkins_routes
from fitdash.modules.workouts import routes as workouts_routes
from fitdash.modules.leaderboard import routes as leaderboard_routes
from fitdash.modules.partners import routes as partners_routes
from fitdash.modules.rewards import routes as rewards_routes
from fitdash.modules.exercises import routes as exercises_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
FEATURE_ROUTES = (
    auth_routes,
    profiles_routes,
    gyms_routes,
    checkins_routes,
    workouts_routes,
    leaderboard_routes,
    partners_routes,
    rewards_routes,
    exercises_routes,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("fitdash starting (%s), %d feature routers under %s", settings.environment, len(FEATURE_ROUTES), API_PREFIX)
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning("SUPABASE_URL or SUPABASE_KEY is not set; database calls will fail")
    if not settings.supabase_service_role_key:
        logger.warning("SUPABASE_SERVICE_ROLE_KEY is not set; leaderboards only see rows the caller may read")
    if not settings.ai_gateway_api_key:
        logger.warning("AI_GATEWAY_API_KEY is not set; %s/suggest-exercises will answer 500", API_PREFIX)
    yield
    logger.info("fitdash shutting down")


app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
    lifespan=lifespan,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for module in FEATURE_ROUTES:
    app.include_router(module.router, prefix=API_PREFIX)


@app.get("/")
async def root():
    return {"message": "Welcome to fitdash", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe"""
    return {"status": "ready"}
