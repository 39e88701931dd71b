import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

# import your routers
from tradebook.api import admin as admin_router
from tradebook.api import auth as auth_router
from tradebook.api import calculator as calculator_router
from tradebook.api import diary as diary_router
from tradebook.api import goals as goals_router
from tradebook.api import stats as stats_router
from tradebook.api import trades as trades_router
from tradebook.config import config
from tradebook.db.database import Base, engine
import tradebook.models  # noqa: F401  registers every table on Base.metadata

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("tradebook")

app = FastAPI(title="Tradebook API")

# CORS - keep permissive for local dev, lock down in production
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Signed-cookie sessions; the cookie only carries the user id
app.add_middleware(
    SessionMiddleware,
    secret_key=config.SECRET_KEY,
    session_cookie=config.SESSION_COOKIE_NAME,
    max_age=config.SESSION_MAX_AGE,
    same_site="lax",
    https_only=config.SESSION_COOKIE_SECURE,
)

app.include_router(auth_router.router)
app.include_router(trades_router.router)
app.include_router(diary_router.router)
app.include_router(goals_router.router)
app.include_router(stats_router.router)
app.include_router(calculator_router.router)
app.include_router(admin_router.router)


@app.middleware("http")
async def log_api_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    if request.url.path.startswith("/api"):
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %s in %.0fms",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Schema validation failures are client errors: 400, not FastAPI's 422
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation error", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error"},
    )


@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}


@app.on_event("startup")
async def on_startup():
    """
    Create DB tables on startup (development convenience).
    For production use Alembic migrations instead.
    """
    try:
        async with engine.begin() as conn:
            # run_sync will execute the sync create_all on the sync metadata
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured (create_all).")
    except Exception:
        logger.exception("Error creating tables on startup")
        raise
