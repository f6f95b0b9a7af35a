import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import models  # noqa: F401
from .config import ALLOWED_ORIGINS, RATE_LIMIT_ENABLED, SECURITY_HEADERS_ENABLED
from .database import Base, SessionLocal, engine
from .domain.bookings.router import router as bookings_router
from .domain.bookings.router import vendor_router as vendor_bookings_router
from .domain.favorites.router import router as favorites_router
from .domain.onboarding.router import router as onboarding_router
from .domain.reviews.router import router as reviews_router
from .domain.settings.router import router as settings_router
from .domain.users.router import router as users_router
from .domain.vendors.router import locations_router
from .domain.vendors.router import router as vendors_router
from .routes.auth import router as auth_router
from .security_headers import SecurityHeadersMiddleware
from .seed import seed_database

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")
            raise

    db = SessionLocal()
    try:
        seed_database(db)
    finally:
        db.close()

    if RATE_LIMIT_ENABLED:
        try:
            from .rate_limiter import get_redis_client

            get_redis_client()  # Connection test
            logger.info("Redis connection established")
        except Exception as e:
            logger.warning(f"Redis connection failed - rate limited endpoints will answer 503: {e}")

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="ShuvoDin API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log and return 422 validation errors in FastAPI's usual shape"""
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


if SECURITY_HEADERS_ENABLED:
    app.add_middleware(
        SecurityHeadersMiddleware, exclude_paths=["/health", "/docs", "/openapi.json"]
    )
    logger.info("Security headers enabled")
else:
    logger.warning("Security headers DISABLED - only use in development!")

logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    expose_headers=["X-2FA-Required", "X-Verification-Required", "Content-Disposition"],
)

# Fixed /vendors/... prefixes must be registered before /vendors/{slug}
app.include_router(auth_router)
app.include_router(onboarding_router)
app.include_router(vendor_bookings_router)
app.include_router(vendors_router)
app.include_router(locations_router)
app.include_router(bookings_router)
app.include_router(favorites_router)
app.include_router(reviews_router)
app.include_router(users_router)
app.include_router(settings_router)


@app.get("/")
def root():
    return {"message": "ShuvoDin API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
