from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from contextlib import asynccontextmanager
from sqlalchemy import text
from primeproperty.config import settings
from primeproperty.database.connection import close_db, engine, init_db
from primeproperty.controllers.auth_controller import router as auth_router
from primeproperty.controllers.property_controller import router as property_router
from primeproperty.controllers.favorite_controller import router as favorite_router
from primeproperty.controllers.message_controller import router as message_router
from primeproperty.controllers.payment_controller import router as payment_router
from primeproperty.controllers.announcement_controller import router as announcement_router
from primeproperty.controllers.admin_controller import router as admin_router
from primeproperty.services.auth_service import seed_admin
import logging
import time

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all incoming requests"""
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        client_ip = request.client.host if request.client else "unknown"

        # Never log a full bearer token
        auth_header = request.headers.get("authorization")
        auth_hint = ""
        if auth_header:
            auth_hint = f" auth={auth_header[:13]}..." if len(auth_header) > 13 else " auth=<short>"

        logger.info(f"Request: {request.method} {request.url.path} from {client_ip}{auth_hint}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(f"Response: {response.status_code} for {request.method} {request.url.path} ({process_time:.3f}s)")

        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Test database connection on startup (non-blocking - don't fail startup)
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection successful")

        await init_db()
        if await seed_admin(settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD, settings.ADMIN_NAME):
            logger.info("Admin account created")
    except Exception as e:
        logger.warning(f"Database initialisation failed on startup: {str(e)}")
        logger.warning("App will continue, but database-dependent features may not work")

    yield

    try:
        await close_db()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error(f"Error closing database: {str(e)}")


app = FastAPI(
    title="PrimeProperty API",
    description="Real estate marketplace: listings, moderation, favorites and messaging",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message},
    )


app.include_router(auth_router)
app.include_router(property_router)
app.include_router(favorite_router)
app.include_router(message_router)
app.include_router(payment_router)
app.include_router(announcement_router)
app.include_router(admin_router)


@app.get("/")
async def root():
    return {"message": "PrimeProperty API", "status": "running"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
