from contextlib import asynccontextmanager
from datetime import datetime
import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dotenv import load_dotenv

load_dotenv()

from .core.config import settings
from .core.exceptions import (
    FellowshipException,
    fellowship_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
)
from .api.middleware import LoggingMiddleware, SecurityHeadersMiddleware
from .database.session import get_db, init_db, close_db
from .services.realtime import connection_manager
from .api.routes import (
    auth,
    users,
    invite_codes,
    prayers,
    posts,
    events,
    notifications,
    mentorship,
    spiritual_tracker,
    scripture,
    admin,
    realtime,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.APP_NAME}...")
    app.state.connections = connection_manager
    app.state.publisher = connection_manager
    try:
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {str(e)}")

    logger.info(f"{settings.APP_NAME} started")
    yield

    await close_db()
    logger.info(f"{settings.APP_NAME} stopped")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    description="Church fellowship community API",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS", "HEAD"],
    allow_headers=["*"],
    expose_headers=["X-Process-Time", "X-Fellowship-Version"]
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

app.add_exception_handler(FellowshipException, fellowship_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.get("/")
async def root():
    return {
        "message": f"{settings.APP_NAME} API",
        "version": settings.APP_VERSION,
        "status": "running",
        "timestamp": datetime.now().isoformat()
    }


@app.get(f"{settings.API_PREFIX}/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Liveness plus a round trip to the store"""
    try:
        await db.execute(text("SELECT 1"))
        db_ok = True
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        db_ok = False
    return {
        "status": "Server is running",
        "database": "connected" if db_ok else "error",
        "timestamp": datetime.now().isoformat()
    }


api_prefix = settings.API_PREFIX
app.include_router(auth.router, prefix=api_prefix)
app.include_router(users.router, prefix=api_prefix)
app.include_router(invite_codes.router, prefix=api_prefix)
app.include_router(prayers.router, prefix=api_prefix)
app.include_router(posts.router, prefix=api_prefix)
app.include_router(events.router, prefix=api_prefix)
app.include_router(notifications.router, prefix=api_prefix)
app.include_router(mentorship.router, prefix=api_prefix)
app.include_router(spiritual_tracker.router, prefix=api_prefix)
app.include_router(scripture.router, prefix=api_prefix)
app.include_router(admin.router, prefix=api_prefix)
app.include_router(realtime.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "fellowship.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
