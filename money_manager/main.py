# money_manager/main.py
import uvicorn
import os
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from money_manager.core.config import settings
from money_manager.core.database import Database
from money_manager.core.exceptions import MoneyManagerError
from money_manager.api.v1.api import api_router

logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database handle at startup and dispose of it at shutdown."""
    db = Database(settings.DATABASE_URL, echo=settings.DEBUG).connect()
    app.state.db = db
    try:
        # Create all tables on startup (Alembic manages schema changes after that)
        await db.create_all()
        logger.info("✅ Database tables ready")
        logger.info(f"✅ Frontend URL: {settings.FRONTEND_URL}")
        yield
    finally:
        await db.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Authentication", "description": "Registration, login and session lookup"},
        {"name": "categories", "description": "Income/expense categories"},
        {"name": "transactions", "description": "Income and expense records"},
        {"name": "dashboard", "description": "Aggregated summaries"},
    ],
)

# CORS Configuration
origins = [
    settings.FRONTEND_URL,
    "http://localhost:3000",  # Local development
    "http://localhost:5173",  # Vite dev server
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MoneyManagerError)
async def money_manager_exception_handler(request: Request, exc: MoneyManagerError):
    """Not found / forbidden / conflict outcomes raised by the record store"""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Anything unexpected becomes an opaque 500; the traceback goes to the log."""
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )


# ------------------------------------------------------------
# ROOT ENDPOINT
# ------------------------------------------------------------
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return {
        "message": "Money Manager API is running!",
        "version": settings.VERSION
    }


# ------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ------------------------------------------------------------
@app.get("/health", tags=["Health"])
async def health_check(request: Request):
    """Health check endpoint"""
    try:
        await request.app.state.db.ping()
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        raise HTTPException(status_code=503, detail=f"Service unhealthy: {str(e)}")
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT
    }


# ------------------------------------------------------------
# BUSINESS LOGIC ROUTES
# ------------------------------------------------------------
app.include_router(api_router, prefix="/api/v1")


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("money_manager.main:app", host="0.0.0.0", port=port, reload=False)
