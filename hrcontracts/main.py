# =====================================================
# FILE: hrcontracts/main.py
# FastAPI application
# =====================================================

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging

from hrcontracts import __version__
from hrcontracts.core.config import settings
from hrcontracts.core.database import init_db, test_connection
from hrcontracts.core.exceptions import ContractEngineError
from hrcontracts.api.api_v1 import router as api_v1_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"🚀 Starting {settings.APP_NAME} v{__version__}")
    init_db()
    yield
    logger.info(f"👋 {settings.APP_NAME} shutting down")


app = FastAPI(title=settings.APP_NAME, version=__version__, lifespan=lifespan)


@app.exception_handler(ContractEngineError)
async def contract_engine_error_handler(request: Request, exc: ContractEngineError):
    if exc.status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(api_v1_router)


@app.get("/api/health")
async def health():
    database_ok = test_connection()
    return {
        "status": "healthy" if database_ok else "degraded",
        "version": __version__,
        "database": database_ok,
    }
