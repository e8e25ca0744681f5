import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from prnow.modules.ai_gateway.api import router as ai_gateway_router
from prnow.modules.outreach.api import relay_router as outreach_relay_router
from prnow.modules.outreach.api import router as outreach_router
from prnow.shared.core.config import settings
from prnow.shared.core.logging import setup_logging
from prnow.shared.middleware.correlation import CorrelationIdMiddleware
from prnow.shared.utils.http_client import http_client_manager, shutdown_http_client, startup_http_client

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup_http_client()
    logger.info(f"{settings.PROJECT_NAME} API started")
    yield
    await shutdown_http_client()


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.CORS_ORIGIN],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request ID + access log
app.add_middleware(CorrelationIdMiddleware)

# AI relays (/api/ai/*, /api/search)
app.include_router(ai_gateway_router, prefix="/api", tags=["AI Relays"])

# Stateless outreach relays (/api/outlets, /api/generate)
app.include_router(outreach_relay_router, prefix="/api", tags=["Outreach Relays"])

# Store API
app.include_router(outreach_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    return {"message": f"{settings.PROJECT_NAME} API is running"}


@app.get("/health")
def health():
    return {"status": "ok", "http_client": http_client_manager.get_status()}
