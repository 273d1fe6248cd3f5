import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from idea_validator.config import describe_analyzer, get_settings
from idea_validator.middleware import setup_middleware
from idea_validator.analysis.router import router as analysis_router

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Idea analysis provider: {describe_analyzer(settings)}")
    yield


app = FastAPI(
    title="Startup Idea Validator API",
    version="1.0.0",
    docs_url="/docs" if settings.debug else None,
    lifespan=lifespan,
)

setup_middleware(app, settings.frontend_url)

app.include_router(analysis_router, prefix="/api")


@app.get("/")
async def root():
    return {"status": "alive", "service": "idea-validator-api"}


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "idea-validator-api"}


@app.get("/health/detailed")
async def health_detailed():
    checks = {"api": "healthy"}
    checks["gemini"] = "configured" if settings.gemini_api_key else "missing"
    checks["mode"] = "mock" if settings.use_mock_analysis else "live"
    status = "healthy" if settings.use_mock_analysis or settings.gemini_api_key else "degraded"
    return {"status": status, "checks": checks}
