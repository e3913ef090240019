import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sitecarbon.api.routes import router
from sitecarbon.core.config import DEFAULT_ESTIMATION, settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("sitecarbon")

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Log the read-only estimation configuration on startup.
    """
    logger.info("Starting Site Carbon Estimator on port %d", settings.PORT)
    logger.info("Emissions model: %s", DEFAULT_ESTIMATION.model)
    logger.info("Projection constants: %s", DEFAULT_ESTIMATION.projection)
    logger.info("Tier thresholds: %s", DEFAULT_ESTIMATION.thresholds.as_tuple())

    yield

    logger.info("Shutting down Site Carbon Estimator")

app = FastAPI(
    title="Site Carbon Estimator",
    description="API for estimating the carbon footprint of loading a web page",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(router)

@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "service": "Site Carbon Estimator",
        "version": "1.0.0",
        "endpoints": {
            "co2": "GET /co2?url=",
            "ai_sustainability": "GET /ai-sustainability?url=",
            "audit": "GET /audit?url=",
            "lighthouse": "GET /lighthouse?url=",
            "health": "GET /health"
        }
    }

def run():
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run("sitecarbon.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
