from dotenv import load_dotenv

# Load environment variables before the config module reads them
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from palette_studio import __version__
from palette_studio.api.v1 import router as v1_router
from palette_studio.config import config
from palette_studio.schemas import HealthResponse
from palette_studio.utils.logging import get_logger

logger = get_logger()

app = FastAPI(
    title="Palette Studio",
    description="Color picking, harmony generation and palette management",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """Health check endpoint"""
    return {"ok": True, "version": __version__, "service": "palette-studio"}


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "Palette Studio API",
        "version": __version__,
        "docs": "/docs",
        "health": "/healthz"
    }


logger.info("Palette Studio API ready", extra={"version": __version__, "capacity": config.PALETTE_CAPACITY})
