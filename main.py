from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
from contextlib import asynccontextmanager
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import modules
from app.config import get_settings
from app.database import init_db, close_db
from app.flashcards import flashcards_router
from app.card_collections import collections_router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    logger.info("Starting Flashcard Collections Backend...")
    await init_db()
    yield
    # Shutdown
    logger.info("Shutting down Flashcard Collections Backend...")
    await close_db()


# Create FastAPI application
app = FastAPI(
    title="Flashcard Collections API",
    description="Upload CSV flashcards into named collections and track their review state",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for deployment testing"""
    return {
        "status": "healthy",
        "message": "Flashcard Collections Backend is running!",
        "version": "1.0.0"
    }

# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return {
        "message": "Welcome to Flashcard Collections API",
        "docs": "/docs",
        "health": "/health",
        "version": "1.0.0"
    }

# Include routers
app.include_router(flashcards_router, prefix="/api/flashcards", tags=["Flashcards"])
app.include_router(collections_router, prefix="/api/collections", tags=["Collections"])


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
