import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

# Import lifespan manager and API router from their locations
from groundtrack.db.lifespan import lifespan
from groundtrack.api.v1.router import api_router
from groundtrack.api.responses import http_exception_handler
from groundtrack.core.config import CORS_ORIGINS

logger = logging.getLogger(__name__)

# Create FastAPI app instance using the lifespan manager
app = FastAPI(
    title="SatHub Ground Track API",
    description="Read-only availability and ground track data for satellite pass posts.",
    version="0.1.0",
    lifespan=lifespan,
)

# --- Error envelope ---
app.add_exception_handler(StarletteHTTPException, http_exception_handler)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)
logger.info("CORS middleware added with specific origins.")


# --- Test Endpoint (Before API v1 Router) ---
@app.get("/ping", tags=["Test"])
async def ping():
    return {"message": "pong"}


# --- Include API Routers ---
app.include_router(api_router, prefix="/api/v1")
logger.info("Included API router v1 at /api/v1.")


# --- Root Endpoint ---
@app.get("/", tags=["Root"])
async def read_root():
    """Provides a basic welcome message."""
    return {"message": "Welcome to the SatHub Ground Track API"}


# --- Uvicorn Entry Point (for direct run, if needed) ---
# Recommended: `uvicorn groundtrack.main:app --reload` from the backend directory.
if __name__ == "__main__":
    import uvicorn

    logger.info("Starting Uvicorn server directly...")
    uvicorn.run(app, host="0.0.0.0", port=8000)
