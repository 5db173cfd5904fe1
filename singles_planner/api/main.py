"""
FastAPI Application

Main entry point for the Norwegian Singles planner web API.
"""

import logging
from typing import Dict

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from singles_planner.api.models.responses import ErrorResponse
from singles_planner.api.routes import methodologies, paces, plans, validation
from singles_planner.config import get_settings
from singles_planner.logging_config import setup_logging

settings = get_settings()
setup_logging(settings.log_level, settings.log_format)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Norwegian Singles Planner API",
    description="Weekly sub-threshold training plans from a mileage goal and race result",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS configuration - allow frontend to access API
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",  # React dev server
        "http://localhost:5173",  # Vite dev server
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(methodologies.router, prefix="/api", tags=["Methodology"])
app.include_router(paces.router, prefix="/api", tags=["Paces"])
app.include_router(validation.router, prefix="/api", tags=["Validation"])
app.include_router(plans.router, prefix="/api", tags=["Plans"])


@app.get("/")
async def root() -> Dict[str, str]:
    """Root endpoint - API information."""
    return {
        "name": "Norwegian Singles Planner API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": "singles-planner-api"}


# Global exception handler
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    """Handle HTTP exceptions with consistent error format."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail), message=str(exc.detail)).model_dump(
            exclude_none=True
        ),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error="Internal Server Error", message=str(exc)).model_dump(
            exclude_none=True
        ),
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "singles_planner.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
