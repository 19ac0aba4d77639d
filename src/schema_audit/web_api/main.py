"""
FastAPI Application
===================
Main entry point for the Schema Audit API.

Run with:
    uvicorn schema_audit.web_api.main:app --reload
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from schema_audit import __version__
from schema_audit.web_api.config import settings
from schema_audit.web_api.routers import health, validate

# Create application
app = FastAPI(
    title="Schema Audit API",
    description="Semantic schema checks for Swagger 2 and OpenAPI 3 documents",
    version=__version__,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(validate.router, tags=["Validate"])


@app.get("/")
async def root():
    """Root endpoint - API info"""
    return {
        "name": "Schema Audit API",
        "version": __version__,
        "docs": "/docs" if settings.DEBUG else "disabled",
    }


# For running directly: python -m schema_audit.web_api.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
