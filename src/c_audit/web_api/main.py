"""
FastAPI Application
===================
Main entry point for the c-audit API.

Run with:
    uvicorn c_audit.web_api.main:app --reload
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from c_audit import __version__
from c_audit.web_api.config import settings
from c_audit.web_api.routers import health, lint

# Create application
app = FastAPI(
    title="c-audit API",
    description="Line-oriented C source linter for Amiga-era codebases",
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
app.include_router(lint.router, prefix="/lint", tags=["Lint"])


@app.get("/")
async def root():
    """Root endpoint - API info"""
    return {
        "name": "c-audit API",
        "version": __version__,
        "docs": "/docs" if settings.DEBUG else "disabled",
    }


# For running directly: python -m c_audit.web_api.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
