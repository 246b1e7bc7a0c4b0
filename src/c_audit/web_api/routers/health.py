"""
Health Check Router
===================
Endpoints for health checks and readiness probes.
"""
from fastapi import APIRouter

from c_audit import __version__

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns OK if the service is running.
    """
    return {"status": "ok", "version": __version__}


@router.get("/ready")
async def readiness_check():
    """
    Readiness check endpoint.
    Returns OK once the bundled result schema can be loaded.
    """
    from c_audit.contracts.load import load_schema

    load_schema("lint_result.schema.json")
    return {"status": "ready"}
