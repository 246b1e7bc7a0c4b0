"""
c-audit Web API
===============
FastAPI-based REST API for linting C source.

Quick Start:
    uvicorn c_audit.web_api.main:app --reload
"""
from .main import app

__all__ = ["app"]
