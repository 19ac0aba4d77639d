"""
Health Check Router
===================
Endpoints for health checks and readiness checks.
"""
from fastapi import APIRouter

from schema_audit import __version__
from schema_audit.rules import SCHEMA_RULE_IDS

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
    Reports the rule set the service evaluates.
    """
    return {"status": "ready", "rules": SCHEMA_RULE_IDS}
