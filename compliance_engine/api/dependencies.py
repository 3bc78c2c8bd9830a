"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from compliance_engine.domain.models import EngineConfig


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_engine_config(request: Request) -> EngineConfig:
    """Provide the read-only rule configuration built at startup"""
    return request.app.state.engine_config
