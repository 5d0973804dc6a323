"""Request-scoped access to the objects owned by the application."""

from fastapi import Request

from ..config import Settings
from ..core.engine import SearchEngine
from .stats import QueryMetrics


def get_engine(request: Request) -> SearchEngine:
    return request.app.state.engine


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_metrics(request: Request) -> QueryMetrics:
    return request.app.state.metrics
