"""Core module - foundational components."""

from portfolio_cms.core.database import get_db
from portfolio_cms.core.exceptions import AppException
from portfolio_cms.core.logging import get_logger

__all__ = ["get_db", "AppException", "get_logger"]
