"""Dependency injection for FastAPI endpoints"""

import uuid
from datetime import date
from fastapi import HTTPException, Request
from finance_tracker.config import settings
from finance_tracker.utils.date_utils import local_today


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_today() -> date:
    """Reference date for "current invoice" lookups; overridden in tests"""
    return local_today(settings.timezone)


def parse_card_id(card_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(card_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid card ID format")
