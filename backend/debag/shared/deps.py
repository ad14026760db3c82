# debag/shared/deps.py
"""
Request-level guards and FastAPI dependency aliases.

The app PIN is checked by the HTTP middleware in main.py, ahead of body and
query parsing; is_pin_authorized() holds the comparison itself.
"""
import logging
import secrets
from typing import Annotated, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from debag.core.config import settings
from debag.core.database import get_db

logger = logging.getLogger(__name__)

UNAUTHORIZED_PIN = "Unauthorized. Invalid app PIN."

# Reachable without the x-app-pin header
PUBLIC_PATHS = frozenset({"/health", "/docs", "/openapi.json"})


def is_pin_authorized(supplied: Optional[str]) -> bool:
    """
    Shared-secret check on the x-app-pin header value.
    No PIN configured → every request is authorized.
    """
    configured = settings.configured_pin
    if configured is None:
        return True

    supplied = (supplied or "").strip()
    if not secrets.compare_digest(supplied.encode(), configured.encode()):
        logger.warning("Rejected request with missing or invalid app PIN")
        return False
    return True


# ── Type aliases for the routers ──────────────────────────
DbDep = Annotated[AsyncSession, Depends(get_db)]
