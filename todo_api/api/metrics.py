"""Metrics API endpoint."""

import platform
import time
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from todo_api import __version__
from todo_api.database import get_db
from todo_api.services.metrics import collect_database_stats, request_metrics

router = APIRouter(tags=["metrics"])

STARTED_AT = time.monotonic()


def uptime_seconds() -> int:
    return round(time.monotonic() - STARTED_AT)


@router.get("/metrics")
def get_metrics(db: Annotated[Session, Depends(get_db)]):
    """Database statistics plus request counters since the last reset."""
    return {
        "timestamp": datetime.now(UTC).isoformat(),
        "version": __version__,
        "uptime_seconds": uptime_seconds(),
        "database": collect_database_stats(db),
        "performance": request_metrics.snapshot(),
        "system": {
            "python_version": platform.python_version(),
            "platform": platform.system().lower(),
        },
    }
