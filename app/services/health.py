# app/services/health.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

import pymongo
from pymongo.errors import PyMongoError

from app.core.config import Settings
from app.services.mongo import ConnectError, mongo_session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HealthStatus:
    healthy: bool
    error: Optional[str] = None

    def as_dict(self) -> Dict[str, str]:
        if self.healthy:
            return {"status": "healthy"}
        return {"status": "unhealthy", "error": self.error or "unknown"}


def report_health(settings: Settings) -> HealthStatus:
    """
    Fresh connection on every call; the configured database must be
    visible to the credentials in use.
    """
    try:
        with mongo_session(settings) as client:
            with pymongo.timeout(settings.timeout_seconds):
                names = [
                    d["name"] for d in client.list_databases(filter={"name": settings.database}, nameOnly=True)
                ]
    except ConnectError as e:
        logger.warning("MongoDB connection check failed: %s", e)
        return HealthStatus(healthy=False, error=str(e))
    except PyMongoError as e:
        logger.warning("MongoDB database check failed: %s", e)
        return HealthStatus(healthy=False, error=f"MongoDB database check failed: {e}")

    if not names:
        logger.warning("MongoDB database check failed: can not find database %s", settings.database)
        return HealthStatus(
            healthy=False,
            error=f"MongoDB database check failed: can not find database {settings.database}",
        )

    logger.info("Health check passed. MongoDB database %s reporting as healthy.", settings.database)
    return HealthStatus(healthy=True)
