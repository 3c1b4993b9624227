# app/services/collection_init.py
from __future__ import annotations

import logging
from typing import Any, Dict

import pymongo
from pymongo.database import Database
from pymongo.errors import PyMongoError

from app.core.config import Settings
from app.services.mongo import DatabaseError, mongo_session

logger = logging.getLogger(__name__)

SEED_DATASET: Dict[str, Any] = {
    "_id": 1,
    "name": "Feature Set 1",
    "download_link": "linkFor Download",
    "short_description": (
        "Acronym identification training and development sets for the "
        "acronym identification task at SDU@AAAI-21."
    ),
    "long_description": "Long description",
}


class InitializationError(DatabaseError):
    """Collection could not be listed, created or seeded."""


def ensure_collection(database: Database, collection_name: str) -> bool:
    """
    Create `collection_name` and insert the seed document unless the
    collection already exists. Returns True when it was created.
    """
    try:
        existing = database.list_collection_names(filter={"name": collection_name})
    except PyMongoError as e:
        raise InitializationError(f"failed to list collections in {database.name}: {e}") from e

    if len(existing) == 1:
        logger.info("Collection %s already exists.", collection_name)
        return False

    logger.info("Creating collection %s", collection_name)
    try:
        # default options: not capped
        database.create_collection(collection_name)
    except PyMongoError as e:
        raise InitializationError(f"failed to create collection {collection_name}: {e}") from e
    logger.info("Collection %s created in database %s", collection_name, database.name)

    try:
        database[collection_name].insert_one(dict(SEED_DATASET))
    except PyMongoError as e:
        raise InitializationError(f"failed to seed collection {collection_name}: {e}") from e
    logger.info("Sample data added to %s", collection_name)

    return True


def initialize_collection(settings: Settings) -> bool:
    with mongo_session(settings) as client:
        # one bound for the whole list/create/seed sequence
        with pymongo.timeout(settings.timeout_seconds):
            return ensure_collection(client[settings.database], settings.collection)
