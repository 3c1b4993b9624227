from types import SimpleNamespace
from typing import Any, Dict
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.services.collection_init import SEED_DATASET


@pytest.fixture
def settings():
    return Settings(mongodb_endpoint="mongodb://localhost:27017")


@pytest.fixture
def store() -> Dict[Any, Dict[str, Any]]:
    # _id -> document, standing in for the MlDataset collection
    return {}


@pytest.fixture
def seeded(store):
    store[SEED_DATASET["_id"]] = dict(SEED_DATASET)
    return store


@pytest.fixture
def mongo(store):
    """
    Patches MongoClient so every connect() hands back the same mocked client.
    find/find_one read from `store`.
    """
    collection = MagicMock(name="collection")
    collection.find.side_effect = lambda filter=None, *a, **kw: [dict(d) for d in store.values()]
    collection.find_one.side_effect = (
        lambda filter, *a, **kw: dict(store[filter["_id"]]) if filter["_id"] in store else None
    )

    database = MagicMock(name="database")
    database.name = "enbuild"
    database.__getitem__.return_value = collection
    database.list_collection_names.return_value = ["MlDataset"]

    client = MagicMock(name="client")
    client.__getitem__.return_value = database
    client.list_databases.return_value = [{"name": "enbuild"}]

    with patch("app.services.mongo.MongoClient", return_value=client) as client_cls:
        yield SimpleNamespace(cls=client_cls, client=client, database=database, collection=collection)


@pytest.fixture
def api(settings):
    return TestClient(create_app(settings))
