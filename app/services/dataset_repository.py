# app/services/dataset_repository.py
from __future__ import annotations

from typing import Any, List, Mapping

import pymongo
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from app.core.config import Settings
from app.schemas.datasets import Dataset
from app.services.mongo import DatabaseError, mongo_session


class DatasetNotFoundError(LookupError):
    def __init__(self, dataset_id: int):
        super().__init__(f"dataset {dataset_id} not found")
        self.dataset_id = dataset_id


class DatasetDecodeError(DatabaseError):
    """A stored document does not fit the Dataset shape."""


def decode_dataset(doc: Mapping[str, Any]) -> Dataset:
    try:
        return Dataset.model_validate(dict(doc))
    except ValidationError as e:
        raise DatasetDecodeError(f"failed to decode dataset {doc.get('_id')!r}: {e}") from e


def list_all(settings: Settings) -> List[Dataset]:
    """
    Every document in the collection, in the order MongoDB returns them.
    One bad document fails the whole call.
    """
    with mongo_session(settings) as client:
        coll = client[settings.database][settings.collection]
        try:
            with pymongo.timeout(settings.timeout_seconds):
                docs = list(coll.find({}))
        except PyMongoError as e:
            raise DatabaseError(f"failed to query datasets from the database: {e}") from e

    return [decode_dataset(d) for d in docs]


def get_by_id(settings: Settings, dataset_id: int) -> Dataset:
    with mongo_session(settings) as client:
        coll = client[settings.database][settings.collection]
        try:
            with pymongo.timeout(settings.timeout_seconds):
                doc = coll.find_one({"_id": dataset_id})
        except PyMongoError as e:
            raise DatabaseError(f"failed to query dataset {dataset_id} from the database: {e}") from e

    if doc is None:
        raise DatasetNotFoundError(dataset_id)
    return decode_dataset(doc)
