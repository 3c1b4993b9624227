# app/services/mongo.py
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import pymongo
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from app.core.config import Settings


class DatabaseError(RuntimeError):
    """A MongoDB call failed. The driver exception is chained as __cause__."""


class ConnectError(DatabaseError):
    def __init__(self, phase: str, message: str):
        super().__init__(message)
        self.phase = phase  # "dial" | "ping"


def connect(settings: Settings) -> MongoClient:
    """
    Open a fresh client and confirm the server answers a ping within the
    configured timeout. Caller owns the client and must close it.
    """
    timeout_ms = int(settings.timeout_seconds * 1000)
    try:
        client = MongoClient(
            settings.mongodb_endpoint,
            directConnection=True,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
        )
    except (PyMongoError, ValueError, TypeError) as e:
        raise ConnectError("dial", f"failed to connect to MongoDB: {e}") from e

    try:
        with pymongo.timeout(settings.timeout_seconds):
            client.admin.command("ping")
    except PyMongoError as e:
        client.close()
        raise ConnectError("ping", f"failed to ping MongoDB server: {e}") from e

    return client


@contextmanager
def mongo_session(settings: Settings) -> Iterator[MongoClient]:
    client = connect(settings)
    try:
        yield client
    finally:
        client.close()
