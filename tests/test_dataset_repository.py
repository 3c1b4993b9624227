import pytest
from pymongo.errors import ExecutionTimeout, OperationFailure

from app.services.collection_init import SEED_DATASET
from app.services.dataset_repository import (
    DatasetDecodeError,
    DatasetNotFoundError,
    get_by_id,
    list_all,
)
from app.services.mongo import ConnectError, DatabaseError


def test_list_all_empty_collection(mongo, settings):
    assert list_all(settings) == []
    mongo.collection.find.assert_called_once_with({})
    mongo.client.close.assert_called_once()


def test_list_all_keeps_store_order(mongo, store, settings):
    store[7] = {"_id": 7, "name": "b"}
    store[3] = {"_id": 3, "name": "a"}

    assert [d.id for d in list_all(settings)] == [7, 3]


def test_list_all_one_bad_document_fails_call(mongo, seeded, settings):
    seeded["bad"] = {"_id": "not-a-number", "name": "broken"}

    with pytest.raises(DatasetDecodeError):
        list_all(settings)


def test_list_all_query_failure(mongo, settings):
    mongo.collection.find.side_effect = ExecutionTimeout("operation exceeded time limit")

    with pytest.raises(DatabaseError, match="failed to query datasets"):
        list_all(settings)
    mongo.client.close.assert_called_once()


def test_get_by_id_returns_stored_document(mongo, seeded, settings):
    ds = get_by_id(settings, 1)

    assert ds.model_dump(by_alias=True, exclude_none=True) == SEED_DATASET
    mongo.collection.find_one.assert_called_once_with({"_id": 1})


def test_get_by_id_all_fields(mongo, store, settings):
    doc = {
        "_id": 42,
        "name": "n",
        "data": "d",
        "download_link": "https://example.com/d.zip",
        "short_description": "s",
        "long_description": "l",
    }
    store[42] = doc

    assert get_by_id(settings, 42).model_dump(by_alias=True) == doc


def test_get_by_id_missing_is_not_found(mongo, seeded, settings):
    with pytest.raises(DatasetNotFoundError) as exc:
        get_by_id(settings, 999)
    assert exc.value.dataset_id == 999
    assert not isinstance(exc.value, DatabaseError)


def test_get_by_id_query_failure(mongo, settings):
    mongo.collection.find_one.side_effect = OperationFailure("boom")
    with pytest.raises(DatabaseError):
        get_by_id(settings, 1)


def test_get_by_id_connect_failure(mongo, settings):
    mongo.client.admin.command.side_effect = OperationFailure("auth failed")
    with pytest.raises(ConnectError):
        get_by_id(settings, 1)
    mongo.collection.find_one.assert_not_called()


@pytest.mark.parametrize("bad_id", ["5", True, 5.5])
def test_mistyped_id_is_rejected_not_coerced(mongo, store, settings, bad_id):
    store["x"] = {"_id": bad_id, "name": "coerced"}

    with pytest.raises(DatasetDecodeError):
        list_all(settings)


def test_whole_double_id_decodes(mongo, store, settings):
    store[5.0] = {"_id": 5.0, "name": "from the shell"}

    assert list_all(settings)[0].id == 5


def test_empty_strings_are_dropped_from_output(mongo, store, settings):
    store[3] = {"_id": 3, "name": "n", "data": ""}

    assert get_by_id(settings, 3).model_dump(by_alias=True, exclude_none=True) == {"_id": 3, "name": "n"}
