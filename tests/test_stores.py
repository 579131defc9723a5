"""
Tests for the MongoDB-backed stores using mocked motor collections.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import PyMongoError

from app.errors import StoreError
from app.models import CardCreate
from app.stores import CardStore, CollectionStore


def mock_database(collection):
    database = MagicMock()
    database.get_collection.return_value = collection
    return database


def card_document(object_id, front, back, known=False, reviewed=False):
    return {
        "_id": object_id,
        "front": front,
        "back": back,
        "collectionName": "French",
        "known": known,
        "reviewed": reviewed,
        "__v": 0,
    }


@pytest.mark.asyncio
async def test_insert_many_returns_ids_as_strings():
    ids = [ObjectId(), ObjectId()]
    collection = MagicMock()
    collection.insert_many = AsyncMock(return_value=MagicMock(inserted_ids=ids))
    store = CardStore(mock_database(collection))

    result = await store.insert_many([
        CardCreate(front="Bonjour", back="Hello", collectionName="French"),
        CardCreate(front="Chat", back="Cat", collectionName="French"),
    ])

    assert result == [str(i) for i in ids]
    documents = collection.insert_many.await_args.args[0]
    assert documents[0] == {
        "front": "Bonjour",
        "back": "Hello",
        "collectionName": "French",
        "known": False,
        "reviewed": False,
    }


@pytest.mark.asyncio
async def test_insert_many_wraps_driver_errors():
    collection = MagicMock()
    collection.insert_many = AsyncMock(side_effect=PyMongoError("down"))
    store = CardStore(mock_database(collection))

    with pytest.raises(StoreError):
        await store.insert_many([CardCreate(front="a", back="b", collectionName="c")])


@pytest.mark.asyncio
async def test_find_by_ids_keeps_requested_order():
    first, second = ObjectId(), ObjectId()
    cursor = MagicMock()
    # Store returns documents in a different order than requested
    cursor.to_list = AsyncMock(return_value=[
        card_document(second, "Chat", "Cat"),
        card_document(first, "Bonjour", "Hello"),
    ])
    collection = MagicMock()
    collection.find.return_value = cursor
    store = CardStore(mock_database(collection))

    cards = await store.find_by_ids([str(first), str(second), "not-an-id"])

    assert [c.front for c in cards] == ["Bonjour", "Chat"]
    assert cards[0].id == str(first)
    assert collection.find.call_args.args[0] == {"_id": {"$in": [first, second]}}


@pytest.mark.asyncio
async def test_update_review_state_returns_updated_card():
    object_id = ObjectId()
    collection = MagicMock()
    collection.find_one_and_update = AsyncMock(
        return_value=card_document(object_id, "Chat", "Cat", known=True, reviewed=True)
    )
    store = CardStore(mock_database(collection))

    card = await store.update_review_state(str(object_id), True, True)

    assert card.known is True and card.reviewed is True
    query, update = collection.find_one_and_update.await_args.args
    assert query == {"_id": object_id}
    assert update == {"$set": {"known": True, "reviewed": True}}


@pytest.mark.asyncio
async def test_update_review_state_missing_or_invalid_id():
    collection = MagicMock()
    collection.find_one_and_update = AsyncMock(return_value=None)
    store = CardStore(mock_database(collection))

    assert await store.update_review_state(str(ObjectId()), True, False) is None
    assert await store.update_review_state("nope", True, False) is None
    assert collection.find_one_and_update.await_count == 1


@pytest.mark.asyncio
async def test_create_collection_stores_object_ids():
    card_ids = [str(ObjectId()), str(ObjectId())]
    inserted_id = ObjectId()
    collection = MagicMock()
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=inserted_id))
    store = CollectionStore(mock_database(collection))

    created = await store.create("French", card_ids)

    assert created.id == str(inserted_id)
    assert created.name == "French"
    assert created.flashcards == card_ids
    document = collection.insert_one.await_args.args[0]
    assert document["flashcards"] == [ObjectId(i) for i in card_ids]


@pytest.mark.asyncio
async def test_find_by_name_returns_none_when_missing():
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value=None)
    store = CollectionStore(mock_database(collection))

    assert await store.find_by_name("French") is None
    assert collection.find_one.await_args.args[0] == {"name": "French"}


@pytest.mark.asyncio
async def test_list_all_wraps_driver_errors():
    cursor = MagicMock()
    cursor.to_list = AsyncMock(side_effect=PyMongoError("down"))
    collection = MagicMock()
    collection.find.return_value = cursor
    store = CollectionStore(mock_database(collection))

    with pytest.raises(StoreError):
        await store.list_all()


@pytest.mark.asyncio
async def test_find_by_name_returns_earliest_match():
    first_id, card_id = ObjectId(), ObjectId()
    collection = MagicMock()
    collection.find_one = AsyncMock(
        return_value={"_id": first_id, "name": "French", "flashcards": [card_id], "__v": 0}
    )
    store = CollectionStore(mock_database(collection))

    found = await store.find_by_name("French")

    assert found.id == str(first_id)
    assert found.name == "French"
    assert found.flashcards == [str(card_id)]
    assert collection.find_one.await_args.kwargs["sort"] == [("_id", 1)]
