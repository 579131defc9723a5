"""
Flashcard Collections Backend - Document stores
Card Store and Collection Store over the ``flashcards`` and ``collections``
MongoDB collections. Driver failures surface as ``StoreError``.
"""

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Depends
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError
from app.database import MongoDatabase, get_database
from app.errors import StoreError
from app.models import Card, CardCreate, Collection
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

CARDS_COLLECTION = "flashcards"
COLLECTIONS_COLLECTION = "collections"


def to_object_id(value: str) -> Optional[ObjectId]:
    """Parse an id string, returning None when it is not a valid ObjectId"""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def card_from_document(document: Dict[str, Any]) -> Card:
    document = dict(document)
    document["_id"] = str(document["_id"])
    return Card(**document)


def collection_from_document(document: Dict[str, Any]) -> Collection:
    return Collection(
        _id=str(document["_id"]),
        name=document["name"],
        flashcards=[str(card_id) for card_id in document.get("flashcards", [])],
    )


class CardStore:
    """Persists individual flashcards"""

    def __init__(self, database: MongoDatabase):
        self.collection = database.get_collection(CARDS_COLLECTION)

    async def insert_many(self, cards: List[CardCreate]) -> List[str]:
        """Insert cards in one bulk operation, returning their ids in input order"""
        try:
            result = await self.collection.insert_many([card.model_dump() for card in cards])
        except PyMongoError as e:
            logger.error(f"Error inserting flashcards: {e}")
            raise StoreError("Failed to insert flashcards") from e
        return [str(inserted_id) for inserted_id in result.inserted_ids]

    async def find_by_ids(self, card_ids: List[str]) -> List[Card]:
        """Resolve ids to full cards, keeping the order of ``card_ids``"""
        object_ids = [oid for oid in (to_object_id(card_id) for card_id in card_ids) if oid is not None]
        if not object_ids:
            return []
        try:
            cursor = self.collection.find({"_id": {"$in": object_ids}})
            documents = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Error getting flashcards: {e}")
            raise StoreError("Failed to retrieve flashcards") from e

        by_id = {str(doc["_id"]): doc for doc in documents}
        # Ids whose card no longer exists are dropped, as a populate would
        return [card_from_document(by_id[card_id]) for card_id in card_ids if card_id in by_id]

    async def update_review_state(self, card_id: str, known: bool, reviewed: bool) -> Optional[Card]:
        """Overwrite both review flags, returning the updated card or None"""
        object_id = to_object_id(card_id)
        if object_id is None:
            return None
        try:
            document = await self.collection.find_one_and_update(
                {"_id": object_id},
                {"$set": {"known": known, "reviewed": reviewed}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Error updating flashcard {card_id}: {e}")
            raise StoreError("Failed to update flashcard") from e
        return card_from_document(document) if document else None


class CollectionStore:
    """Persists named groups of flashcard ids"""

    def __init__(self, database: MongoDatabase):
        self.collection = database.get_collection(COLLECTIONS_COLLECTION)

    async def create(self, name: str, card_ids: List[str]) -> Collection:
        """Save a new collection; an existing one with the same name is left alone"""
        document = {"name": name, "flashcards": [ObjectId(card_id) for card_id in card_ids]}
        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            logger.error(f"Error creating collection '{name}': {e}")
            raise StoreError("Failed to create collection") from e
        document["_id"] = result.inserted_id
        return collection_from_document(document)

    async def list_all(self) -> List[Collection]:
        try:
            documents = await self.collection.find().to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Error listing collections: {e}")
            raise StoreError("Failed to retrieve collections") from e
        return [collection_from_document(doc) for doc in documents]

    async def find_by_name(self, name: str) -> Optional[Collection]:
        """Earliest collection with exactly this name, or None"""
        try:
            document = await self.collection.find_one({"name": name}, sort=[("_id", 1)])
        except PyMongoError as e:
            logger.error(f"Error getting collection '{name}': {e}")
            raise StoreError("Failed to retrieve collection") from e
        return collection_from_document(document) if document else None


def get_card_store(database: MongoDatabase = Depends(get_database)) -> CardStore:
    """Dependency to get the card store"""
    return CardStore(database)


def get_collection_store(database: MongoDatabase = Depends(get_database)) -> CollectionStore:
    """Dependency to get the collection store"""
    return CollectionStore(database)
