"""
Shared fixtures: in-memory stores standing in for MongoDB and a TestClient
wired to them through dependency overrides.
"""
import os

os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017/flashcards_test")

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.models import Card, Collection
from app.stores import get_card_store, get_collection_store
from main import app


class InMemoryCardStore:
    def __init__(self):
        self.documents = {}

    async def insert_many(self, cards):
        ids = []
        for card in cards:
            card_id = str(ObjectId())
            self.documents[card_id] = {"_id": card_id, **card.model_dump()}
            ids.append(card_id)
        return ids

    async def find_by_ids(self, card_ids):
        return [Card(**self.documents[card_id]) for card_id in card_ids if card_id in self.documents]

    async def update_review_state(self, card_id, known, reviewed):
        document = self.documents.get(card_id)
        if document is None:
            return None
        document.update(known=known, reviewed=reviewed)
        return Card(**document)


class InMemoryCollectionStore:
    def __init__(self):
        self.documents = []

    async def create(self, name, card_ids):
        collection = Collection(_id=str(ObjectId()), name=name, flashcards=list(card_ids))
        self.documents.append(collection)
        return collection

    async def list_all(self):
        return list(self.documents)

    async def find_by_name(self, name):
        return next((c for c in self.documents if c.name == name), None)


@pytest.fixture
def card_store():
    return InMemoryCardStore()


@pytest.fixture
def collection_store():
    return InMemoryCollectionStore()


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def client(card_store, collection_store, upload_dir):
    test_settings = Settings(mongodb_uri=os.environ["MONGODB_URI"], upload_dir=str(upload_dir))
    app.dependency_overrides[get_card_store] = lambda: card_store
    app.dependency_overrides[get_collection_store] = lambda: collection_store
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()
