from app.errors import CollectionNotFound
from app.models import Card, Collection
from app.stores import CardStore, CollectionStore
from typing import List


async def list_collections_controller(collection_store: CollectionStore) -> List[Collection]:
    return await collection_store.list_all()


async def get_collection_cards_controller(
    name: str,
    collection_store: CollectionStore,
    card_store: CardStore,
) -> List[Card]:
    collection = await collection_store.find_by_name(name)
    if collection is None:
        raise CollectionNotFound()
    return await card_store.find_by_ids(collection.flashcards)


# Purpose: Query side of the API.
    # Reads collections as stored (card ids only) or one collection's cards
    # fully resolved, in the order the collection lists them.
