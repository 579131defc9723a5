from fastapi import APIRouter, Depends, HTTPException, status
from app.models import Card, Collection
from app.errors import FlashcardAPIError
from app.stores import CardStore, CollectionStore, get_card_store, get_collection_store
from controllers.collection_controller import (
    get_collection_cards_controller,
    list_collections_controller,
)
from typing import List
import logging

logger = logging.getLogger(__name__)

# Router setup
collections_router = APIRouter()


@collections_router.get("", response_model=List[Collection], tags=["Collections"])
async def get_collections(collection_store: CollectionStore = Depends(get_collection_store)):
    """Get all collections with their flashcard ids"""
    try:
        return await list_collections_controller(collection_store)

    except FlashcardAPIError as e:
        logger.error(f"Get collections error: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Get collections error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error retrieving collections"
        )


@collections_router.get("/{collection_name}", response_model=List[Card], tags=["Collections"])
async def get_collection_flashcards(
    collection_name: str,
    collection_store: CollectionStore = Depends(get_collection_store),
    card_store: CardStore = Depends(get_card_store),
):
    """Get every flashcard of a collection, in collection order"""
    try:
        return await get_collection_cards_controller(collection_name, collection_store, card_store)

    except FlashcardAPIError as e:
        if e.status_code == status.HTTP_404_NOT_FOUND:
            logger.info(f"Collection not found: {collection_name}")
        else:
            logger.error(f"Get collection error: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Get collection error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error retrieving collection"
        )
