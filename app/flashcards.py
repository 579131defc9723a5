from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form
from app.models import Card, CardReviewUpdate, UploadResponse
from app.config import Settings, get_settings
from app.errors import FlashcardAPIError
from app.ingest import ingest_upload
from app.stores import CardStore, CollectionStore, get_card_store, get_collection_store
from controllers.flashcard_controller import update_card_controller
from typing import Optional
import logging

logger = logging.getLogger(__name__)

# Router setup
flashcards_router = APIRouter()


@flashcards_router.post("/upload", response_model=UploadResponse, tags=["Flashcards"])
async def upload_flashcards(
    file: Optional[UploadFile] = File(None),
    collection_name: Optional[str] = Form(None, alias="collectionName"),
    card_store: CardStore = Depends(get_card_store),
    collection_store: CollectionStore = Depends(get_collection_store),
    settings: Settings = Depends(get_settings),
):
    """Upload a CSV of Front/Back pairs into a new collection"""
    try:
        count = await ingest_upload(
            file,
            collection_name,
            card_store,
            collection_store,
            settings.upload_dir,
        )
        return UploadResponse(message="Flashcards uploaded and collection created", count=count)

    except FlashcardAPIError as e:
        if e.status_code < status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.info(f"Upload rejected: {e.message}")
        else:
            logger.error(f"Upload flashcards error: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Upload flashcards error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to insert flashcards into the database"
        )


@flashcards_router.put("/{flashcard_id}", response_model=Card, tags=["Flashcards"])
async def update_flashcard(
    flashcard_id: str,
    flashcard_update: CardReviewUpdate,
    card_store: CardStore = Depends(get_card_store),
):
    """Update a flashcard's review state"""
    try:
        card = await update_card_controller(flashcard_id, flashcard_update, card_store)
        logger.info(f"Flashcard updated: {flashcard_id}")
        return card

    except FlashcardAPIError as e:
        logger.error(f"Update flashcard error: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Update flashcard error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error updating flashcard"
        )
