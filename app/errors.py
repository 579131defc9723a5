"""
Flashcard Collections Backend - Error kinds
Domain exceptions raised by the ingestion pipeline, the stores and the services.
Routers translate them into HTTP errors using ``status_code`` and ``message``.
"""

from fastapi import status
from typing import Optional


class FlashcardAPIError(Exception):
    """Base class for every error this service reports to a client"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingFile(FlashcardAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "No file was uploaded"


class MissingCollectionName(FlashcardAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Collection name is required"


class EmptyUpload(FlashcardAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "No valid flashcards found in the CSV file"


class InvalidUpload(FlashcardAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "The uploaded file is not a readable CSV file"


class CollectionNotFound(FlashcardAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Collection not found"


class CardNotFound(FlashcardAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Flashcard not found"


class StoreError(FlashcardAPIError):
    """Wraps any failure coming from the document store"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database error"
