"""
Flashcard Collections Backend - Shared Models and Schemas
Pydantic models for data validation and serialization
"""

from pydantic import BaseModel, Field
from typing import List


# Flashcard Models
class CardBase(BaseModel):
    """Base flashcard model"""
    front: str = Field(..., min_length=1)
    back: str = Field(..., min_length=1)
    collectionName: str = Field(..., min_length=1)


class CardCreate(CardBase):
    """Flashcard creation model, built from one CSV row"""
    known: bool = False
    reviewed: bool = False


class CardReviewUpdate(BaseModel):
    """Review-state update; both flags are always overwritten together"""
    known: bool
    reviewed: bool


class Card(CardBase):
    """Flashcard model as stored"""
    id: str = Field(..., alias="_id")
    known: bool = False
    reviewed: bool = False

    class Config:
        populate_by_name = True


# Collection Models
class Collection(BaseModel):
    """Named, ordered group of flashcard ids"""
    id: str = Field(..., alias="_id")
    name: str
    flashcards: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True


# Response Models
class UploadResponse(BaseModel):
    """Response model for a CSV upload"""
    message: str
    count: int


class ErrorResponse(BaseModel):
    """Error response model"""
    detail: str
