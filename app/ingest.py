"""
Flashcard Collections Backend - CSV ingestion
Turns an uploaded CSV file of Front/Back pairs into persisted flashcards
linked into a new collection.

The upload is written to disk with awaited chunked reads, the CSV is parsed
in a worker thread, and only the commit (bulk insert + collection save)
runs on the event loop.
"""

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool
from app.errors import EmptyUpload, InvalidUpload, MissingCollectionName, MissingFile
from app.models import CardCreate
from app.stores import CardStore, CollectionStore
from typing import Dict, Iterable, Iterator, List, Optional, TextIO
import csv
import logging
import os
import uuid

logger = logging.getLogger(__name__)

FRONT_COLUMN = "Front"
BACK_COLUMN = "Back"
UPLOAD_CHUNK_SIZE = 1024 * 1024


async def save_upload(file: UploadFile, upload_dir: str) -> str:
    """Write the uploaded file to ``upload_dir`` chunk by chunk and return its path"""
    os.makedirs(upload_dir, exist_ok=True)
    path = os.path.join(upload_dir, uuid.uuid4().hex)
    try:
        with open(path, "wb") as destination:
            while True:
                chunk = await file.read(UPLOAD_CHUNK_SIZE)
                if not chunk:
                    break
                destination.write(chunk)
    except OSError:
        remove_upload(path)
        raise
    return path


def remove_upload(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


def read_rows(stream: TextIO) -> Iterator[Dict[str, Optional[str]]]:
    """Lazily yield CSV rows keyed by the header row"""
    yield from csv.DictReader(stream)


def card_from_row(row: Dict[str, Optional[str]], collection_name: str) -> Optional[CardCreate]:
    """Build a card from one row, or None when Front or Back is blank"""
    front = (row.get(FRONT_COLUMN) or "").strip()
    back = (row.get(BACK_COLUMN) or "").strip()
    if not front or not back:
        logger.debug(f"Skipping row with missing Front/Back: {row}")
        return None
    return CardCreate(front=front, back=back, collectionName=collection_name)


def collect_cards(rows: Iterable[Dict[str, Optional[str]]], collection_name: str) -> List[CardCreate]:
    """Consume ``rows`` once, in order, keeping only the valid ones"""
    cards = []
    for row in rows:
        card = card_from_row(row, collection_name)
        if card is not None:
            cards.append(card)
    return cards


def read_csv_cards(path: str, collection_name: str) -> List[CardCreate]:
    """Parse the CSV file at ``path`` into candidate cards (blocking)"""
    with open(path, newline="", encoding="utf-8-sig") as stream:
        return collect_cards(read_rows(stream), collection_name)


async def commit_cards(
    cards: List[CardCreate],
    collection_name: str,
    card_store: CardStore,
    collection_store: CollectionStore,
) -> int:
    """Persist the cards and link them into a new collection.

    Cards are inserted first and the collection is saved afterwards; if the
    second step fails the inserted cards stay in the store unreferenced.

    Returns the number of cards created.
    """
    if not cards:
        logger.info(f"No valid flashcards found for collection '{collection_name}'")
        raise EmptyUpload()

    card_ids = await card_store.insert_many(cards)
    await collection_store.create(collection_name, card_ids)

    logger.info(f"{len(card_ids)} flashcards added to collection '{collection_name}'")
    return len(card_ids)


async def ingest_rows(
    rows: Iterable[Dict[str, Optional[str]]],
    collection_name: str,
    card_store: CardStore,
    collection_store: CollectionStore,
) -> int:
    """Run already-parsed rows through the row policy and commit them"""
    if not collection_name:
        raise MissingCollectionName()
    cards = collect_cards(rows, collection_name)
    return await commit_cards(cards, collection_name, card_store, collection_store)


async def ingest_csv_file(
    path: str,
    collection_name: str,
    card_store: CardStore,
    collection_store: CollectionStore,
) -> int:
    """Ingest the CSV file at ``path``; the file is removed afterwards in every case"""
    try:
        if not collection_name:
            raise MissingCollectionName()
        try:
            cards = await run_in_threadpool(read_csv_cards, path, collection_name)
        except (UnicodeDecodeError, csv.Error) as e:
            logger.error(f"Unreadable CSV upload {path}: {e}")
            raise InvalidUpload() from e
        return await commit_cards(cards, collection_name, card_store, collection_store)
    finally:
        remove_upload(path)


async def ingest_upload(
    file: Optional[UploadFile],
    collection_name: Optional[str],
    card_store: CardStore,
    collection_store: CollectionStore,
    upload_dir: str,
) -> int:
    """Validate the request parts, then run the upload through the pipeline"""
    if file is None or not file.filename:
        raise MissingFile()
    if not collection_name:
        raise MissingCollectionName()

    logger.info(f"Received file '{file.filename}' for collection '{collection_name}'")
    path = await save_upload(file, upload_dir)
    return await ingest_csv_file(path, collection_name, card_store, collection_store)
