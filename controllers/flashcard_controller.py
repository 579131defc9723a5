from app.errors import CardNotFound
from app.models import Card, CardReviewUpdate
from app.stores import CardStore


async def update_card_controller(card_id: str, data: CardReviewUpdate, card_store: CardStore) -> Card:
    card = await card_store.update_review_state(card_id, data.known, data.reviewed)
    if card is None:
        raise CardNotFound()
    return card


# Purpose: Mutation side of the API.
    # Overwrites a card's known/reviewed flags together and returns the
    # card as stored after the update.
