"""Card ID generation."""

import uuid
from collections.abc import Collection


def new_card_id(existing: Collection[str] = ()) -> str:
    """Return a fresh card ID that is not in existing.

    IDs are random UUID4 strings, matching the IDs the analysis service
    assigns. The existing check only matters for hand-written boards
    that reuse IDs.
    """
    while True:
        card_id = str(uuid.uuid4())
        if card_id not in existing:
            return card_id
