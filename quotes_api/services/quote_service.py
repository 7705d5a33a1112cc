"""Random quote selection by optional character and source codes."""

from __future__ import annotations

import logging

from quotes_api.adapters.store.quotes import Quote, QuoteRepository
from quotes_api.core.concurrency import run_blocking
from quotes_api.core.errors import ValidationAppError

logger = logging.getLogger(__name__)


CHARACTERS: dict[str, str] = {
    "ada-wong": "Ada Wong",
    "albert-wesker": "Albert Wesker",
    "alex-wesker": "Alex Wesker",
    "barry-burton": "Barry Burton",
    "chris-redfield": "Chris Redfield",
    "claire-redfield": "Claire Redfield",
    "ethan-winters": "Ethan Winters",
    "jill-valentine": "Jill Valentine",
    "leon-kennedy": "Leon Kennedy",
    "moira-burton": "Moira Burton",
    "nemesis": "Nemesis",
    "sheva-alomar": "Sheva Alomar",
}

SOURCES: dict[str, str] = {
    "resident-evil-2": "Resident Evil 2",
    "resident-evil-2-remake": "Resident Evil 2 Remake",
    "resident-evil-3-remake": "Resident Evil 3 Remake",
    "resident-evil-4": "Resident Evil 4",
    "resident-evil-5": "Resident Evil 5",
    "resident-evil-6": "Resident Evil 6",
    "resident-evil-7": "Resident Evil 7",
    "resident-evil-revelations": "Resident Evil Revelations",
    "resident-evil-revelations-2": "Resident Evil Revelations 2",
    "resident-evil-village": "Resident Evil Village",
}


def select_author(character_code: str) -> str:
    """Map a character code to the author name used in the dataset.

    Raises:
        ValidationAppError: If the code is not a known character.
    """
    try:
        return CHARACTERS[character_code]
    except KeyError:
        raise ValidationAppError(
            code="invalid_character_code",
            message=f"Character code is invalid: {character_code}",
            details={"field": "character", "invalid_value": character_code},
        ) from None


def select_source(source_code: str) -> str:
    """Map a source code to the source title used in the dataset.

    Raises:
        ValidationAppError: If the code is not a known source.
    """
    try:
        return SOURCES[source_code]
    except KeyError:
        raise ValidationAppError(
            code="invalid_source_code",
            message=f"Source code is invalid: {source_code}",
            details={"field": "source", "invalid_value": source_code},
        ) from None


class QuoteService:
    """Serve one random quote, optionally filtered by author and/or source."""

    def __init__(self, repository: QuoteRepository) -> None:
        self._repository = repository

    async def random_quote(
        self,
        *,
        character: str | None = None,
        source: str | None = None,
    ) -> Quote | None:
        """Pick a random quote for the given codes.

        Both codes are validated before the dataset is queried.

        Args:
            character: Optional character code (e.g. ``moira-burton``).
            source: Optional source code (e.g. ``resident-evil-5``).

        Returns:
            The selected Quote, or None if nothing matches the combination.

        Raises:
            ValidationAppError: If either code is unknown.
        """
        author = select_author(character) if character is not None else None
        title = select_source(source) if source is not None else None

        quote = await run_blocking(
            self._repository.random_quote, author=author, source=title
        )
        logger.info(
            "quotes.selected",
            extra={
                "character": character,
                "source": source,
                "found": quote is not None,
            },
        )
        return quote
