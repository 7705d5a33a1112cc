"""Static quote dataset: CSV loading and random selection."""

from __future__ import annotations

import csv
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, sessionmaker

from quotes_api.adapters.store.models import QuoteRow

logger = logging.getLogger(__name__)

CSV_COLUMNS = ("quote", "author", "context", "source")


@dataclass(frozen=True)
class Quote:
    quote_id: int
    quote: str
    author: str
    context: str
    source: str

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


class QuoteRepository:
    """Read-only access to the ``quotes`` table.

    The table is (re)built from the CSV file once at startup; afterwards the
    repository only reads.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def load_csv(self, csv_path: Path) -> int:
        """Replace the quotes table with the rows of ``csv_path``.

        Args:
            csv_path: CSV file with a ``quote,author,context,source`` header.

        Returns:
            Number of quotes loaded.

        Raises:
            FileNotFoundError: If the dataset file does not exist.
            ValueError: If the header is missing a required column.
        """
        with csv_path.open(newline="", encoding="utf-8") as handle:
            reader = csv.DictReader(handle)
            missing = [col for col in CSV_COLUMNS if col not in (reader.fieldnames or [])]
            if missing:
                raise ValueError(f"Quotes dataset is missing column(s): {', '.join(missing)}")
            rows = [
                QuoteRow(
                    quote=record["quote"],
                    author=record["author"],
                    context=record["context"] or "",
                    source=record["source"],
                )
                for record in reader
                if record["quote"]
            ]

        with self._session_factory() as session, session.begin():
            session.execute(delete(QuoteRow))
            session.add_all(rows)

        logger.info(
            "quotes.loaded",
            extra={"count": len(rows), "dataset": csv_path.name},
        )
        return len(rows)

    def random_quote(self, *, author: str | None = None, source: str | None = None) -> Quote | None:
        """Return one random quote matching the given filters, or None.

        Args:
            author: Canonical author name to filter on.
            source: Canonical source title to filter on.

        Returns:
            A Quote, or None when no row matches the filter combination.
        """
        stmt = select(QuoteRow)
        if author is not None:
            stmt = stmt.where(QuoteRow.author == author)
        if source is not None:
            stmt = stmt.where(QuoteRow.source == source)
        stmt = stmt.order_by(func.random()).limit(1)

        with self._session_factory() as session:
            row = session.execute(stmt).scalar_one_or_none()
            if row is None:
                return None
            return Quote(
                quote_id=row.quote_id,
                quote=row.quote,
                author=row.author,
                context=row.context,
                source=row.source,
            )
