from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from quotes_api.api.dependencies import get_quote_service
from quotes_api.core.rate_limit import enforce_rate_limit
from quotes_api.schemas.quote import QuoteResponse
from quotes_api.services.quote_service import QuoteService

router = APIRouter(tags=["Quotes"])


@router.get(
    "/quotes",
    responses={
        200: {"model": QuoteResponse, "description": "A random quote, or {} if none matches."},
        400: {"description": "Malformed credentials or unknown character/source code."},
        401: {"description": "Unknown identity or wrong secret."},
        429: {"description": "More than one request per second."},
    },
)
async def serve_quote(
    identifier: Annotated[str, Depends(enforce_rate_limit)],
    quote_service: Annotated[QuoteService, Depends(get_quote_service)],
    character: Annotated[str | None, Query(description="Character code, e.g. moira-burton")] = None,
    source: Annotated[str | None, Query(description="Source code, e.g. resident-evil-5")] = None,
) -> dict[str, Any]:
    """Serve one random quote.

    Filters by character and/or source when given. A filter combination that
    matches nothing yields an empty object rather than an error.

    Returns:
        dict: The quote row, or ``{}``.
    """
    quote = await quote_service.random_quote(character=character, source=source)
    if quote is None:
        return {}
    return QuoteResponse(**quote.as_dict()).model_dump()
