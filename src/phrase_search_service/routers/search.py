"""Search API endpoint.

Endpoints:
- GET /search?query=<phrase>: Search links for synonym variations of a phrase
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from phrase_search_service.config import settings
from phrase_search_service.logging_config import get_logger
from phrase_search_service.schemas.search import SearchResponse, SearchResult
from phrase_search_service.variations import PhraseSearch, TokenizationError

router = APIRouter(tags=["search"])
logger = get_logger(__name__)


# Singleton search instance
_phrase_search: PhraseSearch | None = None


def get_phrase_search() -> PhraseSearch:
    """Get or create the phrase search instance.

    PhraseSearch holds no per-request state, so one instance built from
    settings serves every request.
    """
    global _phrase_search
    if _phrase_search is None:
        _phrase_search = PhraseSearch.from_settings(settings)
    return _phrase_search


@router.get(
    "/search",
    response_model=SearchResponse,
    status_code=status.HTTP_200_OK,
    summary="Search links for phrase variations",
    description="""
Generate variations of a phrase by substituting single words with synonyms,
then pair each variation with a search engine URL.

The original phrase is always the first result. The number of variations is
capped by configuration (default 7).

Returns **400** with the plain text body `Query is empty.` when `query` is
missing or empty.
    """,
    responses={
        400: {
            "description": "Query is missing or empty",
            "content": {"text/plain": {"example": "Query is empty."}},
        },
        500: {"description": "Phrase could not be processed"},
    },
)
async def search(
    query: str | None = Query(default=None, description="Phrase to vary"),
    phrase_search: PhraseSearch = Depends(get_phrase_search),
) -> SearchResponse:
    """Build search links for a phrase.

    Args:
        query: Phrase supplied by the caller
        phrase_search: Phrase search instance

    Returns:
        SearchResponse with one entry per produced link

    Raises:
        EmptyQueryError: If query is missing or empty (handled as 400)
        HTTPException 500: If the phrase cannot be tokenized
    """
    try:
        links = await phrase_search.search(query)
    except TokenizationError as e:
        logger.error("search.endpoint.tokenization_failed", query=(query or "")[:100], error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to process query.",
        ) from e

    return SearchResponse(results=[SearchResult.from_link(link) for link in links])
