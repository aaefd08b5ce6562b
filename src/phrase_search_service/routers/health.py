"""Health check endpoints."""

from fastapi import APIRouter, Depends, status

from phrase_search_service.config import settings
from phrase_search_service.logging_config import get_logger
from phrase_search_service.routers.search import get_phrase_search
from phrase_search_service.schemas.health import HealthResponse
from phrase_search_service.variations import PhraseSearch

router = APIRouter(tags=["health"])
logger = get_logger(__name__)


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check endpoint",
    description=(
        "Returns service health status including synonym service "
        "connectivity. Always responds 200; the status field carries the state."
    ),
    responses={
        200: {
            "description": "Service is healthy or degraded",
            "content": {
                "application/json": {
                    "examples": {
                        "healthy": {
                            "summary": "All systems operational",
                            "value": {
                                "status": "ok",
                                "version": "0.1.0",
                                "synonym_service": "reachable",
                            },
                        },
                        "degraded": {
                            "summary": "Synonym service unavailable",
                            "value": {
                                "status": "degraded",
                                "version": "0.1.0",
                                "synonym_service": "unreachable",
                            },
                        },
                    }
                }
            },
        }
    },
)
async def health_check(
    phrase_search: PhraseSearch = Depends(get_phrase_search),
) -> HealthResponse:
    """Health check endpoint.

    Health checks must always respond so monitoring can tell "service dead"
    apart from "service alive but synonym lookups failing". Provider errors
    are logged and reported as "unreachable".
    """
    reachable = False
    try:
        reachable = await phrase_search.synonym_provider.health_check()
    except Exception as e:
        logger.warning("health.synonym_check_failed", error=str(e))

    return HealthResponse(
        status="ok" if reachable else "degraded",
        version=settings.app_version,
        synonym_service="reachable" if reachable else "unreachable",
    )
