"""Search response schemas.

Both fanout policies serialize to the same flat ``results`` list. Under the
cross-product policy the list is grouped by variation.
"""

from pydantic import BaseModel, Field

from phrase_search_service.variations import SearchLink


class SearchResult(BaseModel):
    """One variation paired with one search URL."""

    title: str = Field(
        ...,
        description="Phrase variation used as the search text",
        examples=["quick car"],
    )
    url: str = Field(
        ...,
        description="Search URL with the variation in its q parameter",
        examples=["https://www.gileq.com/dsr?q=quick+car"],
    )

    @classmethod
    def from_link(cls, link: SearchLink) -> "SearchResult":
        return cls(title=link.title, url=link.url)


class SearchResponse(BaseModel):
    """Search links for every generated variation, original phrase first."""

    results: list[SearchResult] = Field(
        default_factory=list,
        description="Variation/URL pairs in generation order",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "results": [
                        {
                            "title": "fast car",
                            "url": "https://www.gileq.com/dsr?q=fast+car",
                        },
                        {
                            "title": "quick car",
                            "url": "https://search.searchalike.com/serp?q=quick+car",
                        },
                    ]
                }
            ]
        }
    }
