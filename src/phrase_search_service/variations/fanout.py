"""Pairing of phrase variations with search engine URL templates."""

from dataclasses import dataclass
from enum import Enum
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from phrase_search_service.logging_config import get_logger

from .exceptions import TemplateParseError

logger = get_logger(__name__)

QUERY_PARAM = "q"


class FanoutPolicy(str, Enum):
    """How variations are paired with URL templates.

    Values:
        INDEXED: Variation i uses template i mod N (one link per variation)
        CROSS_PRODUCT: Every variation uses every template
    """

    INDEXED = "indexed"
    CROSS_PRODUCT = "cross_product"


@dataclass(frozen=True)
class SearchLink:
    """A variation paired with a ready-to-use search URL."""

    title: str
    url: str


def build_search_url(template: str, value: str) -> str:
    """Set the ``q`` query parameter of a URL template.

    Existing parameters keep their order; an existing ``q`` is overwritten
    in place, otherwise ``q`` is appended. Values are encoded with standard
    query encoding (spaces become ``+``).

    Args:
        template: Base search URL, e.g. "https://www.gileq.com/dsr?q="
        value: Text to search for

    Returns:
        Fully-qualified search URL

    Raises:
        TemplateParseError: If the template cannot be parsed or lacks a
            scheme or host

    Examples:
        >>> build_search_url("https://www.gileq.com/dsr?q=", "fast car")
        'https://www.gileq.com/dsr?q=fast+car'

        >>> build_search_url("https://example.com/s?lang=en", "a&b")
        'https://example.com/s?lang=en&q=a%26b'
    """
    try:
        parts = urlsplit(template)
    except ValueError as e:
        raise TemplateParseError(template, str(e)) from e

    if not parts.scheme or not parts.netloc:
        raise TemplateParseError(template, "missing scheme or host")

    params: list[tuple[str, str]] = []
    replaced = False
    for key, existing in parse_qsl(parts.query, keep_blank_values=True):
        if key != QUERY_PARAM:
            params.append((key, existing))
        elif not replaced:
            params.append((QUERY_PARAM, value))
            replaced = True
    if not replaced:
        params.append((QUERY_PARAM, value))

    return urlunsplit(parts._replace(query=urlencode(params)))


class LinkFanout:
    """Turns variations into search links over a fixed template list.

    Templates are injected at construction and never modified. A template
    that fails to parse drops only the links that would use it; the failure
    is logged and every other link is still produced.
    """

    def __init__(
        self,
        templates: list[str],
        policy: FanoutPolicy = FanoutPolicy.INDEXED,
    ) -> None:
        if not templates:
            raise ValueError("at least one URL template is required")
        self.templates = tuple(templates)
        self.policy = FanoutPolicy(policy)

    def fanout(self, variations: list[str]) -> list[SearchLink]:
        """Pair variations with templates according to the configured policy.

        Args:
            variations: Ordered phrase variations

        Returns:
            Flat list of links. Under CROSS_PRODUCT the list is grouped by
            variation, templates in configured order.
        """
        if self.policy is FanoutPolicy.INDEXED:
            pairs = [
                (variation, self.templates[i % len(self.templates)])
                for i, variation in enumerate(variations)
            ]
        else:
            pairs = [
                (variation, template)
                for variation in variations
                for template in self.templates
            ]

        links: list[SearchLink] = []
        for variation, template in pairs:
            try:
                links.append(SearchLink(title=variation, url=build_search_url(template, variation)))
            except TemplateParseError as e:
                logger.warning(
                    "fanout.template_invalid",
                    template=template,
                    variation=variation,
                    error=str(e),
                )
        return links

    @staticmethod
    def group(links: list[SearchLink]) -> list[tuple[str, list[str]]]:
        """Group links by variation, preserving first-seen order.

        Example:
            >>> LinkFanout.group([SearchLink("a", "u1"), SearchLink("a", "u2")])
            [('a', ['u1', 'u2'])]
        """
        grouped: dict[str, list[str]] = {}
        for link in links:
            grouped.setdefault(link.title, []).append(link.url)
        return list(grouped.items())
