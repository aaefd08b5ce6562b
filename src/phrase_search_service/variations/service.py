"""Request-level orchestration: phrase -> variations -> search links."""

from phrase_search_service.config import Settings
from phrase_search_service.logging_config import get_logger

from .exceptions import EmptyQueryError
from .fanout import FanoutPolicy, LinkFanout, SearchLink
from .generator import VariationGenerator
from .synonyms import DatamuseSynonymProvider, SynonymProvider
from .tokenizer import TreebankTokenizer

logger = get_logger(__name__)


class PhraseSearch:
    """Generates search links for a user phrase.

    Holds only configured, stateless components, so a single instance can
    serve concurrent requests.
    """

    def __init__(
        self,
        generator: VariationGenerator,
        fanout: LinkFanout,
        max_variations: int = 7,
    ) -> None:
        if max_variations < 1:
            raise ValueError("max_variations must be at least 1")
        self.generator = generator
        self.fanout = fanout
        self.max_variations = max_variations

    @property
    def synonym_provider(self) -> SynonymProvider:
        return self.generator.synonym_provider

    @classmethod
    def from_settings(cls, settings: Settings) -> "PhraseSearch":
        """Build the default component graph from application settings."""
        provider = DatamuseSynonymProvider(
            base_url=settings.synonym_api_base_url,
            timeout_seconds=settings.synonym_timeout_seconds,
            max_retries=settings.synonym_max_retries,
            user_agent=settings.synonym_user_agent,
        )
        generator = VariationGenerator(
            tokenizer=TreebankTokenizer(),
            synonym_provider=provider,
            lookup_timeout=settings.synonym_lookup_timeout_seconds,
            concurrent_lookups=settings.synonym_concurrent_lookups,
            lookup_batch_size=settings.synonym_lookup_batch_size,
        )
        fanout = LinkFanout(
            templates=settings.search_url_templates,
            policy=FanoutPolicy(settings.fanout_policy),
        )
        return cls(generator, fanout, max_variations=settings.max_variations)

    async def search(self, query: str | None) -> list[SearchLink]:
        """Produce search links for a query.

        Args:
            query: Phrase supplied by the caller

        Returns:
            Search links, original phrase first

        Raises:
            EmptyQueryError: If query is missing or empty
            TokenizationError: If the phrase cannot be tokenized
        """
        if not query:
            raise EmptyQueryError()

        variations = await self.generator.generate(query, self.max_variations)
        links = self.fanout.fanout(variations)

        logger.info(
            "search.links_built",
            query=query[:100],
            variations=len(variations),
            links=len(links),
            policy=self.fanout.policy.value,
        )
        logger.debug("search.links_grouped", groups=LinkFanout.group(links))
        return links
