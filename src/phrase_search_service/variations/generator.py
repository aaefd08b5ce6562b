"""Phrase variation generation via single-word synonym substitution.

Algorithm:
1. Tokenize the phrase (tokens keep order and duplicates)
2. Start the result with the phrase itself
3. For each token, for each synonym in provider order, replace the first
   textual occurrence of the token in the original phrase
4. Stop as soon as the result holds ``max_variations`` entries

Examples:
    tokens: ["fast", "car"]
    synonyms: fast -> ["quick", "rapid"], car -> ["auto"]

    max_variations=4 -> ["fast car", "quick car", "rapid car", "fast auto"]
    max_variations=3 -> ["fast car", "quick car", "rapid car"]

Known quirk: replacement always targets the first occurrence of the token
text, so a word that repeats ("car to car") yields the same variation for
both occurrences, and a token that is also a substring of an earlier word
("car" in "scar car") replaces inside that word. Variations are not
deduplicated.
"""

import asyncio

from phrase_search_service.logging_config import get_logger

from .exceptions import SynonymLookupError
from .synonyms import SynonymProvider
from .tokenizer import Tokenizer

logger = get_logger(__name__)

DEFAULT_LOOKUP_BATCH_SIZE = 8


def substitute(phrase: str, token: str, synonym: str) -> str:
    """Replace the first occurrence of ``token`` in ``phrase`` with ``synonym``."""
    return phrase.replace(token, synonym, 1)


class VariationGenerator:
    """Builds bounded, ordered phrase variations.

    A failed or timed-out lookup counts as zero synonyms for that token;
    generation continues with the next token. Only tokenizer failures
    propagate.

    With ``concurrent_lookups`` enabled, tokens are looked up in batches of
    ``lookup_batch_size`` with asyncio.gather. Each batch is reassembled in
    token order before the cap is applied, so output matches sequential mode,
    and no further batch is issued once the cap is reached. Sequential mode
    stops issuing lookups as soon as the cap is reached.
    """

    def __init__(
        self,
        tokenizer: Tokenizer,
        synonym_provider: SynonymProvider,
        lookup_timeout: float | None = None,
        concurrent_lookups: bool = False,
        lookup_batch_size: int = DEFAULT_LOOKUP_BATCH_SIZE,
    ) -> None:
        """Initialize generator.

        Args:
            tokenizer: Splits phrases into word tokens
            synonym_provider: Supplies synonyms per token
            lookup_timeout: Seconds before a single lookup is abandoned
                (None disables the limit)
            concurrent_lookups: Look up tokens concurrently, batch by batch
            lookup_batch_size: Maximum lookups in flight in concurrent mode
        """
        if lookup_batch_size < 1:
            raise ValueError("lookup_batch_size must be at least 1")

        self.tokenizer = tokenizer
        self.synonym_provider = synonym_provider
        self.lookup_timeout = lookup_timeout
        self.concurrent_lookups = concurrent_lookups
        self.lookup_batch_size = lookup_batch_size

    async def generate(self, phrase: str, max_variations: int) -> list[str]:
        """Generate variations of a phrase.

        Args:
            phrase: Original phrase, always the first variation
            max_variations: Upper bound on the number of variations (>= 1)

        Returns:
            Ordered variations, between 1 and max_variations entries

        Raises:
            ValueError: If max_variations is less than 1
            TokenizationError: If the phrase cannot be tokenized
        """
        if max_variations < 1:
            raise ValueError("max_variations must be at least 1")

        tokens = self.tokenizer.tokenize(phrase)
        variations = [phrase]

        if len(variations) >= max_variations:
            return variations

        if self.concurrent_lookups:
            for i in range(0, len(tokens), self.lookup_batch_size):
                batch = tokens[i : i + self.lookup_batch_size]
                synonym_lists = await asyncio.gather(
                    *(self._safe_lookup(token) for token in batch)
                )
                if any(
                    self._extend(variations, phrase, token, synonyms, max_variations)
                    for token, synonyms in zip(batch, synonym_lists)
                ):
                    break
        else:
            for token in tokens:
                synonyms = await self._safe_lookup(token)
                if self._extend(variations, phrase, token, synonyms, max_variations):
                    break

        logger.debug(
            "variations.generated",
            phrase=phrase,
            tokens=len(tokens),
            count=len(variations),
        )
        return variations

    @staticmethod
    def _extend(
        variations: list[str],
        phrase: str,
        token: str,
        synonyms: list[str],
        max_variations: int,
    ) -> bool:
        """Append substitutions for one token. Returns True once the cap is hit."""
        for synonym in synonyms:
            variations.append(substitute(phrase, token, synonym))
            if len(variations) >= max_variations:
                return True
        return False

    async def _safe_lookup(self, token: str) -> list[str]:
        try:
            if self.lookup_timeout is None:
                return await self.synonym_provider.lookup(token)
            return await asyncio.wait_for(
                self.synonym_provider.lookup(token), timeout=self.lookup_timeout
            )
        except SynonymLookupError as e:
            logger.warning(
                "variations.synonym_lookup_failed",
                token=token,
                error=str(e),
            )
        except asyncio.TimeoutError:
            logger.warning(
                "variations.synonym_lookup_timeout",
                token=token,
                timeout_seconds=self.lookup_timeout,
            )
        return []
