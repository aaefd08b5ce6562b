"""Synonym providers.

The default provider queries the Datamuse API
(https://www.datamuse.com/api/), which answers
``GET /words?rel_syn=<word>`` with a JSON array such as::

    [{"word": "quick", "score": 1234}, {"word": "rapid", "score": 987}]

Only the ``word`` field of each entry is used, in response order.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any

import httpx

from phrase_search_service.logging_config import get_logger

from .exceptions import SynonymLookupError

logger = get_logger(__name__)


class SynonymProvider(ABC):
    """Abstract base class for synonym providers.

    Implementations return candidates in relevance order without filtering
    duplicates, and signal every failure with SynonymLookupError so callers
    can recover per word.
    """

    @abstractmethod
    async def lookup(self, word: str) -> list[str]:
        """Fetch synonyms for a single word.

        Args:
            word: Non-empty token to look up

        Returns:
            Zero or more synonyms in provider order

        Raises:
            SynonymLookupError: If the provider cannot be reached or answers
                with an unusable response
        """
        pass

    async def health_check(self) -> bool:
        """Report whether the provider is usable. Local providers always are."""
        return True


class DatamuseSynonymProvider(SynonymProvider):
    """Synonym provider backed by the Datamuse ``rel_syn`` query.

    Transient failures (timeouts, connection errors, 5xx) are retried with
    exponential backoff up to ``max_retries`` attempts in total. A 429 waits
    for ``Retry-After`` (or the backoff delay) before the next attempt. Other
    client errors (4xx) and malformed payloads fail immediately.
    """

    DEFAULT_BASE_URL = "https://api.datamuse.com"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 5.0,
        max_retries: int = 2,
        user_agent: str = "PhraseSearch/1.0",
        retry_base_delay: float = 0.5,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Datamuse provider.

        Args:
            base_url: Datamuse API root
            timeout_seconds: Per-request timeout
            max_retries: Total attempts per word (at least 1)
            user_agent: User-Agent header for requests
            retry_base_delay: Base delay in seconds for exponential backoff
            transport: Optional httpx transport (used by tests)
        """
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")

        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.user_agent = user_agent
        self.retry_base_delay = retry_base_delay
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        )

    async def lookup(self, word: str) -> list[str]:
        if not word:
            raise ValueError("word must be non-empty")

        async with self._client() as client:
            payload = await self._fetch_with_retry(client, word)

        return self._parse_words(word, payload)

    async def _fetch_with_retry(self, client: httpx.AsyncClient, word: str) -> Any:
        """Fetch the raw JSON payload for a word.

        Raises:
            SynonymLookupError: On client errors, undecodable bodies, or once
                all retries are exhausted
        """
        last_error: SynonymLookupError | None = None

        for attempt in range(self.max_retries):
            try:
                response = await client.get("/words", params={"rel_syn": word})

                if response.status_code == 429:
                    if attempt < self.max_retries - 1:
                        delay = self._retry_after(response, attempt)
                        logger.warning(
                            "synonyms.rate_limited",
                            word=word,
                            attempt=attempt + 1,
                            retry_after=delay,
                        )
                        await asyncio.sleep(delay)
                        continue
                    raise SynonymLookupError(word, "rate limited")

                response.raise_for_status()
                return response.json()

            except httpx.TimeoutException as e:
                last_error = SynonymLookupError(word, f"timeout: {e}")
            except httpx.HTTPStatusError as e:
                if e.response.status_code < 500:
                    raise SynonymLookupError(
                        word, f"HTTP error {e.response.status_code}"
                    ) from e
                last_error = SynonymLookupError(
                    word, f"server error {e.response.status_code}"
                )
            except httpx.RequestError as e:
                last_error = SynonymLookupError(word, f"request error: {e}")
            except ValueError as e:
                raise SynonymLookupError(word, f"invalid JSON: {e}") from e

            if attempt < self.max_retries - 1:
                logger.debug(
                    "synonyms.lookup_retry",
                    word=word,
                    attempt=attempt + 1,
                    error=str(last_error),
                )
                await asyncio.sleep(self.retry_base_delay * 2**attempt)

        raise last_error or SynonymLookupError(word, "no attempts made")

    def _retry_after(self, response: httpx.Response, attempt: int) -> float:
        """Seconds to wait after a 429, from ``Retry-After`` or the backoff."""
        try:
            return max(0.0, float(response.headers["Retry-After"]))
        except (KeyError, ValueError):
            return self.retry_base_delay * 2**attempt

    @staticmethod
    def _parse_words(word: str, payload: Any) -> list[str]:
        if not isinstance(payload, list):
            raise SynonymLookupError(word, "expected a JSON array")

        synonyms: list[str] = []
        for item in payload:
            if not isinstance(item, dict) or not isinstance(item.get("word"), str):
                raise SynonymLookupError(word, f"unexpected entry {item!r}")
            synonyms.append(item["word"])
        return synonyms

    async def health_check(self) -> bool:
        """Check if the Datamuse API answers a trivial query.

        Returns:
            True if the service responded with a 2xx status.
        """
        try:
            async with self._client() as client:
                response = await client.get("/words", params={"rel_syn": "test", "max": 1})
            return response.is_success
        except httpx.HTTPError:
            return False


class StaticSynonymProvider(SynonymProvider):
    """In-memory provider backed by a word -> synonyms mapping.

    Unknown words have no synonyms. Handy for local development without
    network access and as a deterministic stand-in in tests.

    Example:
        >>> provider = StaticSynonymProvider({"fast": ["quick", "rapid"]})
    """

    def __init__(self, synonyms: dict[str, list[str]]) -> None:
        self.synonyms = {word: list(candidates) for word, candidates in synonyms.items()}

    async def lookup(self, word: str) -> list[str]:
        return list(self.synonyms.get(word, []))
