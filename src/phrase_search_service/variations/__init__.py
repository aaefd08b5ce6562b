"""Phrase variation module.

Generates single-word synonym substitutions of a phrase and pairs them with
search engine URL templates.

Usage:
    from phrase_search_service.variations import PhraseSearch
    from phrase_search_service.config import settings

    search = PhraseSearch.from_settings(settings)
    links = await search.search("fast car")
"""

from .exceptions import (
    EmptyQueryError,
    SynonymLookupError,
    TemplateParseError,
    TokenizationError,
    VariationError,
)
from .fanout import FanoutPolicy, LinkFanout, SearchLink, build_search_url
from .generator import VariationGenerator, substitute
from .service import PhraseSearch
from .synonyms import DatamuseSynonymProvider, StaticSynonymProvider, SynonymProvider
from .tokenizer import Tokenizer, TreebankTokenizer

__all__ = [
    # Collaborators
    "Tokenizer",
    "TreebankTokenizer",
    "SynonymProvider",
    "DatamuseSynonymProvider",
    "StaticSynonymProvider",
    # Core
    "VariationGenerator",
    "substitute",
    "FanoutPolicy",
    "LinkFanout",
    "SearchLink",
    "build_search_url",
    "PhraseSearch",
    # Exceptions
    "VariationError",
    "EmptyQueryError",
    "SynonymLookupError",
    "TemplateParseError",
    "TokenizationError",
]
