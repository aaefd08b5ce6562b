"""Phrase tokenization."""

from abc import ABC, abstractmethod

from nltk.tokenize import TreebankWordTokenizer

from .exceptions import TokenizationError


class Tokenizer(ABC):
    """Abstract base class for phrase tokenizers.

    Implementations must return tokens as literal substrings of the phrase,
    left to right, keeping repeated words once per occurrence. Variations are
    built by replacing token text inside the original phrase, so a token that
    is not a substring of the phrase can never be substituted.
    """

    @abstractmethod
    def tokenize(self, phrase: str) -> list[str]:
        """Split a phrase into word tokens.

        Args:
            phrase: Text to tokenize

        Returns:
            Ordered list of tokens

        Raises:
            TokenizationError: If the phrase cannot be tokenized
        """
        pass


class TreebankTokenizer(Tokenizer):
    """Penn Treebank tokenizer backed by NLTK.

    Uses span_tokenize rather than tokenize: the Treebank rules rewrite
    double quotes into ``...'' pairs, while spans always point back into the
    original text. The Treebank tokenizer is rule based and needs no NLTK
    data downloads.

    Examples:
        >>> TreebankTokenizer().tokenize("fast car")
        ['fast', 'car']

        >>> TreebankTokenizer().tokenize('the "red" car.')
        ['the', '"', 'red', '"', 'car', '.']
    """

    def __init__(self) -> None:
        self._tokenizer = TreebankWordTokenizer()

    def tokenize(self, phrase: str) -> list[str]:
        try:
            spans = list(self._tokenizer.span_tokenize(phrase))
        except Exception as e:
            raise TokenizationError(f"Failed to tokenize phrase: {e}") from e

        tokens = [phrase[start:end] for start, end in spans]
        return [token for token in tokens if token]
