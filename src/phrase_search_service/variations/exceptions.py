"""Custom exceptions for variation generation and link fanout."""


class VariationError(Exception):
    """Base exception for phrase variation errors."""

    pass


class EmptyQueryError(VariationError):
    """No phrase was supplied with the request."""

    def __init__(self, message: str = "Query is empty.") -> None:
        super().__init__(message)


class SynonymLookupError(VariationError):
    """Synonym service failed for a single word (network, status, payload)."""

    def __init__(self, word: str, message: str) -> None:
        self.word = word
        super().__init__(f"Synonym lookup for {word!r} failed: {message}")


class TemplateParseError(VariationError):
    """A search URL template could not be parsed."""

    def __init__(self, template: str, message: str) -> None:
        self.template = template
        super().__init__(f"Invalid URL template {template!r}: {message}")


class TokenizationError(VariationError):
    """The tokenizer could not split the phrase into words."""

    pass
