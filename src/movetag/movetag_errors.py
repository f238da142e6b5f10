"""
Exceptions raised by the movetag lexer and parser.

Every failure is reported by raising a subclass of `ParseError`, which is itself a
`ValueError`. Messages are written to be shown to end users verbatim.

Classes:
    ParseError: Base class for all parse failures.
    LexError: The input could not be split into tokens.
    GrammarError: Tokens were valid but arranged in a way the grammar rejects.
    UnexpectedTokenError: A specific token or token category was required.
    TrailingInputError: Input remained after a complete value was parsed.
    SemanticError: A well-formed literal or tag was rejected on its contents.
    NestingLimitError: A type tag nested deeper than the configured limit.
    TokenStreamError: The parser read past the end-of-input marker.
"""

from typing import Any


class ParseError(ValueError):
    """Base class for every error raised while parsing type tags and arguments."""


class LexError(ParseError):
    """Raised when the tokenizer meets text it cannot classify.

    Attributes:
        line (int): 1-based line of the offending character.
        col (int): 1-based column of the offending character.
    """

    def __init__(self, message: str, line: int = 0, col: int = 0):
        super().__init__(message)
        self.line = line
        self.col = col


class GrammarError(ParseError):
    """Base class for syntax errors detected by the recursive-descent grammar."""


class UnexpectedTokenError(GrammarError):
    """Raised when the next token is not the one the grammar requires.

    Attributes:
        expected (str): The token type or category that was required.
        actual (Any): The token that was found instead.
    """

    def __init__(self, message: str, expected: str, actual: Any):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class TrailingInputError(GrammarError):
    """Raised when tokens remain after a complete value has been parsed."""

    def __init__(self, message: str, actual: Any):
        super().__init__(message)
        self.actual = actual


class SemanticError(ParseError):
    """Raised when a syntactically valid input describes an invalid value."""


class NestingLimitError(ParseError):
    """Raised when type tag recursion reaches the nesting limit.

    Attributes:
        depth (int): The depth at which parsing was refused.
    """

    def __init__(self, message: str, depth: int):
        super().__init__(message)
        self.depth = depth


class TokenStreamError(ParseError):
    """Raised when the parser consumes past the end-of-input marker."""


__all__ = [
    "GrammarError",
    "LexError",
    "NestingLimitError",
    "ParseError",
    "SemanticError",
    "TokenStreamError",
    "TrailingInputError",
    "UnexpectedTokenError",
]
