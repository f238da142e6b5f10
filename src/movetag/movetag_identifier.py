"""
Identifier rules for module and struct names.

Valid identifiers start with an ASCII letter followed by letters, digits and
underscores, or start with `_` followed by at least one such character. The special
name `<SELF>` is also accepted.

Functions:
    is_valid_identifier_char(c): Character predicate used by the lexer for names.
    is_valid(s): Whole-string validity check.

Classes:
    Identifier: A validated identifier string.
    IdentifierError: Raised for invalid identifier text.
"""

from typing import Any

SELF_IDENTIFIER = "<SELF>"


class IdentifierError(ValueError):
    """Raised when a string is not a valid identifier."""


def is_valid_identifier_char(c: str) -> bool:
    return c == "_" or ("a" <= c <= "z") or ("A" <= c <= "Z") or ("0" <= c <= "9")


def is_valid(s: str) -> bool:
    if s == SELF_IDENTIFIER:
        return True
    if not s:
        return False
    first = s[0]
    if ("a" <= first <= "z") or ("A" <= first <= "Z"):
        return all(is_valid_identifier_char(c) for c in s[1:])
    if first == "_" and len(s) > 1:
        return all(is_valid_identifier_char(c) for c in s[1:])
    return False


class Identifier:
    """A module or struct name that passed `is_valid`.

    Attributes:
        value (str): The identifier text.
    """

    def __init__(self, value: str):
        if not is_valid(value):
            raise IdentifierError(f"Invalid identifier '{value}'")
        self.value = value

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Identifier({self.value!r})"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Identifier) and self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)


__all__ = ["Identifier", "IdentifierError", "is_valid", "is_valid_identifier_char"]
