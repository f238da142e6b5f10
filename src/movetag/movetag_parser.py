"""
Move Type Tag and Transaction Argument Parser

Parses tokens produced by `movetag_lexer` into `TypeTag`, `StructTag` and
`TransactionArgument` values.

Grammar
-------
    TypeTag      := primitive
                  | "vector" "<" TypeTag ">"
                  | AddrLit "::" Name "::" Name [ "<" TypeTag {"," TypeTag} [","] ">" ]
    TxArgument   := IntLit | "true" | "false" | AddrLit | ByteStringLit
    primitive    := "u8" | "u64" | "u128" | "bool" | "address" | "signer"

Parser Behavior
---------------
- One token of lookahead, no backtracking.
- The first error aborts the parse; nothing is recovered.
- Type tag recursion carries an explicit depth and refuses to go past `max_depth`,
  so adversarial input such as thousands of nested `vector<` fails with
  `NestingLimitError` instead of exhausting the interpreter stack.
- Parsers share no state: every entry point builds its own token list and Parser.

Entry Points
------------
- `parse_type_tag(s)`: a single type tag.
- `parse_type_tags(s)`: comma-separated type tags, trailing comma allowed.
- `parse_struct_tag(s)`: a single type tag that must be a struct.
- `parse_transaction_argument(s)`: a single argument literal.
- `parse_transaction_arguments(s)`: comma-separated arguments, trailing comma allowed.
- `parse_string_list(s)`: comma-separated bare names, trailing comma allowed.

Raises
------
ParseError
    `LexError`, `GrammarError` (`UnexpectedTokenError`, `TrailingInputError`),
    `SemanticError` or `NestingLimitError`, see `movetag_errors`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from movetag.movetag_address import AccountAddress, AddressParseError
from movetag.movetag_constants import (
    ADDRESS,
    BYTES,
    COLON_COLON,
    COMMA,
    EOF,
    FALSE,
    GT,
    INTEGER_BITS,
    LT,
    MAX_TYPE_TAG_NESTING,
    NAME,
    NESTING_LIMIT_CEILING,
    PRIMITIVE_TYPE_TOKENS,
    TRUE,
    U8,
    U64,
    U128,
    VECTOR_TYPE,
    WHITESPACE,
)
from movetag.movetag_errors import (
    NestingLimitError,
    ParseError,
    SemanticError,
    TokenStreamError,
    TrailingInputError,
    UnexpectedTokenError,
)
from movetag.movetag_identifier import Identifier, IdentifierError
from movetag.movetag_lexer import Token, tokenize
from movetag.movetag_types import StructTag, TransactionArgument, TypeTag

R = TypeVar("R")

INTEGER_TOKENS: dict[str, str] = {U8: "u8", U64: "u64", U128: "u128"}


class Parser:
    """
    Recursive-descent parser over a whitespace-free token list ending in `EOF`.

    Attributes
    ----------
    tokens : list[Token]
        The input token stream to be parsed.
    position : int
        Current index into the token stream.
    max_depth : int
        Type tag nesting limit; parsing at this depth fails.

    Raises
    ------
    ValueError
        If `max_depth` is outside `1..NESTING_LIMIT_CEILING`.
    """

    def __init__(self, tokens: list[Token], max_depth: int = MAX_TYPE_TAG_NESTING) -> None:
        if not 1 <= max_depth <= NESTING_LIMIT_CEILING:
            raise ValueError(
                f"max_depth must be between 1 and {NESTING_LIMIT_CEILING}, got {max_depth}"
            )
        self.tokens: list[Token] = tokens
        self.position: int = 0
        self.max_depth: int = max_depth

    # Token stream

    def next(self) -> Token:
        """Consumes and returns the next token.

        Raises:
            TokenStreamError: If the stream is exhausted; the grammar never reads
                past `EOF`, so this signals a parser bug.
        """
        if self.position >= len(self.tokens):
            raise TokenStreamError("out of tokens, this should not happen")
        tok = self.tokens[self.position]
        self.position += 1
        return tok

    def peek(self) -> Token | None:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def peek_is(self, type_: str) -> bool:
        tok = self.peek()
        return tok is not None and tok.type == type_

    def consume(self, type_: str) -> Token:
        """Consumes the next token, which must have type `type_`.

        Raises:
            UnexpectedTokenError: If the next token has a different type.
        """
        tok = self.next()
        if tok.type != type_:
            raise UnexpectedTokenError(
                f"Expected token {type_}, got {tok!r} at line {tok.line}, col {tok.col}",
                type_,
                tok,
            )
        return tok

    def unexpected(self, tok: Token, expected: str) -> UnexpectedTokenError:
        return UnexpectedTokenError(
            f"Unexpected token {tok!r} at line {tok.line}, col {tok.col}, expected {expected}",
            expected,
            tok,
        )

    def parse_comma_list(
        self,
        parse_list_item: Callable[[Parser], R],
        end_token: str,
        allow_trailing_comma: bool,
    ) -> list[R]:
        """Parses `item {"," item}` up to, but not including, `end_token`.

        Args:
            parse_list_item: Routine parsing one item from this parser.
            end_token: Token type that terminates the list; left unconsumed.
            allow_trailing_comma: Accept a comma directly before `end_token`.

        Returns:
            list[R]: The parsed items; empty if `end_token` comes first.
        """
        items: list[R] = []
        if self.peek_is(end_token):
            return items
        while True:
            items.append(parse_list_item(self))
            if self.peek_is(end_token):
                break
            self.consume(COMMA)
            if allow_trailing_comma and self.peek_is(end_token):
                break
        return items

    # Grammar

    def parse_string(self) -> str:
        tok = self.next()
        if tok.type != NAME:
            raise self.unexpected(tok, "name")
        return tok.value

    def parse_type_tag(self, depth: int = 0) -> TypeTag:
        """Parses one type tag at nesting level `depth`.

        Raises:
            NestingLimitError: If `depth` has reached `max_depth`.
            UnexpectedTokenError: If the tokens do not form a type tag.
            SemanticError: If the struct address or names are rejected.
        """
        if depth >= self.max_depth:
            raise NestingLimitError(
                f"Exceeded TypeTag nesting limit during parsing: {depth}", depth
            )
        tok = self.next()

        if tok.type in PRIMITIVE_TYPE_TOKENS:
            return TypeTag(PRIMITIVE_TYPE_TOKENS[tok.type])

        if tok.type == VECTOR_TYPE:
            self.consume(LT)
            element = self.parse_type_tag(depth + 1)
            self.consume(GT)
            return TypeTag.vector(element)

        if tok.type == ADDRESS:
            return TypeTag.struct(self.parse_struct_body(tok, depth))

        raise self.unexpected(tok, "type tag")

    def parse_struct_body(self, address_tok: Token, depth: int) -> StructTag:
        """Parses `:: module :: name [<params>]` following an address literal."""
        self.consume(COLON_COLON)
        module = self.parse_string()
        self.consume(COLON_COLON)
        name = self.parse_string()

        type_params: list[TypeTag] = []
        if self.peek_is(LT):
            self.next()
            type_params = self.parse_comma_list(
                lambda parser: parser.parse_type_tag(depth + 1), GT, True
            )
            self.consume(GT)

        try:
            return StructTag(
                AccountAddress.from_hex_literal(address_tok.value),
                Identifier(module),
                Identifier(name),
                type_params,
            )
        except (AddressParseError, IdentifierError) as e:
            raise SemanticError(str(e)) from e

    def parse_transaction_argument(self) -> TransactionArgument:
        """Parses one argument literal.

        Raises:
            UnexpectedTokenError: If the token is not an argument literal.
            SemanticError: On integer overflow, a rejected address, or bad hex.
        """
        tok = self.next()

        if tok.type in INTEGER_TOKENS:
            kind = INTEGER_TOKENS[tok.type]
            digits = tok.value.lstrip("0") or "0"
            limit = 1 << INTEGER_BITS[kind]
            # int() refuses very long digit strings, so reject by length first
            if len(digits) > len(str(limit - 1)) or int(digits) >= limit:
                raise SemanticError(f"Integer literal {tok.value} out of range for {kind}")
            return TransactionArgument(kind, int(digits))

        if tok.type == TRUE:
            return TransactionArgument("bool", True)
        if tok.type == FALSE:
            return TransactionArgument("bool", False)

        if tok.type == ADDRESS:
            try:
                return TransactionArgument(
                    "address", AccountAddress.from_hex_literal(tok.value)
                )
            except AddressParseError as e:
                raise SemanticError(str(e)) from e

        if tok.type == BYTES:
            try:
                return TransactionArgument("u8vector", bytes.fromhex(tok.value))
            except ValueError as e:
                raise SemanticError(f"Invalid hex in byte string {tok.value!r}: {e}") from e

        raise self.unexpected(tok, "transaction argument")


def parse(
    source: str,
    routine: Callable[[Parser], R],
    max_depth: int = MAX_TYPE_TAG_NESTING,
) -> R:
    """Tokenizes `source`, runs `routine` on it and requires all input to be consumed.

    Args:
        source (str): Text to parse.
        routine: Grammar routine producing the result.
        max_depth (int): Type tag nesting limit.

    Raises:
        TrailingInputError: If tokens remain after `routine` returns.
    """
    tokens = [tok for tok in tokenize(source, keep_eof=True) if tok.type != WHITESPACE]
    parser = Parser(tokens, max_depth)
    result = routine(parser)
    tok = parser.next()
    if tok.type != EOF:
        raise TrailingInputError(
            f"Unexpected trailing input {tok!r} at line {tok.line}, col {tok.col}", tok
        )
    return result


def parse_string_list(s: str) -> list[str]:
    return parse(
        s, lambda parser: parser.parse_comma_list(Parser.parse_string, EOF, True)
    )


def parse_type_tags(s: str, max_depth: int = MAX_TYPE_TAG_NESTING) -> list[TypeTag]:
    return parse(
        s,
        lambda parser: parser.parse_comma_list(
            lambda p: p.parse_type_tag(0), EOF, True
        ),
        max_depth,
    )


def parse_type_tag(s: str, max_depth: int = MAX_TYPE_TAG_NESTING) -> TypeTag:
    """Parses a single type tag such as `vector<0x1::M::S<u8>>`."""
    return parse(s, lambda parser: parser.parse_type_tag(0), max_depth)


def parse_transaction_arguments(s: str) -> list[TransactionArgument]:
    return parse(
        s,
        lambda parser: parser.parse_comma_list(
            Parser.parse_transaction_argument, EOF, True
        ),
    )


def parse_transaction_argument(s: str) -> TransactionArgument:
    """Parses a single argument literal such as `255u8`, `0x1` or `b"hi"`."""
    return parse(s, Parser.parse_transaction_argument)


def parse_struct_tag(s: str, max_depth: int = MAX_TYPE_TAG_NESTING) -> StructTag:
    """Parses a type tag and requires it to be a struct.

    Raises:
        SemanticError: If parsing fails (the cause is chained) or the tag is not
            a struct. The message quotes the input text.
    """
    try:
        type_tag = parse(s, lambda parser: parser.parse_type_tag(0), max_depth)
    except ParseError as e:
        raise SemanticError(f"invalid struct tag: {s}, {e}") from e
    if not isinstance(type_tag.value, StructTag):
        raise SemanticError(f"invalid struct tag: {s}")
    return type_tag.value


__all__ = [
    "Parser",
    "parse",
    "parse_string_list",
    "parse_struct_tag",
    "parse_transaction_argument",
    "parse_transaction_arguments",
    "parse_type_tag",
    "parse_type_tags",
]
