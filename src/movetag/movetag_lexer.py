"""
Lexical analyzer for Move type tag and transaction argument text.

This module provides core components for converting raw text into token streams:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single token with type, value, source location and length.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Functions:
    tokenize(source, keep_eof): Lexes a whole string into a list of tokens (`EOF` only on request).

Features:
    - Emits runs of ASCII whitespace as a single `WHITESPACE` token
    - Longest-match recognition of names, then keyword classification
      (`vector2` is a name, not `vector` followed by `2`)
    - Recognizes:
        * Punctuation `<`, `>`, `,` and `::`
        * Address literals `0x1f` / `0X1F`
        * Integer literals with optional `u8` / `u64` / `u128` suffix
        * Byte strings `b"ascii"` and `x"hex"`

Raises:
    LexError: For unrecognized characters, malformed address prefixes, invalid
        numeric suffixes and unterminated or malformed byte strings.

Example:
    >>> [tok.type for tok in tokenize("vector<u8>")]
    ['VECTOR_TYPE', 'LT', 'U8_TYPE', 'GT']
"""

from typing import Any

from movetag.movetag_constants import (
    ADDRESS,
    ASCII_DIGITS,
    ASCII_WHITESPACE,
    BYTES,
    EOF,
    HEX_DIGITS,
    INTEGER_SUFFIXES,
    MAX_PUNCTUATION_LENGTH,
    NAME,
    U64,
    WHITESPACE,
    punctuation_tokens,
    token_hashmap,
)
from movetag.movetag_errors import LexError
from movetag.movetag_identifier import is_valid_identifier_char


def _is_ascii_alpha(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def _is_ascii_alnum(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            LexError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise LexError(
                f"unexpected end of input at line {self.line}, col {self.column}",
                self.line,
                self.column,
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character at the given offset from the current position without advancing.

        Returns:
            str: The character at the offset, or an empty string if out of bounds.
        """
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token.

    Attributes:
        type (str): The token type (e.g. 'NAME', 'U64', 'EOF'), see `movetag_constants`.
        value (str): Payload text: digit text for integers, hex text for byte
            strings, `0x`-prefixed digits for addresses, the spelling otherwise.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
        length (int): Number of source characters the token consumed.
    """

    def __init__(
        self, type_: str, value: str, line: int = 0, col: int = 0, length: int = 0
    ):
        self.type = type_
        self.value = value
        self.line = line
        self.col = col
        self.length = length

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col))


class Lexer:
    """Lexical analyzer for type tag and transaction argument text.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def error(self, message: str, line: int, col: int) -> LexError:
        return LexError(f"{message} at line {line}, col {col}", line, col)

    def match_punctuation(self) -> str | None:
        """Attempts to match the longest punctuation spelling at the current position.

        Returns:
            str | None: The token type if a match is found, otherwise None.
        """
        max_token = None
        match_len = 0
        candidate = ""

        for i in range(MAX_PUNCTUATION_LENGTH):
            ch = self.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in punctuation_tokens:
                max_token = candidate
                match_len = i + 1

        if max_token:
            for _ in range(match_len):
                self.advance()
            return punctuation_tokens[max_token]
        return None

    def read_whitespace(self) -> str:
        text = ""
        while self.peek() in ASCII_WHITESPACE:
            text += self.advance()
        return text

    def read_name(self) -> str:
        name = self.advance()
        while not self.stream.end_of_file() and is_valid_identifier_char(self.peek()):
            name += self.advance()
        return name

    def read_address(self, line: int, col: int) -> str:
        """Reads `0x` followed by one or more hex digits; the prefix is normalised to `0x`."""
        self.advance()  # 0
        self.advance()  # x or X
        if self.peek() not in HEX_DIGITS:
            raise self.error("unrecognized token: address literal needs hex digits", line, col)
        digits = ""
        while self.peek() in HEX_DIGITS:
            digits += self.advance()
        return "0x" + digits

    def read_number(self, line: int, col: int) -> tuple[str, str]:
        """Reads an integer literal and its optional width suffix.

        Returns:
            tuple[str, str]: The token type (`U8`, `U64` or `U128`) and the digit text.

        Raises:
            LexError: If a suffix is present and is not exactly `u8`, `u64` or `u128`.
        """
        digits = ""
        while self.peek() in ASCII_DIGITS:
            digits += self.advance()

        # Any alphanumeric character after the digits starts a suffix
        if self.peek() != "" and self.peek().isalnum():
            suffix = self.advance()
            while _is_ascii_alnum(self.peek()):
                suffix += self.advance()
            if suffix not in INTEGER_SUFFIXES:
                raise self.error(f"invalid suffix {suffix!r}", line, col)
            return INTEGER_SUFFIXES[suffix], digits
        return U64, digits

    def read_byte_string(self, line: int, col: int) -> str:
        """Reads `b"..."` (ASCII, returned hex-encoded) or `x"..."` (hex, returned as is)."""
        is_hex = self.advance() == "x"
        self.advance()  # opening quote
        body = ""
        while True:
            if self.stream.end_of_file():
                raise self.error("unterminated byte string literal", line, col)
            ch = self.advance()
            if ch == '"':
                break
            if is_hex and ch not in HEX_DIGITS:
                raise self.error(f"invalid hex digit {ch!r} in byte string", line, col)
            if not is_hex and not ch.isascii():
                raise self.error(f"non-ASCII character {ch!r} in byte string", line, col)
            body += ch
        return body if is_hex else body.encode("ascii").hex()

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token, or an `EOF` token once the input is exhausted.

        Raises:
            LexError: If the text at the current position is not a valid token.
        """
        line, col = self.stream.line, self.stream.column
        start = self.stream.position

        if self.stream.end_of_file():
            return Token(EOF, "EOF", line, col)

        ch = self.peek()

        # 1. Address literal
        if ch == "0" and self.peek(1) in ("x", "X"):
            type_, value = ADDRESS, self.read_address(line, col)

        # 2. Integer literal
        elif ch in ASCII_DIGITS:
            type_, value = self.read_number(line, col)

        # 3. Byte string
        elif ch in ("b", "x") and self.peek(1) == '"':
            type_, value = BYTES, self.read_byte_string(line, col)

        # 4. Whitespace run
        elif ch in ASCII_WHITESPACE:
            type_, value = WHITESPACE, self.read_whitespace()

        # 5. Name or keyword
        elif _is_ascii_alpha(ch):
            value = self.read_name()
            type_ = token_hashmap.get(value, NAME)

        # 6. Punctuation, anything else is an error
        else:
            punct = self.match_punctuation()
            if punct is None:
                raise self.error(f"unrecognized token {ch!r}", line, col)
            type_ = punct
            value = self.stream.source[start : self.stream.position]

        return Token(type_, value, line, col, self.stream.position - start)


def tokenize(source: str, keep_eof: bool = False) -> list[Token]:
    """Lexes `source` completely.

    The final `EOF` token, positioned just past the last character, is dropped
    unless `keep_eof` is set.
    """
    lexer = Lexer(CharacterStream(source))
    tokens = []
    while True:
        tok = lexer.next_token()
        if tok.type == EOF:
            if keep_eof:
                tokens.append(tok)
            break
        tokens.append(tok)
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "token_hashmap", "tokenize"]
