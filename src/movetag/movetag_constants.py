"""
Shared constants for the movetag lexer and parser.

Exports:
    - token_hashmap: reserved spellings mapped to their keyword token types
    - punctuation_tokens: punctuation spellings mapped to token types
    - PRIMITIVE_TYPE_TOKENS: keyword token types mapped to primitive type tag kinds
    - INTEGER_SUFFIXES: numeric literal suffixes mapped to integer token types
    - INTEGER_BITS: bit width of every integer kind
    - MAX_TYPE_TAG_NESTING: default recursion cap for type tags
    - ADDRESS_LENGTH: width of an account address in bytes
"""

# Token types
U8_TYPE = "U8_TYPE"
U64_TYPE = "U64_TYPE"
U128_TYPE = "U128_TYPE"
BOOL_TYPE = "BOOL_TYPE"
ADDRESS_TYPE = "ADDRESS_TYPE"
VECTOR_TYPE = "VECTOR_TYPE"
SIGNER_TYPE = "SIGNER_TYPE"
TRUE = "TRUE"
FALSE = "FALSE"
NAME = "NAME"
ADDRESS = "ADDRESS"
U8 = "U8"
U64 = "U64"
U128 = "U128"
BYTES = "BYTES"
WHITESPACE = "WHITESPACE"
COLON_COLON = "COLON_COLON"
LT = "LT"
GT = "GT"
COMMA = "COMMA"
EOF = "EOF"

token_hashmap: dict[str, str] = {
    "u8": U8_TYPE,
    "u64": U64_TYPE,
    "u128": U128_TYPE,
    "bool": BOOL_TYPE,
    "address": ADDRESS_TYPE,
    "vector": VECTOR_TYPE,
    "true": TRUE,
    "false": FALSE,
    "signer": SIGNER_TYPE,
}

punctuation_tokens: dict[str, str] = {
    "<": LT,
    ">": GT,
    ",": COMMA,
    "::": COLON_COLON,
}

MAX_PUNCTUATION_LENGTH = max(len(p) for p in punctuation_tokens)

PRIMITIVE_TYPE_TOKENS: dict[str, str] = {
    U8_TYPE: "u8",
    U64_TYPE: "u64",
    U128_TYPE: "u128",
    BOOL_TYPE: "bool",
    ADDRESS_TYPE: "address",
    SIGNER_TYPE: "signer",
}

INTEGER_SUFFIXES: dict[str, str] = {
    "u8": U8,
    "u64": U64,
    "u128": U128,
}

INTEGER_BITS: dict[str, int] = {
    "u8": 8,
    "u64": 64,
    "u128": 128,
}

# ASCII only: str.isspace() and str.isdigit() also accept non-ASCII characters
ASCII_WHITESPACE = frozenset(" \t\n\r\x0c")
ASCII_DIGITS = frozenset("0123456789")
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

MAX_TYPE_TAG_NESTING = 13

# Upper bound for a caller-supplied nesting limit
NESTING_LIMIT_CEILING = 128

ADDRESS_LENGTH = 16

__all__ = [
    "ADDRESS_LENGTH",
    "INTEGER_BITS",
    "INTEGER_SUFFIXES",
    "MAX_TYPE_TAG_NESTING",
    "NESTING_LIMIT_CEILING",
    "PRIMITIVE_TYPE_TOKENS",
    "punctuation_tokens",
    "token_hashmap",
]
