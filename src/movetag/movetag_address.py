"""
Fixed-width account addresses.

An address is `ADDRESS_LENGTH` raw bytes. Textual literals carry a `0x` prefix and may
omit leading zeros (`0x1` is the same address as `0x000...01`); the canonical
rendering strips them again.

Classes:
    AccountAddress: Immutable address value with hex conversions.
    AddressParseError: Raised for malformed address text or bytes.

Example:
    >>> addr = AccountAddress.from_hex_literal("0x1")
    >>> addr.to_hex_literal()
    '0x1'
"""

from typing import Any

from movetag.movetag_constants import ADDRESS_LENGTH, HEX_DIGITS


class AddressParseError(ValueError):
    """Raised when text or bytes cannot be turned into an `AccountAddress`."""


class AccountAddress:
    """An account address of exactly `ADDRESS_LENGTH` bytes.

    Attributes:
        address (bytes): The raw address bytes.
    """

    LENGTH: int = ADDRESS_LENGTH

    def __init__(self, address: bytes):
        if len(address) != self.LENGTH:
            raise AddressParseError(
                f"Invalid address length {len(address)}, expected {self.LENGTH} bytes"
            )
        self.address = bytes(address)

    @classmethod
    def from_hex(cls, hex_str: str) -> "AccountAddress":
        """Builds an address from exactly `2 * LENGTH` hex digits, without a prefix.

        Raises:
            AddressParseError: If the text is not hex or has the wrong length.
        """
        if not all(c in HEX_DIGITS for c in hex_str):
            raise AddressParseError(f"Invalid hex in address: {hex_str!r}")
        if len(hex_str) != cls.LENGTH * 2:
            raise AddressParseError(
                f"Invalid address length: {hex_str!r} has {len(hex_str)} hex digits, "
                f"expected {cls.LENGTH * 2}"
            )
        return cls(bytes.fromhex(hex_str))

    @classmethod
    def from_hex_literal(cls, literal: str) -> "AccountAddress":
        """Builds an address from a `0x`-prefixed literal, left-padding short input.

        Args:
            literal (str): Text such as `0x1` or `0x0000000000000000000000000000cafe`.

        Returns:
            AccountAddress: The decoded address.

        Raises:
            AddressParseError: If the prefix is missing, the body is empty or not hex,
                or the body is longer than `2 * LENGTH` digits.
        """
        if not literal.startswith("0x"):
            raise AddressParseError(f"Address literal must start with 0x: {literal!r}")
        body = literal[2:]
        if not body:
            raise AddressParseError(f"Address literal has no hex digits: {literal!r}")
        return cls.from_hex(body.rjust(cls.LENGTH * 2, "0"))

    def to_hex(self) -> str:
        """Returns the full-width lowercase hex form, without a prefix."""
        return self.address.hex()

    def short_str_lossless(self) -> str:
        """Returns the hex form with leading zeros stripped (`"0"` for the zero address)."""
        return self.to_hex().lstrip("0") or "0"

    def to_hex_literal(self) -> str:
        """Returns the canonical `0x`-prefixed literal."""
        return f"0x{self.short_str_lossless()}"

    def __str__(self) -> str:
        return self.to_hex_literal()

    def __repr__(self) -> str:
        return f"AccountAddress({self.to_hex_literal()})"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, AccountAddress) and self.address == other.address

    def __hash__(self) -> int:
        return hash(self.address)


__all__ = ["AccountAddress", "AddressParseError"]
