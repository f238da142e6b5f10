"""
Value types produced by the movetag parser.

Classes:
    TypeTag:
        Tagged variant describing a Move type. `kind` is one of the primitive kinds
        (`u8`, `u64`, `u128`, `bool`, `address`, `signer`), `vector` (payload: the
        element `TypeTag`) or `struct` (payload: a `StructTag`).

    StructTag:
        A user-defined struct type: publishing address, module name, struct name and
        an ordered tuple of type parameters.

    TransactionArgument:
        Tagged variant for a literal passed to a contract call. `kind` is one of
        `u8`, `u64`, `u128` (payload: int in range), `bool` (payload: bool),
        `address` (payload: `AccountAddress`) or `u8vector` (payload: bytes).

    TypeTagDict / StructTagDict / TransactionArgumentDict:
        TypedDict shapes returned by the `to_dict()` methods, used for JSON output.

All values are immutable after construction, compare structurally and are hashable.
`str()` renders text the parser accepts again, so for any parsed value `v`,
parsing `str(v)` yields a value equal to `v`.

Example:
    tag = TypeTag("vector", TypeTag("u8"))
    str(tag)  # 'vector<u8>'
"""

from typing import Any, TypedDict, Union

from movetag.movetag_address import AccountAddress
from movetag.movetag_constants import INTEGER_BITS
from movetag.movetag_identifier import Identifier

PRIMITIVE_KINDS = ("u8", "u64", "u128", "bool", "address", "signer")
TYPE_TAG_KINDS = PRIMITIVE_KINDS + ("vector", "struct")
ARGUMENT_KINDS = ("u8", "u64", "u128", "bool", "address", "u8vector")


class StructTagDict(TypedDict):
    address: str
    module: str
    name: str
    type_params: list["TypeTagDict"]


class TypeTagDict(TypedDict, total=False):
    kind: str
    value: Union["TypeTagDict", StructTagDict]


class TransactionArgumentDict(TypedDict):
    kind: str
    value: int | bool | str


class TypeTag:
    """A Move type: primitive, `vector<T>` or a struct type.

    Args:
        kind (str): One of `TYPE_TAG_KINDS`.
        value (TypeTag | StructTag, optional): Element type for `vector`, struct tag
            for `struct`; must be omitted for primitives.

    Raises:
        ValueError: If the kind is unknown or the payload does not match the kind.
    """

    def __init__(self, kind: str, value: Union["TypeTag", "StructTag", None] = None):
        if kind not in TYPE_TAG_KINDS:
            raise ValueError(f"Unknown type tag kind: {kind!r}")
        if kind == "vector" and not isinstance(value, TypeTag):
            raise ValueError("vector type tag requires an element TypeTag")
        if kind == "struct" and not isinstance(value, StructTag):
            raise ValueError("struct type tag requires a StructTag")
        if kind in PRIMITIVE_KINDS and value is not None:
            raise ValueError(f"{kind} type tag takes no payload")
        self.kind = kind
        self.value = value

    @classmethod
    def vector(cls, element: "TypeTag") -> "TypeTag":
        return cls("vector", element)

    @classmethod
    def struct(cls, struct_tag: "StructTag") -> "TypeTag":
        return cls("struct", struct_tag)

    def is_primitive(self) -> bool:
        return self.kind in PRIMITIVE_KINDS

    def depth(self) -> int:
        """Returns how many `<` levels the rendered tag opens at its deepest point.

        A tag parses under a nesting limit `n` exactly when `depth() < n`.
        """
        if isinstance(self.value, TypeTag):
            return 1 + self.value.depth()
        if isinstance(self.value, StructTag):
            return self.value.depth()
        return 0

    def __str__(self) -> str:
        if isinstance(self.value, TypeTag):
            return f"vector<{self.value}>"
        if isinstance(self.value, StructTag):
            return str(self.value)
        return self.kind

    def __repr__(self) -> str:
        if self.value is None:
            return f"TypeTag({self.kind})"
        return f"TypeTag({self.kind}, value={self.value!r})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, TypeTag)
            and self.kind == other.kind
            and self.value == other.value
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def to_dict(self) -> TypeTagDict:
        if self.value is None:
            return {"kind": self.kind}
        return {"kind": self.kind, "value": self.value.to_dict()}


class StructTag:
    """A struct type identified by address, module, name and type parameters.

    Args:
        address (AccountAddress): Publishing account.
        module (Identifier | str): Module name; plain strings are validated.
        name (Identifier | str): Struct name; plain strings are validated.
        type_params (list[TypeTag], optional): Generic arguments, possibly empty.

    Raises:
        IdentifierError: If a module or struct name given as a string is invalid.
    """

    def __init__(
        self,
        address: AccountAddress,
        module: Identifier | str,
        name: Identifier | str,
        type_params: list[TypeTag] | tuple[TypeTag, ...] | None = None,
    ):
        self.address = address
        self.module = module if isinstance(module, Identifier) else Identifier(module)
        self.name = name if isinstance(name, Identifier) else Identifier(name)
        self.type_params: tuple[TypeTag, ...] = tuple(type_params or ())

    def depth(self) -> int:
        if not self.type_params:
            return 0
        return 1 + max(param.depth() for param in self.type_params)

    def __str__(self) -> str:
        text = f"{self.address.to_hex_literal()}::{self.module}::{self.name}"
        if self.type_params:
            text += "<" + ", ".join(str(p) for p in self.type_params) + ">"
        return text

    def __repr__(self) -> str:
        return f"StructTag({self})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, StructTag)
            and self.address == other.address
            and self.module == other.module
            and self.name == other.name
            and self.type_params == other.type_params
        )

    def __hash__(self) -> int:
        return hash((self.address, self.module, self.name, self.type_params))

    def to_dict(self) -> StructTagDict:
        return {
            "address": self.address.to_hex_literal(),
            "module": str(self.module),
            "name": str(self.name),
            "type_params": [p.to_dict() for p in self.type_params],
        }


class TransactionArgument:
    """A literal argument for a contract call.

    Args:
        kind (str): One of `ARGUMENT_KINDS`.
        value (int | bool | AccountAddress | bytes): Payload matching the kind.

    Raises:
        ValueError: If the kind is unknown, the payload has the wrong type, or an
            integer does not fit its declared width.
    """

    def __init__(self, kind: str, value: Any):
        if kind not in ARGUMENT_KINDS:
            raise ValueError(f"Unknown transaction argument kind: {kind!r}")
        if kind in INTEGER_BITS:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{kind} argument requires an int, got {value!r}")
            if not 0 <= value < 1 << INTEGER_BITS[kind]:
                raise ValueError(f"{value} does not fit in {kind}")
        elif kind == "bool":
            if not isinstance(value, bool):
                raise ValueError(f"bool argument requires a bool, got {value!r}")
        elif kind == "address":
            if not isinstance(value, AccountAddress):
                raise ValueError(f"address argument requires an AccountAddress, got {value!r}")
        else:
            if not isinstance(value, (bytes, bytearray)):
                raise ValueError(f"u8vector argument requires bytes, got {value!r}")
            value = bytes(value)
        self.kind = kind
        self.value = value

    def __str__(self) -> str:
        if self.kind in INTEGER_BITS:
            return f"{self.value}{self.kind}"
        if self.kind == "bool":
            return "true" if self.value else "false"
        if self.kind == "address":
            return self.value.to_hex_literal()
        return f'x"{self.value.hex()}"'

    def __repr__(self) -> str:
        return f"TransactionArgument({self.kind}, value={self.value!r})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, TransactionArgument)
            and self.kind == other.kind
            and self.value == other.value
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def to_dict(self) -> TransactionArgumentDict:
        val: int | bool | str = self.value
        if self.kind == "address":
            val = self.value.to_hex_literal()
        elif self.kind == "u8vector":
            val = self.value.hex()
        return {"kind": self.kind, "value": val}


__all__ = [
    "ARGUMENT_KINDS",
    "PRIMITIVE_KINDS",
    "TYPE_TAG_KINDS",
    "StructTag",
    "StructTagDict",
    "TransactionArgument",
    "TransactionArgumentDict",
    "TypeTag",
    "TypeTagDict",
]
