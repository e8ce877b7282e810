"""64-bit SteamID packing and unpacking.

Bit layout (bit 0 = least significant):
    bits  0-31   account number  (32 bits)
    bits 32-51   instance        (20 bits)
    bits 52-55   account type    (4 bits)
    bits 56-63   universe        (8 bits)

Every 64-bit pattern decomposes to a component set, so decompose/compose
round-trip losslessly. compose() keeps only the low bits of each field;
use compose_strict() to reject over-width values instead.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

ACCOUNT_BITS = 32
INSTANCE_BITS = 20
TYPE_BITS = 4
UNIVERSE_BITS = 8

INSTANCE_SHIFT = ACCOUNT_BITS                  # 32
TYPE_SHIFT = INSTANCE_SHIFT + INSTANCE_BITS     # 52
UNIVERSE_SHIFT = TYPE_SHIFT + TYPE_BITS         # 56

ACCOUNT_MASK = (1 << ACCOUNT_BITS) - 1      # 0xFFFF_FFFF
INSTANCE_MASK = (1 << INSTANCE_BITS) - 1    # 0xF_FFFF
TYPE_MASK = (1 << TYPE_BITS) - 1            # 0xF
UNIVERSE_MASK = (1 << UNIVERSE_BITS) - 1    # 0xFF

STEAM_ID_MASK = (1 << 64) - 1


class AccountType(IntEnum):
    """Known values of the 4-bit type field.

    Codes 0 and 10-15 have no member; they still pack and unpack unchanged.
    """
    USER = 1
    GROUP = 2         # clan chat
    APP = 3           # pending
    MULTISEAT = 4
    INVALID = 5
    PARTNER = 6
    CLAN = 7
    GAME_SERVER = 8
    ANON_USER = 9


class Universe(IntEnum):
    INVALID = 0
    PUBLIC = 1
    BETA = 2
    INTERNAL = 3
    DEV = 4


@dataclass(frozen=True, slots=True)
class SteamIdComponents:
    account_number: int
    instance: int
    type_code: int
    universe_code: int


# (field name, width in bits) in packing order
_FIELDS = (
    ("account_number", ACCOUNT_BITS),
    ("instance", INSTANCE_BITS),
    ("type_code", TYPE_BITS),
    ("universe_code", UNIVERSE_BITS),
)


def account_number(steam_id: int) -> int:
    return steam_id & ACCOUNT_MASK


def instance(steam_id: int) -> int:
    return (steam_id >> INSTANCE_SHIFT) & INSTANCE_MASK


def type_code(steam_id: int) -> int:
    return (steam_id >> TYPE_SHIFT) & TYPE_MASK


def universe_code(steam_id: int) -> int:
    return (steam_id >> UNIVERSE_SHIFT) & UNIVERSE_MASK


def decompose(steam_id: int) -> SteamIdComponents:
    """Split a packed SteamID into its four fields.

    Only the low 64 bits of the argument are considered.
    """
    steam_id &= STEAM_ID_MASK
    return SteamIdComponents(
        account_number=account_number(steam_id),
        instance=instance(steam_id),
        type_code=type_code(steam_id),
        universe_code=universe_code(steam_id),
    )


def compose(components: SteamIdComponents) -> int:
    """Pack components into a 64-bit SteamID, truncating each field to width."""
    return (
        (components.account_number & ACCOUNT_MASK)
        | ((components.instance & INSTANCE_MASK) << INSTANCE_SHIFT)
        | ((components.type_code & TYPE_MASK) << TYPE_SHIFT)
        | ((components.universe_code & UNIVERSE_MASK) << UNIVERSE_SHIFT)
    )


def compose_strict(components: SteamIdComponents) -> int:
    """Pack components, raising ValueError if any field is out of range."""
    for name, bits in _FIELDS:
        value = getattr(components, name)
        if not 0 <= value < (1 << bits):
            raise ValueError(
                f"{name} must be 0-{(1 << bits) - 1}, got {value}"
            )
    return compose(components)


def is_valid(steam_id: int) -> bool:
    """A SteamID is valid when its universe field is non-zero."""
    return universe_code(steam_id) != 0


@dataclass(frozen=True, slots=True)
class SteamID:
    """Immutable packed SteamID with accessors for each field."""
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= STEAM_ID_MASK:
            raise ValueError(f"SteamID must be 0-{STEAM_ID_MASK}, got {self.value}")

    @property
    def components(self) -> SteamIdComponents:
        return decompose(self.value)

    @property
    def account_number(self) -> int:
        return account_number(self.value)

    @property
    def instance(self) -> int:
        return instance(self.value)

    @property
    def type_code(self) -> int:
        return type_code(self.value)

    @property
    def universe_code(self) -> int:
        return universe_code(self.value)

    @property
    def account_type(self) -> AccountType | None:
        """The AccountType member, or None for an unrecognized type code."""
        try:
            return AccountType(self.type_code)
        except ValueError:
            return None

    def is_valid(self) -> bool:
        return is_valid(self.value)

    @classmethod
    def from_components(cls, components: SteamIdComponents, strict: bool = False) -> SteamID:
        if strict:
            return cls(compose_strict(components))
        return cls(compose(components))

    @classmethod
    def from_string(cls, text: str) -> SteamID:
        """Parse the bracketed text form, e.g. '[U:1:12345]'."""
        from .text_form import parse_text_form
        return cls(parse_text_form(text))

    def to_string(self) -> str:
        from .text_form import format_text_form
        return format_text_form(self.value)

    def __str__(self) -> str:
        return self.to_string()

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"SteamID({self.value})"
