"""Bracketed SteamID text form: [<type letter>:<universe>:<account number>].

Example: [U:1:12345] is a public-universe user with account number 12345.
The text form has no slot for the instance field, so formatting drops it
and parsing always yields instance 0.
"""
from __future__ import annotations

import re
from enum import Enum

from .steam_id import (
    ACCOUNT_MASK,
    UNIVERSE_MASK,
    AccountType,
    SteamIdComponents,
    compose,
    decompose,
)

# Type letter <-> type code. Case matters: 'g' is a game server, 'G' a group.
TYPE_LETTERS = {
    AccountType.USER: "U",
    AccountType.GROUP: "G",
    AccountType.APP: "A",
    AccountType.MULTISEAT: "M",
    AccountType.INVALID: "I",
    AccountType.PARTNER: "P",
    AccountType.CLAN: "C",
    AccountType.GAME_SERVER: "g",
    AccountType.ANON_USER: "T",
}
LETTER_TO_TYPE = {letter: code for code, letter in TYPE_LETTERS.items()}

# Letter used for type codes with no entry above (0, 10-15)
FALLBACK_LETTER = TYPE_LETTERS[AccountType.USER]


class ParseErrorKind(Enum):
    MALFORMED_ENVELOPE = "malformed_envelope"
    UNRECOGNIZED_TYPE_LETTER = "unrecognized_type_letter"
    NUMERIC_FIELD_INVALID = "numeric_field_invalid"


class SteamIdParseError(ValueError):
    """Raised by parse_text_form for input that is not a valid text form."""

    def __init__(self, kind: ParseErrorKind, text, detail: str):
        super().__init__(f"{detail}: {text!r}")
        self.kind = kind
        self.text = text
        self.detail = detail

    def __reduce__(self):
        return type(self), (self.kind, self.text, self.detail)


# Optional sign, then ASCII digits with single underscores between them
_NUMERAL = re.compile(r"([+-]?)([0-9]+(?:_[0-9]+)*)")


def _parse_unsigned(segment: str, mask: int, field: str, text: str) -> int:
    match = _NUMERAL.fullmatch(segment)
    if match is None:
        raise SteamIdParseError(
            ParseErrorKind.NUMERIC_FIELD_INVALID, text,
            f"{field} is not an unsigned decimal number",
        )
    sign, digits = match.groups()
    digits = digits.replace("_", "").lstrip("0")
    # Length check first: int() refuses very long digit strings
    if len(digits) > len(str(mask)):
        raise SteamIdParseError(
            ParseErrorKind.NUMERIC_FIELD_INVALID, text,
            f"{field} must be 0-{mask}, got a {len(digits)}-digit number",
        )
    value = int(digits or "0")
    # '-0' is zero; any other negative value falls out of range below
    if sign == "-" and value != 0:
        value = -value
    if not 0 <= value <= mask:
        raise SteamIdParseError(
            ParseErrorKind.NUMERIC_FIELD_INVALID, text,
            f"{field} must be 0-{mask}, got {value}",
        )
    return value


def parse_text_form(text: str) -> int:
    """Parse '[X:U:A]' into a packed SteamID.

    Raises SteamIdParseError (a ValueError) with a ParseErrorKind.
    """
    if not isinstance(text, str) or len(text) < 5 or text[0] != "[" or text[-1] != "]":
        raise SteamIdParseError(
            ParseErrorKind.MALFORMED_ENVELOPE, text,
            "Text form must look like [X:U:A]",
        )

    # Only the first two colons split; later ones stay in the account segment
    colons = []
    for i, char in enumerate(text):
        if char == ":":
            colons.append(i)
            if len(colons) == 2:
                break
    if len(colons) != 2:
        raise SteamIdParseError(
            ParseErrorKind.MALFORMED_ENVELOPE, text,
            f"Text form needs 2 ':' separators, found {len(colons)}",
        )
    first, second = colons

    letter = text[1:first]
    universe_str = text[first + 1:second]
    account_str = text[second + 1:-1]

    type_id = LETTER_TO_TYPE.get(letter)
    if type_id is None:
        raise SteamIdParseError(
            ParseErrorKind.UNRECOGNIZED_TYPE_LETTER, text,
            f"Unknown type letter {letter!r}",
        )

    universe = _parse_unsigned(universe_str, UNIVERSE_MASK, "universe", text)
    account = _parse_unsigned(account_str, ACCOUNT_MASK, "account number", text)

    return compose(SteamIdComponents(
        account_number=account,
        instance=0,
        type_code=int(type_id),
        universe_code=universe,
    ))


def try_parse_text_form(text: str) -> int | None:
    """Like parse_text_form, but return None instead of raising."""
    try:
        return parse_text_form(text)
    except SteamIdParseError:
        return None


def format_text_form(steam_id: int) -> str:
    """Render a packed SteamID as '[X:U:A]'. Never fails."""
    c = decompose(steam_id)
    letter = TYPE_LETTERS.get(c.type_code, FALLBACK_LETTER)
    return f"[{letter}:{c.universe_code}:{c.account_number}]"
