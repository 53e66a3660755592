"""HTML5 character reference decoding.

Used to canonicalize attribute values before they are checked: the parser
already decoded the markup once, but values such as ``&amp;#58;`` still hold
encoded text that a later consumer may decode again.

Supports named references (&amp;, &nbsp;, legacy forms without the
semicolon) and numeric references (&#60;, &#x3C;) per WHATWG 13.2.5.
"""

from __future__ import annotations

import html.entities

# Python ships the complete HTML5 list; keys include the trailing semicolon
# for most names ("amp;") and also the legacy semicolon-less forms ("amp").
NAMED_ENTITIES: dict[str, str] = {key.rstrip(";"): value for key, value in html.entities.html5.items()}

# Names that may appear without a trailing semicolon
LEGACY_ENTITIES: frozenset[str] = frozenset(
    key for key in html.entities.html5 if not key.endswith(";")
)

_LONGEST_NAME = max(len(name) for name in NAMED_ENTITIES)

# Windows-1252 remapping for the C1 range, plus NUL (13.2.5.80)
NUMERIC_REPLACEMENTS: dict[int, str] = {
    0x00: "\ufffd",  # NULL
    0x80: "\u20ac",  # EURO SIGN
    0x82: "\u201a",  # SINGLE LOW-9 QUOTATION MARK
    0x83: "\u0192",  # LATIN SMALL LETTER F WITH HOOK
    0x84: "\u201e",  # DOUBLE LOW-9 QUOTATION MARK
    0x85: "\u2026",  # HORIZONTAL ELLIPSIS
    0x86: "\u2020",  # DAGGER
    0x87: "\u2021",  # DOUBLE DAGGER
    0x88: "\u02c6",  # MODIFIER LETTER CIRCUMFLEX ACCENT
    0x89: "\u2030",  # PER MILLE SIGN
    0x8A: "\u0160",  # LATIN CAPITAL LETTER S WITH CARON
    0x8B: "\u2039",  # SINGLE LEFT-POINTING ANGLE QUOTATION MARK
    0x8C: "\u0152",  # LATIN CAPITAL LIGATURE OE
    0x8E: "\u017d",  # LATIN CAPITAL LETTER Z WITH CARON
    0x91: "\u2018",  # LEFT SINGLE QUOTATION MARK
    0x92: "\u2019",  # RIGHT SINGLE QUOTATION MARK
    0x93: "\u201c",  # LEFT DOUBLE QUOTATION MARK
    0x94: "\u201d",  # RIGHT DOUBLE QUOTATION MARK
    0x95: "\u2022",  # BULLET
    0x96: "\u2013",  # EN DASH
    0x97: "\u2014",  # EM DASH
    0x98: "\u02dc",  # SMALL TILDE
    0x99: "\u2122",  # TRADE MARK SIGN
    0x9A: "\u0161",  # LATIN SMALL LETTER S WITH CARON
    0x9B: "\u203a",  # SINGLE RIGHT-POINTING ANGLE QUOTATION MARK
    0x9C: "\u0153",  # LATIN SMALL LIGATURE OE
    0x9E: "\u017e",  # LATIN SMALL LETTER Z WITH CARON
    0x9F: "\u0178",  # LATIN CAPITAL LETTER Y WITH DIAERESIS
}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_DEC_DIGITS = frozenset("0123456789")


def decode_numeric_entity(digits: str, *, is_hex: bool = False) -> str:
    """Decode the digits of a numeric reference like ``&#60;`` or ``&#x3C;``."""
    significant = digits.lstrip("0") or "0"
    if len(significant) > 8:
        # Far above 0x10FFFF; also keeps int() away from huge digit strings
        return "\ufffd"
    codepoint = int(significant, 16 if is_hex else 10)
    if codepoint in NUMERIC_REPLACEMENTS:
        return NUMERIC_REPLACEMENTS[codepoint]
    if codepoint > 0x10FFFF or 0xD800 <= codepoint <= 0xDFFF:
        return "\ufffd"
    return chr(codepoint)


def _legacy_blocked(next_char: str | None, *, in_attribute: bool) -> bool:
    # 13.2.5.73: inside attributes a legacy reference without ';' is left
    # alone when followed by an alphanumeric or '='.
    if not in_attribute or next_char is None:
        return False
    return next_char.isalnum() or next_char == "="


def decode_entities(text: str, *, in_attribute: bool = True) -> str:
    """Decode every character reference in `text` once."""
    if "&" not in text:
        return text

    result: list[str] = []
    i = 0
    length = len(text)
    while i < length:
        amp = text.find("&", i)
        if amp == -1:
            result.append(text[i:])
            break
        if amp > i:
            result.append(text[i:amp])

        i = amp
        j = i + 1

        # Numeric reference
        if j < length and text[j] == "#":
            j += 1
            is_hex = j < length and text[j] in "xX"
            if is_hex:
                j += 1
            allowed = _HEX_DIGITS if is_hex else _DEC_DIGITS
            digit_start = j
            while j < length and text[j] in allowed:
                j += 1
            digits = text[digit_start:j]
            if not digits:
                result.append(text[i:j])
                i = j
                continue
            result.append(decode_numeric_entity(digits, is_hex=is_hex))
            i = j + 1 if j < length and text[j] == ";" else j
            continue

        # Named reference
        while j < length and text[j].isascii() and text[j].isalnum() and j - i <= _LONGEST_NAME:
            j += 1
        name = text[i + 1 : j]
        if not name:
            result.append("&")
            i += 1
            continue

        if j < length and text[j] == ";" and name in NAMED_ENTITIES:
            result.append(NAMED_ENTITIES[name])
            i = j + 1
            continue

        # Longest legacy prefix, e.g. "&notit" decodes "&not" and keeps "it"
        for k in range(len(name), 0, -1):
            prefix = name[:k]
            if prefix in LEGACY_ENTITIES:
                end = i + 1 + k
                next_char = text[end] if end < length else None
                if _legacy_blocked(next_char, in_attribute=in_attribute):
                    break
                result.append(NAMED_ENTITIES[prefix])
                i = end
                break
        else:
            result.append("&")
            i += 1
            continue

        if i == amp:
            result.append("&")
            i += 1

    return "".join(result)


def decode_entities_fully(text: str) -> str:
    """Decode character references until the text no longer changes.

    Every decoded reference is shorter than its encoded form, so this always
    terminates.
    """
    while True:
        decoded = decode_entities(text, in_attribute=True)
        if decoded == text:
            return decoded
        text = decoded
