"""
Struct tag parsing.

Finds the ``accessor`` key in a Go struct tag and turns its comma-separated
directives into a Tag. Method names are passed through untouched; a bad
identifier only shows up when the generated file is compiled.
"""

from typing import Optional

from .model import Tag

ACCESSOR_TAG = "accessor"
IGNORE_MARKER = "-"

TAG_KEY_GETTER = "getter"
TAG_KEY_SETTER = "setter"
TAG_KEY_NO_DEFAULT = "noDefault"

TAG_SEP = ","
TAG_KEY_VALUE_SEP = ":"

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}
_HEX_DIGITS = "0123456789abcdefABCDEF"


def go_unquote(quoted: str) -> str:
    """
    Interpret a double-quoted Go string literal, as ``strconv.Unquote`` does.

    Handles the single-character escapes plus ``\\xhh``, ``\\ooo``, ``\\uhhhh``
    and ``\\Uhhhhhhhh``. Byte escapes are collected and decoded as UTF-8.

    Raises:
        ValueError: If the literal is not valid Go syntax
    """
    if len(quoted) < 2 or quoted[0] != '"' or quoted[-1] != '"':
        raise ValueError(f"not a quoted string: {quoted!r}")

    body = quoted[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == '"' or ch == "\n":
            raise ValueError(f"invalid character in string literal: {ch!r}")
        if ch != "\\":
            out += ch.encode("utf-8")
            i += 1
            continue

        if i + 1 >= len(body):
            raise ValueError("unterminated escape sequence")
        esc = body[i + 1]
        i += 2

        if esc in _SIMPLE_ESCAPES:
            out += _SIMPLE_ESCAPES[esc].encode("utf-8")
        elif esc in "xuU":
            width = {"x": 2, "u": 4, "U": 8}[esc]
            digits = body[i : i + width]
            if len(digits) != width or any(d not in _HEX_DIGITS for d in digits):
                raise ValueError(f"invalid \\{esc} escape")
            code = int(digits, 16)
            i += width
            if esc == "x":
                out.append(code)
            else:
                if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
                    raise ValueError(f"invalid code point in \\{esc} escape")
                out += chr(code).encode("utf-8")
        elif esc in "01234567":
            digits = body[i - 1 : i + 2]
            if len(digits) != 3 or any(d not in "01234567" for d in digits):
                raise ValueError("invalid octal escape")
            code = int(digits, 8)
            if code > 255:
                raise ValueError("octal escape value > 255")
            out.append(code)
            i += 2
        else:
            # \' is only valid inside rune literals
            raise ValueError(f"unknown escape sequence: \\{esc}")

    return out.decode("utf-8", errors="replace")


def lookup_struct_tag(raw: Optional[str], key: str) -> Optional[str]:
    """
    Look up ``key`` in a conventional Go struct tag.

    Mirrors ``reflect.StructTag.Lookup``: the tag is a space-separated list of
    ``key:"value"`` pairs. Returns None if the key is missing or the tag is
    malformed before the key is reached.
    """
    if raw is None:
        return None

    tag = raw.strip("`")
    while tag:
        # Skip leading space.
        i = 0
        while i < len(tag) and tag[i] == " ":
            i += 1
        tag = tag[i:]
        if not tag:
            break

        # Scan to colon. A space, a quote or a control character is a syntax error.
        i = 0
        while i < len(tag) and " " < tag[i] and tag[i] != ":" and tag[i] != '"' and tag[i] != "\x7f":
            i += 1
        if i == 0 or i + 1 >= len(tag) or tag[i] != ":" or tag[i + 1] != '"':
            break
        name = tag[:i]
        tag = tag[i + 1 :]

        # Scan quoted string to find value.
        i = 1
        while i < len(tag) and tag[i] != '"':
            if tag[i] == "\\":
                i += 1
            i += 1
        if i >= len(tag):
            break
        quoted = tag[: i + 1]
        tag = tag[i + 1 :]

        if name == key:
            try:
                return go_unquote(quoted)
            except ValueError:
                return None

    return None


def parse_tag(payload: Optional[str]) -> Optional[Tag]:
    """
    Parse the value of the ``accessor`` key.

    Returns None when there is no payload at all (field not annotated).
    """
    if payload is None:
        return None

    getter: Optional[str] = None
    setter: Optional[str] = None
    no_default = False

    for directive in payload.split(TAG_SEP):
        key, _, value = directive.partition(TAG_KEY_VALUE_SEP)
        key = key.strip()
        value = value.strip()

        if key == TAG_KEY_GETTER:
            getter = "" if value == IGNORE_MARKER else value
        elif key == TAG_KEY_SETTER:
            setter = "" if value == IGNORE_MARKER else value
        elif key == TAG_KEY_NO_DEFAULT:
            # Presence-only; any value is ignored.
            no_default = True

    return Tag(getter=getter, setter=setter, no_default=no_default)


def parse_field_tag(raw: Optional[str]) -> Optional[Tag]:
    """Parse a whole struct tag string and return its accessor Tag, if any."""
    return parse_tag(lookup_struct_tag(raw, ACCESSOR_TAG))
