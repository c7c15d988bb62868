import re

from .exceptions import InvalidCharacter

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

_LOOKUP = {char: index for index, char in enumerate(ALPHABET)}
_WHITESPACE = re.compile(r"\s+")


def encode(data: bytes) -> str:
    """
    Encodes bytes as RFC 4648 Base32 text.

    The output is upper case and padded with ``=`` to a multiple of 8.

    :param data: the bytes to encode
    :returns: Base32 text, empty for empty input
    """
    if not data:
        return ""

    output = []
    buffer = 0
    bits = 0
    for byte in bytearray(data):
        buffer = (buffer << 8) | byte
        bits += 8
        while bits >= 5:
            bits -= 5
            output.append(ALPHABET[(buffer >> bits) & 0x1F])
        # only the unread low bits are ever needed again
        buffer &= (1 << bits) - 1

    if bits > 0:
        output.append(ALPHABET[(buffer << (5 - bits)) & 0x1F])

    output.extend("=" * (-len(output) % 8))
    return "".join(output)


def decode(text: str) -> bytes:
    """
    Decodes RFC 4648 Base32 text.

    Decoding is case-insensitive and ignores whitespace anywhere in the
    input. Trailing ``=`` padding is optional, and bits left over after the
    last full byte are dropped.

    :param text: the Base32 text
    :returns: decoded bytes, empty for empty/whitespace/padding-only input
    :raises InvalidCharacter: on the first symbol outside the alphabet
    """
    symbols = _WHITESPACE.sub("", text).upper().rstrip("=")

    output = bytearray()
    buffer = 0
    bits = 0
    for char in symbols:
        value = _LOOKUP.get(char)
        if value is None:
            raise InvalidCharacter(char)
        buffer = (buffer << 5) | value
        bits += 5
        if bits >= 8:
            bits -= 8
            output.append((buffer >> bits) & 0xFF)
            buffer &= (1 << bits) - 1

    return bytes(output)
