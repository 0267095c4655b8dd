"""Clockwork Base32 alphabet and reverse lookup table.

The alphabet is Crockford's: digits 0-9 followed by the letters, minus
I, L, O and U:

    0123456789ABCDEFGHJKMNPQRSTVWXYZ

Encoders always emit these uppercase symbols. Decoders are tolerant:

- lowercase letters decode like their uppercase form
- O and o decode as 0
- I, i, L and l decode as 1

U stays invalid. It is not a look-alike of any digit, and Clockwork Base32
drops Crockford's check symbols, so it has no meaning at all.

See: https://gist.github.com/szktty/228f85794e4187882a77734c89c384a8
"""

SYMBOLS = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
ALIASES = {"O": "0", "I": "1", "L": "1"}
INVALID = -1


def _build_decode_table() -> tuple[int, ...]:
    """Flat table indexed by character code (ASCII only)."""
    table = [INVALID] * 128
    for value, sym in enumerate(SYMBOLS):
        table[ord(sym)] = value
        table[ord(sym.lower())] = value
    for alias, target in ALIASES.items():
        value = table[ord(target)]
        table[ord(alias)] = value
        table[ord(alias.lower())] = value
    return tuple(table)


DECODE_TABLE = _build_decode_table()


def symbol_value(ch: str) -> int:
    """5-bit value of one input character, or INVALID if it isn't accepted."""
    if len(ch) != 1:
        return INVALID
    code = ord(ch)
    if code >= len(DECODE_TABLE):
        return INVALID
    return DECODE_TABLE[code]
