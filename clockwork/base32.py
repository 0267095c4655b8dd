"""Clockwork Base32 encoding/decoding.

Clockwork Base32 is a Crockford-style Base32 with three rules:

1. Alphabet: "0123456789ABCDEFGHJKMNPQRSTVWXYZ" (see clockwork.alphabet).
   Decoding is case-insensitive and maps O to 0, I and L to 1.

2. Bit order: input bytes form one bit stream, most significant bit first.
   The stream is cut into 5-bit groups left to right, the same direction as
   RFC 4648 (and the opposite of Nix base32).

3. No padding characters. The last group is right-padded with zero bits,
   and that's it. A decoder drops the leftover bits after the last full
   byte, but only if they are all zero; anything else can't have come out
   of encode().

Output length: ceil(n*8/5) symbols for n input bytes.
   1 byte  -> 2 symbols
   5 bytes -> 8 symbols
  13 bytes -> 21 symbols ("Hello, world!" -> "91JPRV3F5GG7EVVJDHJ22")

See: https://gist.github.com/szktty/228f85794e4187882a77734c89c384a8
"""

from collections.abc import Iterator

from clockwork.alphabet import INVALID, SYMBOLS, symbol_value

BITS_PER_SYMBOL = 5
BITS_PER_BYTE = 8

BytesLike = bytes | bytearray | memoryview


class DecodeError(ValueError):
    """Input is not a valid Clockwork Base32 encoding."""


class InvalidCharacter(DecodeError):
    def __init__(self, char: str, position: int):
        self.char = char
        self.position = position
        super().__init__(f"invalid clockwork base32 character {char!r} at position {position}")


class InvalidTrailingBits(DecodeError):
    def __init__(self, bit_count: int, bits: int):
        self.bit_count = bit_count
        self.bits = bits
        super().__init__(
            f"non-zero trailing bits: {bits:0{bit_count}b} ({bit_count} bits left after the last byte)"
        )


class InvalidText(DecodeError):
    """Decoded bytes are not valid UTF-8 (decode_to_string only)."""


def _as_bytes(data: BytesLike) -> bytes | bytearray:
    if isinstance(data, str):
        raise TypeError("expected a bytes-like object, not str (use encode_to_string for text)")
    if isinstance(data, (bytes, bytearray)):
        return data
    return bytes(data)


def _as_text(symbols: str | BytesLike) -> str:
    if isinstance(symbols, str):
        return symbols
    # latin-1 keeps every byte value as the same code point, so anything
    # outside ASCII still reaches the table lookup and is reported there.
    return bytes(symbols).decode("latin-1")


def encoded_length(n: int) -> int:
    """Number of symbols encode() produces for n bytes: ceil(n*8/5)."""
    if n < 0:
        raise ValueError(f"negative length: {n}")
    return (n * BITS_PER_BYTE + BITS_PER_SYMBOL - 1) // BITS_PER_SYMBOL


def decoded_length(n: int) -> int:
    """Number of bytes decode() produces for n symbols: floor(n*5/8)."""
    if n < 0:
        raise ValueError(f"negative length: {n}")
    return n * BITS_PER_SYMBOL // BITS_PER_BYTE


def iter_quintets(data: BytesLike) -> Iterator[int]:
    """Yield the 5-bit groups of data, MSB first.

    `acc` holds the `bits` input bits not yet emitted. Each byte pushes 8
    bits in at the bottom; groups are taken from the top. If bits remain at
    the end (fewer than 5), they are shifted left to fill one last group
    with zero padding.
    """
    acc = 0
    bits = 0
    for byte in _as_bytes(data):
        acc = (acc << BITS_PER_BYTE) | byte
        bits += BITS_PER_BYTE
        while bits >= BITS_PER_SYMBOL:
            bits -= BITS_PER_SYMBOL
            yield (acc >> bits) & 0x1F
        acc &= (1 << bits) - 1
    if bits:
        yield (acc << (BITS_PER_SYMBOL - bits)) & 0x1F


def encode(data: BytesLike) -> str:
    """Encode bytes to Clockwork Base32."""
    return "".join(SYMBOLS[q] for q in iter_quintets(data))


def decode(symbols: str | BytesLike) -> bytes:
    """Decode Clockwork Base32 to bytes.

    Raises InvalidCharacter on the first character outside the alphabet
    (after case folding and the O/I/L substitutions), and
    InvalidTrailingBits if the bits past the last full byte aren't zero.
    """
    text = _as_text(symbols)
    result = bytearray()
    acc = 0
    bits = 0
    for pos, ch in enumerate(text):
        value = symbol_value(ch)
        if value == INVALID:
            raise InvalidCharacter(ch, pos)
        acc = (acc << BITS_PER_SYMBOL) | value
        bits += BITS_PER_SYMBOL
        if bits >= BITS_PER_BYTE:
            bits -= BITS_PER_BYTE
            result.append(acc >> bits)
            acc &= (1 << bits) - 1
    if acc:
        raise InvalidTrailingBits(bits, acc)
    return bytes(result)


def encode_to_string(data: str | BytesLike) -> str:
    """Like encode(), but text input is encoded as UTF-8 first."""
    if isinstance(data, str):
        # lone surrogates are encoded as-is, not rejected
        data = data.encode("utf-8", "surrogatepass")
    return encode(data)


def decode_to_string(symbols: str | BytesLike) -> str:
    """Decode to bytes, then interpret them as UTF-8 text."""
    raw = decode(symbols)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidText(f"decoded bytes are not valid UTF-8: {e.reason} at byte {e.start}") from e


def encode_to_bytes(data: BytesLike) -> bytes:
    """Encoded symbols as ASCII bytes."""
    return encode(data).encode("ascii")


def decode_to_bytes(symbols: str | BytesLike) -> bytes:
    """Decoded bytes; the same as decode()."""
    return decode(symbols)


def append_encoded(dest: bytearray, data: BytesLike) -> None:
    """Append the encoding of data to dest as ASCII bytes.

    Callers building one large buffer can size it with encoded_length().
    """
    for q in iter_quintets(data):
        dest.append(ord(SYMBOLS[q]))


def append_decoded(dest: bytearray, symbols: str | BytesLike) -> None:
    """Append the decoded bytes to dest. On error, dest is left unchanged."""
    dest.extend(decode(symbols))
