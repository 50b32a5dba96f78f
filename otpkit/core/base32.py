"""
RFC 4648 base32 codec used for secret representation.

Encoding works on 40-bit blocks (5 bytes -> 8 symbols); a short final block
is zero-padded on the right before the symbols are extracted.  Output never
carries ``=`` padding, which is how authenticator apps expect secrets.
"""

from otpkit.exceptions import InvalidBase32CharacterError

# ── Constants ────────────────────────────────────────────────────────────────

VALID_FOR_B32 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

_VALID_SET = frozenset(VALID_FOR_B32)
_DECODE_MAP: dict[str, int] = {ch: i for i, ch in enumerate(VALID_FOR_B32)}

BLOCK_BYTES = 5
BLOCK_SYMBOLS = 8
PAD_CHAR = "="


# ── Encoding ─────────────────────────────────────────────────────────────────

def b32encode(data: bytes) -> str:
    """
    Encode ``data`` as unpadded, uppercase base32.

    Args:
        data: Raw bytes.

    Returns:
        Base32 text of length ``ceil(len(data) * 8 / 5)``.
    """
    symbols = []
    for start in range(0, len(data), BLOCK_BYTES):
        chunk = data[start : start + BLOCK_BYTES]
        nbits = len(chunk) * 8
        nsymbols = -(-nbits // 5)
        value = int.from_bytes(chunk, "big") << (nsymbols * 5 - nbits)
        for shift in range((nsymbols - 1) * 5, -1, -5):
            symbols.append(VALID_FOR_B32[(value >> shift) & 0x1F])
    return "".join(symbols)


def to_base32(text: str) -> str:
    """Base32-encode the UTF-8 bytes of an arbitrary string."""
    return b32encode(text.encode("utf-8"))


# ── Decoding ─────────────────────────────────────────────────────────────────

def b32decode(text: str) -> bytes:
    """
    Decode base32 text to raw bytes.

    Lowercase input is accepted and ``=`` padding is ignored.  Bits left over
    from a partial final group are dropped.

    Args:
        text: Base32 string.

    Returns:
        Decoded bytes (empty for empty input).

    Raises:
        InvalidBase32CharacterError: If a symbol outside the alphabet remains
            after normalisation.
    """
    text = text.upper().replace(PAD_CHAR, "")
    for ch in text:
        if ch not in _VALID_SET:
            raise InvalidBase32CharacterError(ch)

    out = bytearray()
    for start in range(0, len(text), BLOCK_SYMBOLS):
        group = text[start : start + BLOCK_SYMBOLS]
        value = 0
        for ch in group:
            value = (value << 5) | _DECODE_MAP[ch]
        nbits = len(group) * 5
        nbytes = nbits // 8
        value >>= nbits - nbytes * 8
        out += value.to_bytes(nbytes, "big")
    return bytes(out)


# ── Sanitising ───────────────────────────────────────────────────────────────

def remove_invalid_chars(text: str) -> str:
    """Drop every character that is not part of the base32 alphabet."""
    return "".join(ch for ch in text if ch in _VALID_SET)


def is_valid_base32(text: str) -> bool:
    """Return True if ``text`` is non-empty canonical base32 (no padding)."""
    return bool(text) and all(ch in _VALID_SET for ch in text)
