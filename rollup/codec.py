"""Pure conversions between bytes, hex text, strings and fixed-width values.

Hex text may carry a ``0x``/``0X`` prefix. Decoding an odd-length hex string
left-pads it with a single ``0`` nibble first.
"""

import string
from typing import Iterable, List, Union

import numpy as np

from rollup.errors import InvalidAddressLength, MalformedHex, ValueTooLarge

UINT256_SIZE = 32
ADDRESS_HEX_LENGTH = 40
SELECTOR_HEX_LENGTH = 8

_HEX_DIGITS = frozenset(string.hexdigits)


def _strip_prefix(hex_text: str) -> str:
    if hex_text[:2] in ("0x", "0X"):
        return hex_text[2:]
    return hex_text


def bytes_to_hex(data: bytes, with_prefix: bool = True) -> str:
    """Return two lowercase hex digits per byte, optionally ``0x``-prefixed."""
    text = bytes(data).hex()
    return "0x" + text if with_prefix else text


def _all_hex(digits: str) -> bool:
    return all(c in _HEX_DIGITS for c in digits)


def is_valid_hex(hex_text: str) -> bool:
    """True iff every character after an optional prefix is a hex digit."""
    return _all_hex(_strip_prefix(hex_text))


def hex_to_bytes(hex_text: str) -> bytes:
    """Decode hex text, tolerating a prefix and an odd number of digits."""
    digits = _strip_prefix(hex_text)
    if not _all_hex(digits):
        raise MalformedHex(f"not a hex string: {hex_text[:64]!r}")
    if len(digits) % 2:
        digits = "0" + digits
    return bytes.fromhex(digits)


def format_address(address: str) -> str:
    """Return the mixed-case display form of a 20-byte address.

    Each pair of characters is upper-cased when the nibble value of the
    pair's first character is 8 or more, lower-cased otherwise. This is a
    nibble rule, not the keccak-based EIP-55 checksum.
    """
    addr = _strip_prefix(address)
    if len(addr) != ADDRESS_HEX_LENGTH:
        raise InvalidAddressLength(
            f"address must be {ADDRESS_HEX_LENGTH} hex digits, got {len(addr)}"
        )
    if not _all_hex(addr):
        raise MalformedHex(f"address is not hex: {address!r}")

    chars = []
    for i in range(0, ADDRESS_HEX_LENGTH, 2):
        pair = addr[i:i + 2]
        if int(pair[0], 16) >= 8:
            chars.append(pair.upper())
        else:
            chars.append(pair.lower())
    return "0x" + "".join(chars)


def uint256_to_hex(value: Union[bytes, int], with_prefix: bool = True) -> str:
    """Encode a 256-bit value as 32 big-endian bytes of hex."""
    if isinstance(value, int):
        if value < 0:
            raise ValueError("uint256 cannot be negative")
        try:
            data = value.to_bytes(UINT256_SIZE, "big")
        except OverflowError as exc:
            raise ValueTooLarge("integer does not fit in 256 bits") from exc
    else:
        data = bytes(value)
        if len(data) > UINT256_SIZE:
            raise ValueTooLarge(f"{len(data)} bytes do not fit in uint256")
        data = data.rjust(UINT256_SIZE, b"\x00")
    return bytes_to_hex(data, with_prefix)


def hex_to_uint256(hex_text: str) -> bytes:
    """Decode hex into exactly 32 bytes, zero-left-padding short input."""
    data = hex_to_bytes(hex_text)
    if len(data) > UINT256_SIZE:
        raise ValueTooLarge(f"{len(data)} bytes do not fit in uint256")
    return data.rjust(UINT256_SIZE, b"\x00")


def hex_to_string(hex_text: str) -> str:
    """Reinterpret decoded bytes as UTF-8 without validating them."""
    return hex_to_bytes(hex_text).decode("utf-8", errors="surrogateescape")


def string_to_hex(text: str, with_prefix: bool = True) -> str:
    return bytes_to_hex(text.encode("utf-8", errors="surrogateescape"), with_prefix)


def hex_to_uint16_array(hex_text: str) -> List[int]:
    """Group decoded bytes into big-endian 16-bit values.

    A trailing odd byte becomes the high byte of a final value.
    """
    data = hex_to_bytes(hex_text)
    if len(data) % 2:
        data += b"\x00"
    return np.frombuffer(data, dtype=">u2").astype(np.uint16).tolist()


def uint16_array_to_hex(values: Iterable[int], with_prefix: bool = True) -> str:
    """Encode 16-bit values as big-endian byte pairs."""
    arr = values if isinstance(values, np.ndarray) else np.asarray(list(values))
    if arr.size == 0:
        return bytes_to_hex(b"", with_prefix)
    if arr.min() < 0 or arr.max() > 0xFFFF:
        raise ValueTooLarge("uint16 values must be within 0..65535")
    return bytes_to_hex(arr.astype(">u2").tobytes(), with_prefix)


def decode_abi_selector(hex_text: str) -> str:
    """Return the leading 4-byte function selector of an ABI call.

    Only the selector is extracted; argument data is left undecoded.
    """
    return _strip_prefix(hex_text)[:SELECTOR_HEX_LENGTH]
