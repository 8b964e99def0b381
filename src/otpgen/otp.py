import hashlib
import hmac
from typing import Union

DIGITS = 6
TIME_STEP = 30
MAX_FACTOR = 2**64 - 1
DIGEST_SIZE = 20


def int_to_bytestring(i: int, padding: int = 8) -> bytes:
    """
    Turns an integer to the OATH specified
    bytestring, which is fed to the HMAC
    along with the secret
    """
    if i < 0:
        raise ValueError("input must be positive integer")
    if i > MAX_FACTOR:
        raise ValueError("input must fit in 64 bits")
    result = bytearray()
    while i != 0:
        result.append(i & 0xFF)
        i >>= 8
    # bytes come out least significant first, HMAC wants them most significant first
    return bytes(bytearray(reversed(result)).rjust(padding, b"\0"))


def hmac_sha1(key: Union[bytes, bytearray], factor: int) -> bytes:
    """
    Computes HMAC-SHA1 of the moving factor, keyed with the shared secret.

    :param key: the raw secret; may be empty
    :param factor: the counter or time step, 0 <= factor <= MAX_FACTOR
    :returns: 20-byte digest
    """
    hasher = hmac.new(bytes(key), int_to_bytestring(factor), hashlib.sha1)
    return hasher.digest()


def dynamic_truncate(digest: bytes) -> bytes:
    """
    RFC 4226 dynamic truncation.

    The low nibble of the last byte picks an offset in 0..15; four bytes are
    read from there, the first one with its high bit cleared. offset + 3 is
    at most 18, so the window always falls inside the 20-byte digest.
    """
    if len(digest) != DIGEST_SIZE:
        raise ValueError("digest must be exactly {} bytes".format(DIGEST_SIZE))
    offset = digest[-1] & 0xF
    return bytes(
        [
            digest[offset] & 0x7F,
            digest[offset + 1],
            digest[offset + 2],
            digest[offset + 3],
        ]
    )


def derive_code(digest: bytes) -> int:
    """
    Reduces an HMAC-SHA1 digest to a 6-digit code.

    The result is numeric; values below 100000 are not padded here.
    """
    sbits = dynamic_truncate(digest)
    code = sbits[0] << 24 | sbits[1] << 16 | sbits[2] << 8 | sbits[3]
    return code % 10**DIGITS


def generate_otp(key: Union[bytes, bytearray], factor: int) -> int:
    """
    :param key: the raw secret
    :param factor: the HMAC counter value to use as the OTP input.
        Usually either the counter, or the computed integer based on the Unix timestamp
    """
    # Implements RFC 4226
    return derive_code(hmac_sha1(key, factor))
