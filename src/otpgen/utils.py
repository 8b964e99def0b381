import secrets
import unicodedata
from hmac import compare_digest
from typing import Union

from .otp import DIGITS


def format_code(code: Union[int, str], digits: int = DIGITS) -> str:
    """
    Renders a code for display, zero-padded to ``digits`` characters.

    Strings are passed through unchanged so user input can be compared as typed.
    """
    if isinstance(code, str):
        return code
    if code < 0:
        raise ValueError("code must be positive integer")
    if code >= 10**digits:
        raise ValueError("code must have at most {} digits".format(digits))
    str_code = str(10**digits + code)
    # the leading 1 keeps the zeros, drop it
    return str_code[-digits:]


def random_key(length: int = 20) -> bytes:
    """
    Generates a random raw secret suitable for HMAC-SHA1.

    :param length: key size in bytes
    """
    if length < 20:
        raise ValueError("Secrets should be at least 160 bits")
    return secrets.token_bytes(length)


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length.
    """
    s1 = unicodedata.normalize("NFKC", s1)
    s2 = unicodedata.normalize("NFKC", s2)
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))
