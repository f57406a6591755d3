import base64
import re

_DECIMAL = re.compile(r"[+-]?[0-9]+")

# Unpadded base32 lengths leave 0, 2, 4, 5 or 7 characters in the last block.
_VALID_TAIL_LENGTHS = (0, 2, 4, 5, 7)


def decode_secret(secret: str) -> bytes:
    """
    Decodes an otpauth secret: base32 (RFC 4648) without ``=`` padding.

    The secret is upper-cased first, so lowercase secrets are accepted.

    :param secret: the base32 text from the URI
    :returns: the raw key bytes
    :raises ValueError: if the text is empty, padded or not base32
    """
    if not secret:
        raise ValueError("secret is empty")
    if "=" in secret:
        raise ValueError("secret must not be padded")
    secret = secret.upper()
    missing_padding = len(secret) % 8
    if missing_padding not in _VALID_TAIL_LENGTHS:
        raise ValueError("secret has an invalid base32 length")
    if missing_padding != 0:
        secret += "=" * (8 - missing_padding)
    return base64.b32decode(secret)


def parse_decimal(value: str) -> int:
    """
    Parses a base-10 integer with an optional sign.

    Stricter than ``int()``: no surrounding whitespace, no underscores and
    no non-ASCII digits.
    """
    if not _DECIMAL.fullmatch(value):
        raise ValueError("{!r} is not a base-10 integer".format(value))
    return int(value)
