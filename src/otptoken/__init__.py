import logging
import re
from typing import Any, Dict, List, Type
from urllib.parse import parse_qsl, unquote, urlparse

from . import utils
from .algorithm import Algorithm as Algorithm
from .errors import (
    InvalidAlgorithm,
    InvalidDigits,
    InvalidHost,
    InvalidPeriod,
    InvalidScheme,
    InvalidSecret,
    MalformedURI,
    MissingSecret,
    ParseError,
)
from .otp import MAX_DIGITS, MIN_DIGITS
from .otp import OTP as OTP
from .totp import MAX_PERIOD, MIN_PERIOD
from .totp import TOTP as TOTP
from .totp import generate as generate

__all__ = [
    "Algorithm",
    "InvalidAlgorithm",
    "InvalidDigits",
    "InvalidHost",
    "InvalidPeriod",
    "InvalidScheme",
    "InvalidSecret",
    "MalformedURI",
    "MissingSecret",
    "OTP",
    "ParseError",
    "TOTP",
    "generate",
    "parse_uri",
]

logger = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def parse_uri(uri: str) -> TOTP:
    """
    Parses a provisioning URI of the form::

        otpauth://totp/<label>?secret=<base32>&issuer=<str>&algorithm=<SHA1|SHA256|SHA512>&digits=<6..10>&period=<1..90>

    Only ``secret`` is required. Unknown parameters are ignored. When a
    parameter is repeated, every value is validated in order and the last
    one wins.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param uri: the totp URI to parse
    :returns: TOTP object
    :raises ParseError: one of its subclasses, naming the first problem found
    """
    try:
        return _parse_uri(uri)
    except ParseError as e:
        logger.debug("Rejected otpauth URI: %s", type(e).__name__)
        raise


def _parse_uri(uri: str) -> TOTP:
    if not isinstance(uri, str):
        raise MalformedURI(uri, uri=uri, reason="uri must be a string")
    # urlparse silently drops tabs and newlines, so reject control characters here
    if _CONTROL_CHARS.search(uri):
        raise MalformedURI(uri, uri=uri, reason="uri must not contain control characters")
    try:
        parsed_uri = urlparse(uri)
    except ValueError as e:
        raise MalformedURI(uri, uri=uri, reason="uri cannot be parsed ({})".format(e)) from e

    # urlparse lowercases the scheme, so compare against the raw text too
    raw_scheme = uri.partition(":")[0] if ":" in uri else ""
    if parsed_uri.scheme != "otpauth" or raw_scheme != "otpauth":
        raise InvalidScheme(raw_scheme or parsed_uri.scheme, uri=uri)
    if parsed_uri.netloc != "totp":
        raise InvalidHost(parsed_uri.netloc, uri=uri)

    # Each key keeps all of its values in URI order; the last one wins.
    params: Dict[str, List[str]] = {}
    for key, value in parse_qsl(parsed_uri.query, keep_blank_values=True):
        params.setdefault(key, []).append(value)

    if "secret" not in params:
        raise MissingSecret(uri=uri)

    otp_data: Dict[str, Any] = {"label": unquote(parsed_uri.path).strip("/")}

    for value in params["secret"]:
        try:
            otp_data["secret"] = utils.decode_secret(value)
        except ValueError as e:
            raise InvalidSecret(value, uri=uri) from e
    for value in params.get("issuer", []):
        otp_data["issuer"] = value
    for value in params.get("algorithm", []):
        try:
            otp_data["algorithm"] = Algorithm(value)
        except ValueError as e:
            raise InvalidAlgorithm(value, uri=uri) from e
    for value in params.get("digits", []):
        otp_data["digits"] = _parse_bounded(value, MIN_DIGITS, MAX_DIGITS, InvalidDigits, uri)
    for value in params.get("period", []):
        otp_data["period"] = _parse_bounded(value, MIN_PERIOD, MAX_PERIOD, InvalidPeriod, uri)

    token = TOTP(**otp_data)
    logger.debug(
        "Parsed otpauth URI for label %r (issuer=%r, algorithm=%s, digits=%d, period=%d)",
        token.label,
        token.issuer,
        token.algorithm.value,
        token.digits,
        token.period,
    )
    return token


def _parse_bounded(value: str, minimum: int, maximum: int, error: Type[ParseError], uri: str) -> int:
    try:
        number = utils.parse_decimal(value)
    except ValueError as e:
        raise error(value, uri=uri) from e
    if not minimum <= number <= maximum:
        raise error(value, uri=uri)
    return number
