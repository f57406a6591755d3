import hmac
from typing import Any, Tuple

from .algorithm import Algorithm
from .errors import InvalidAlgorithm, InvalidDigits, InvalidSecret

DEFAULT_DIGITS = 6
MIN_DIGITS = 6
MAX_DIGITS = 10

_COUNTER_MASK = 0xFFFF_FFFF_FFFF_FFFF


class OTP(object):
    """
    Base class for OTP generators.

    Holds the key material and output format and implements the HOTP core
    (RFC 4226). Instances are immutable.
    """

    __slots__ = ("_secret", "_digits", "_algorithm")

    def __init__(
        self,
        secret: bytes,
        digits: int = DEFAULT_DIGITS,
        algorithm: Algorithm = Algorithm.SHA1,
    ) -> None:
        """
        :param secret: the raw (already base32-decoded) shared key
        :param digits: number of digits in the OTP, 6 to 10
        :param algorithm: hash function used in the HMAC
        """
        if not isinstance(secret, (bytes, bytearray)) or not secret:
            raise InvalidSecret(secret, reason="secret must be non-empty bytes")
        if isinstance(digits, bool) or not isinstance(digits, int) or not MIN_DIGITS <= digits <= MAX_DIGITS:
            raise InvalidDigits(digits)
        if not isinstance(algorithm, Algorithm):
            raise InvalidAlgorithm(algorithm)
        self._secret = bytes(secret)
        self._digits = digits
        self._algorithm = algorithm

    @property
    def secret(self) -> bytes:
        return self._secret

    @property
    def digits(self) -> int:
        return self._digits

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    def generate_otp(self, counter: int) -> str:
        """
        :param counter: the HMAC counter value to use as the OTP input.
            For TOTP this is the time step computed from the Unix timestamp.
        """
        hasher = hmac.new(self._secret, self.int_to_bytestring(counter), self._algorithm.digest)
        hmac_hash = bytearray(hasher.digest())
        # Dynamic truncation: the low nibble of the last byte picks 4 bytes.
        offset = hmac_hash[-1] & 0xF
        code = (
            (hmac_hash[offset] & 0x7F) << 24
            | (hmac_hash[offset + 1] & 0xFF) << 16
            | (hmac_hash[offset + 2] & 0xFF) << 8
            | (hmac_hash[offset + 3] & 0xFF)
        )
        str_code = str(10_000_000_000 + (code % 10**self._digits))
        return str_code[-self._digits :]

    @staticmethod
    def int_to_bytestring(i: int, padding: int = 8) -> bytes:
        """
        Turns an integer to the OATH specified bytestring, which is fed to
        the HMAC along with the secret.

        Values outside the unsigned 64-bit range wrap, so a negative counter
        is encoded as its two's complement.
        """
        return (i & _COUNTER_MASK).to_bytes(padding, "big")

    def _fields(self) -> Tuple[Any, ...]:
        return (type(self), self._secret, self._digits, self._algorithm)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OTP):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self) -> int:
        return hash(self._fields())

    def __repr__(self) -> str:
        return "{}(algorithm={}, digits={})".format(type(self).__name__, self._algorithm.value, self._digits)
