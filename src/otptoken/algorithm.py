import hashlib
from enum import Enum
from typing import Any, Callable


class Algorithm(Enum):
    """
    HMAC hash functions allowed in an otpauth URI.

    The member value is the name used in the ``algorithm`` query parameter.
    """

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def digest(self) -> Callable[..., Any]:
        """The hashlib constructor handed to ``hmac.new``."""
        return _DIGESTS[self]

    @property
    def digest_size(self) -> int:
        return self.digest().digest_size


# Every member must appear here
_DIGESTS = {
    Algorithm.SHA1: hashlib.sha1,
    Algorithm.SHA256: hashlib.sha256,
    Algorithm.SHA512: hashlib.sha512,
}
