from typing import Any, Optional


class ParseError(ValueError):
    """
    Raised when an otpauth URI (or a token built directly) is rejected.

    :ivar value: the offending raw value
    :ivar uri: the URI being parsed, or None for tokens built in code
    """

    reason = "invalid token configuration"

    def __init__(self, value: Any = None, uri: Optional[str] = None, reason: Optional[str] = None) -> None:
        self.value = value
        self.uri = uri
        if reason is not None:
            self.reason = reason
        super().__init__(self._message())

    def _message(self) -> str:
        return "{}. got {!r}".format(self.reason, self.value)


class _URIShapeError(ParseError):
    def _message(self) -> str:
        return "{}. got {!r} in {!r}".format(self.reason, self.value, self.uri)


class MalformedURI(_URIShapeError):
    reason = "uri cannot be parsed"


class InvalidScheme(_URIShapeError):
    reason = "scheme must be `otpauth'"


class InvalidHost(_URIShapeError):
    reason = "host must be `totp'"


class MissingSecret(ParseError):
    reason = "uri must have secret in query"

    def _message(self) -> str:
        return self.reason


class InvalidSecret(ParseError):
    reason = "secret must be a non-empty unpadded base32 string"


class InvalidAlgorithm(ParseError):
    reason = "algorithm must be one of SHA1, SHA256, SHA512"


class InvalidDigits(ParseError):
    reason = "digits must be an integer between 6 and 10"


class InvalidPeriod(ParseError):
    reason = "period must be an integer between 1 and 90"
