import base64

import pytest

# RFC 6238 Appendix B seed
RFC_KEY = b"12345678901234567890"
RFC_SECRET = base64.b32encode(RFC_KEY).decode("ascii").rstrip("=")


def totp_uri(query: str = "", label: str = "exampleuser") -> str:
    uri = "otpauth://totp/{}?secret={}".format(label, RFC_SECRET)
    if query:
        uri += "&" + query
    return uri


@pytest.fixture
def rfc_uri():
    return totp_uri("digits=8")
