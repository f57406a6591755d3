"""Tests for OTP generation."""

import datetime
import re

import pytest

import otptoken
from otptoken import OTP, TOTP, Algorithm
from otptoken import totp as totp_module

from .conftest import RFC_KEY, totp_uri


class TestRFC6238Vectors:
    """Tests against the RFC 6238 Appendix B values."""

    @pytest.mark.parametrize(
        "for_time, expected",
        [
            (59, "94287082"),
            (1111111109, "07081804"),
            (1111111111, "14050471"),
            (1234567890, "89005924"),
            (2000000000, "69279037"),
            (20000000000, "65353130"),
        ],
    )
    def test_sha1(self, rfc_uri, for_time, expected):
        token = otptoken.parse_uri(rfc_uri)
        assert token.at(for_time) == expected
        assert otptoken.generate(token, for_time) == expected

    @pytest.mark.parametrize(
        "algorithm, expected",
        [("SHA1", "94287082"), ("SHA256", "32247374"), ("SHA512", "69342147")],
    )
    def test_algorithms(self, algorithm, expected):
        token = otptoken.parse_uri(totp_uri("digits=8&algorithm={}".format(algorithm)))
        assert token.at(59) == expected

    def test_datetime_input(self, rfc_uri):
        token = otptoken.parse_uri(rfc_uri)
        at = datetime.datetime(2033, 5, 18, 3, 33, 20, tzinfo=datetime.timezone.utc)
        assert token.at(at) == "69279037"

    def test_naive_datetime_is_utc(self, rfc_uri):
        token = otptoken.parse_uri(rfc_uri)
        assert token.at(datetime.datetime(2005, 3, 18, 1, 58, 29)) == "07081804"

    def test_aware_datetime_other_offset(self, rfc_uri):
        token = otptoken.parse_uri(rfc_uri)
        tz = datetime.timezone(datetime.timedelta(hours=2))
        assert token.at(datetime.datetime(1970, 1, 1, 2, 0, 59, tzinfo=tz)) == "94287082"


class TestHOTPCore:
    """Tests for counter based generation (RFC 4226 Appendix D)."""

    @pytest.mark.parametrize(
        "counter, expected",
        [
            (0, "755224"),
            (1, "287082"),
            (2, "359152"),
            (3, "969429"),
            (4, "338314"),
            (5, "254676"),
            (6, "287922"),
            (7, "162583"),
            (8, "399871"),
            (9, "520489"),
        ],
    )
    def test_counter_values(self, counter, expected):
        assert OTP(RFC_KEY).generate_otp(counter) == expected

    @pytest.mark.parametrize(
        "digits, expected",
        [(6, "287082"), (7, "4287082"), (8, "94287082"), (9, "094287082"), (10, "1094287082")],
    )
    def test_digit_widths(self, digits, expected):
        assert OTP(RFC_KEY, digits=digits).generate_otp(1) == expected

    def test_counter_encoding(self):
        assert OTP.int_to_bytestring(0) == b"\x00" * 8
        assert OTP.int_to_bytestring(1) == b"\x00" * 7 + b"\x01"
        assert OTP.int_to_bytestring(0x0102030405060708) == b"\x01\x02\x03\x04\x05\x06\x07\x08"
        assert OTP.int_to_bytestring(-1) == b"\xff" * 8

    def test_zero_padding(self):
        # the truncated value here is below 10**7
        token = TOTP(RFC_KEY, digits=8)
        assert token.generate_otp(token.timecode(1111111109)) == "07081804"


class TestOutputShape:
    """Tests for the format of generated codes."""

    @pytest.mark.parametrize("digits", [6, 7, 8, 9, 10])
    @pytest.mark.parametrize("algorithm", list(Algorithm))
    def test_length_and_charset(self, digits, algorithm):
        token = TOTP(RFC_KEY, digits=digits, algorithm=algorithm)
        pattern = re.compile(r"[0-9]{%d}" % digits)
        for for_time in (0, 1, 59, 1111111109, 2000000000, 2**40):
            assert pattern.fullmatch(token.at(for_time))

    @pytest.mark.parametrize("period", [1, 7, 30, 90])
    def test_same_window_same_code(self, period):
        token = TOTP(RFC_KEY, period=period)
        start = 1111111110 // period * period
        assert token.at(start) == token.at(start + period - 1)
        assert token.timecode(start + period) == token.timecode(start) + 1

    def test_float_timestamp(self, rfc_uri):
        token = otptoken.parse_uri(rfc_uri)
        assert token.at(59.999) == "94287082"

    def test_pre_epoch_uses_floor_division(self):
        token = TOTP(RFC_KEY)
        assert token.timecode(-1) == -1
        assert token.timecode(-30) == -1
        assert token.timecode(-31) == -2
        assert re.fullmatch(r"[0-9]{6}", token.at(-1))

    def test_now(self, monkeypatch, rfc_uri):
        token = otptoken.parse_uri(rfc_uri)
        monkeypatch.setattr(totp_module.time, "time", lambda: 59.0)
        assert token.now() == "94287082"
        assert otptoken.generate(token) == "94287082"


class TestTokenValue:
    """Tests for the token as an immutable value."""

    def test_read_only(self):
        token = TOTP(RFC_KEY)
        with pytest.raises(AttributeError):
            token.digits = 8
        with pytest.raises(AttributeError):
            token.extra = "x"

    def test_repr_hides_secret(self):
        token = TOTP(RFC_KEY, label="alice", issuer="ACME")
        text = repr(token)
        assert "alice" in text
        assert "SHA1" in text
        assert "1234567890" not in text

    def test_secret_copied_from_bytearray(self):
        key = bytearray(RFC_KEY)
        token = TOTP(key)
        key[0] = 0
        assert token.secret == RFC_KEY

    @pytest.mark.parametrize("algorithm", list(Algorithm))
    def test_every_algorithm_has_digest(self, algorithm):
        assert algorithm.digest().name == algorithm.value.lower()

    def test_digest_sizes(self):
        assert Algorithm.SHA1.digest_size == 20
        assert Algorithm.SHA256.digest_size == 32
        assert Algorithm.SHA512.digest_size == 64

    @pytest.mark.parametrize(
        "kwargs, error",
        [
            ({"secret": b""}, otptoken.InvalidSecret),
            ({"secret": "GEZDGNBV"}, otptoken.InvalidSecret),
            ({"digits": 5}, otptoken.InvalidDigits),
            ({"digits": 11}, otptoken.InvalidDigits),
            ({"digits": True}, otptoken.InvalidDigits),
            ({"period": 0}, otptoken.InvalidPeriod),
            ({"period": 91}, otptoken.InvalidPeriod),
            ({"period": 30.0}, otptoken.InvalidPeriod),
            ({"algorithm": "SHA1"}, otptoken.InvalidAlgorithm),
        ],
    )
    def test_constructor_validation(self, kwargs, error):
        args = {"secret": RFC_KEY}
        args.update(kwargs)
        with pytest.raises(error):
            TOTP(**args)
