import calendar
import datetime
import time
from typing import Any, Optional, Tuple, Union

from .algorithm import Algorithm
from .errors import InvalidPeriod
from .otp import DEFAULT_DIGITS, OTP

DEFAULT_PERIOD = 30
MIN_PERIOD = 1
MAX_PERIOD = 90


class TOTP(OTP):
    """
    Handler for time-based OTP counters.

    This is the token described by an ``otpauth://totp/`` URI. It is a
    read-only value: parse it once, then call :meth:`at` or :meth:`now` as
    often as needed, from any thread.
    """

    __slots__ = ("_label", "_issuer", "_period")

    def __init__(
        self,
        secret: bytes,
        digits: int = DEFAULT_DIGITS,
        algorithm: Algorithm = Algorithm.SHA1,
        label: str = "",
        issuer: str = "",
        period: int = DEFAULT_PERIOD,
    ) -> None:
        """
        :param secret: the raw shared key
        :param digits: number of digits in the OTP, 6 to 10
        :param algorithm: hash function used in the HMAC
        :param label: account label, shown by authenticator apps
        :param issuer: name of the service issuing the token
        :param period: the time step in seconds, 1 to 90
        """
        if isinstance(period, bool) or not isinstance(period, int) or not MIN_PERIOD <= period <= MAX_PERIOD:
            raise InvalidPeriod(period)
        super().__init__(secret=secret, digits=digits, algorithm=algorithm)
        self._label = label
        self._issuer = issuer
        self._period = period

    @property
    def label(self) -> str:
        return self._label

    @property
    def issuer(self) -> str:
        return self._issuer

    @property
    def period(self) -> int:
        return self._period

    def at(self, for_time: Union[int, float, datetime.datetime]) -> str:
        """
        Generates the OTP for the given time.

        :param for_time: Unix timestamp in seconds, or a datetime
        :returns: OTP value, exactly ``digits`` characters long
        """
        return self.generate_otp(self.timecode(for_time))

    def now(self) -> str:
        """
        Generates the current time OTP.

        :returns: OTP value
        """
        return self.at(time.time())

    def timecode(self, for_time: Union[int, float, datetime.datetime]) -> int:
        """
        Accepts either a Unix timestamp or a datetime and returns the
        counter for that time step. Naive datetimes are read as UTC.

        Floor division is used, so times before the epoch give negative
        counters rather than rounding toward zero.
        """
        if isinstance(for_time, datetime.datetime):
            for_time = calendar.timegm(for_time.utctimetuple())
        return int(for_time // self._period)

    def _fields(self) -> Tuple[Any, ...]:
        return super()._fields() + (self._label, self._issuer, self._period)

    def __repr__(self) -> str:
        return "TOTP(label={!r}, issuer={!r}, algorithm={}, digits={}, period={})".format(
            self._label, self._issuer, self._algorithm.value, self._digits, self._period
        )


def generate(token: TOTP, for_time: Optional[Union[int, float, datetime.datetime]] = None) -> str:
    """
    Returns the OTP of ``token`` at ``for_time``, or now if no time is given.
    """
    if for_time is None:
        return token.now()
    return token.at(for_time)
