import calendar
import datetime
import math
import time
from typing import Optional, Union

from .otp import DEFAULT_DIGITS, OTP

DEFAULT_INTERVAL = 30

ForTime = Union[int, float, datetime.datetime]


def _unix_seconds(for_time: ForTime) -> int:
    if isinstance(for_time, datetime.datetime):
        return calendar.timegm(for_time.utctimetuple())
    return math.floor(for_time)


class TOTP(OTP):
    """
    Handler for time-based OTP counters.
    """

    def __init__(self, s: str, digits: int = DEFAULT_DIGITS, interval: int = DEFAULT_INTERVAL) -> None:
        """
        :param s: secret in base32 format
        :param digits: number of integers in the OTP
        :param interval: the time interval in seconds for OTP. This defaults to 30.
        """
        if interval <= 0:
            raise ValueError("interval must be a positive number of seconds")
        self.interval = interval
        super().__init__(s=s, digits=digits)

    def at(self, for_time: ForTime, counter_offset: int = 0) -> str:
        """
        Accepts either a Unix timestamp integer or a datetime object.

        :param for_time: the time to generate an OTP for
        :param counter_offset: the amount of ticks to add to the time counter
        :returns: OTP value
        """
        return self.generate_otp(self.timecode(for_time) + counter_offset)

    def now(self) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        """
        return self.at(time.time())

    def timecode(self, for_time: ForTime) -> int:
        """
        Accepts either a timezone naive (UTC) or aware datetime object,
        or a Unix timestamp, and returns the window counter for it.
        """
        # integer division keeps counters past 2**32 exact
        return _unix_seconds(for_time) // self.interval

    def time_remaining(self, for_time: Optional[ForTime] = None) -> int:
        return time_remaining(self.interval, for_time)

    def progress(self, for_time: Optional[ForTime] = None) -> float:
        return progress(self.interval, for_time)


def generate(
    secret: str,
    step: int = DEFAULT_INTERVAL,
    digits: int = DEFAULT_DIGITS,
    for_time: Optional[ForTime] = None,
) -> str:
    """
    Computes the TOTP code for a canonical secret.

    :param secret: Base32 secret, as produced by :func:`totpkeys.validate_secret`
    :param step: window length in seconds
    :param digits: length of the returned code
    :param for_time: instant to compute for; the wall clock when omitted
    :returns: zero-padded decimal code of exactly ``digits`` characters
    :raises DecodeFailure: if the secret is not usable Base32
    """
    if for_time is None:
        for_time = time.time()
    return TOTP(secret, digits=digits, interval=step).at(for_time)


def time_remaining(step: int = DEFAULT_INTERVAL, for_time: Optional[ForTime] = None) -> int:
    """
    Seconds left in the current window, between 1 and ``step`` inclusive.
    A window's first second reports the full ``step``.
    """
    if step <= 0:
        raise ValueError("step must be a positive number of seconds")
    if for_time is None:
        for_time = time.time()
    return step - (_unix_seconds(for_time) % step)


def progress(step: int = DEFAULT_INTERVAL, for_time: Optional[ForTime] = None) -> float:
    """
    Percentage of the current window already elapsed, in ``[0, 100)``.
    """
    return (step - time_remaining(step, for_time)) / step * 100
