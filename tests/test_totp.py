import datetime
import time

import pytest

from totpkeys import OTP, TOTP, generate, progress, time_remaining
from totpkeys.exceptions import DecodeFailure, InvalidCharacter

# b"12345678901234567890", the RFC 4226 / RFC 6238 SHA1 test key
RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"

# 2024-01-01T00:00:00Z, the start of a 30 second window
WINDOW_START = 1704067200


@pytest.mark.parametrize(
    "counter, code",
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
def test_generate_otp_matches_rfc4226_vectors(counter, code):
    assert OTP(RFC_SECRET).generate_otp(counter) == code


@pytest.mark.parametrize(
    "for_time, code",
    [
        (59, "94287082"),
        (1111111109, "07081804"),
        (1111111111, "14050471"),
        (1234567890, "89005924"),
        (2000000000, "69279037"),
        (20000000000, "65353130"),
    ],
)
def test_totp_matches_rfc6238_sha1_vectors(for_time, code):
    assert TOTP(RFC_SECRET, digits=8).at(for_time) == code
    assert generate(RFC_SECRET, digits=8, for_time=for_time) == code


def test_codes_keep_leading_zeros():
    code = generate(RFC_SECRET, digits=8, for_time=1111111109)
    assert code == "07081804"
    assert len(code) == 8


def test_at_accepts_datetime():
    for_time = datetime.datetime(2009, 2, 13, 23, 31, 30, tzinfo=datetime.timezone.utc)
    assert TOTP(RFC_SECRET, digits=8).at(for_time) == "89005924"


def test_default_generate_is_six_digits_thirty_seconds():
    assert generate(RFC_SECRET, for_time=59) == "287082"


def test_same_window_same_code_next_window_new_code():
    first = generate("JBSWY3DPEHPK3PXP", for_time=WINDOW_START)
    assert generate("JBSWY3DPEHPK3PXP", for_time=WINDOW_START + 29) == first
    assert generate("JBSWY3DPEHPK3PXP", for_time=WINDOW_START + 30) != first
    assert len(first) == 6
    assert first.isdigit()


def test_generate_uses_the_wall_clock(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(time, "time", lambda: 59.5)
    assert generate(RFC_SECRET, digits=8) == "94287082"
    assert TOTP(RFC_SECRET, digits=8).now() == "94287082"


def test_custom_step():
    totp = TOTP(RFC_SECRET, interval=60)
    assert totp.timecode(119) == 1
    assert generate(RFC_SECRET, step=60, for_time=119) == "287082"


def test_counter_offset():
    assert TOTP(RFC_SECRET).at(0, counter_offset=2) == "359152"


def test_large_counters_are_eight_bytes_big_endian():
    assert OTP.int_to_bytestring(1) == b"\x00\x00\x00\x00\x00\x00\x00\x01"
    assert OTP.int_to_bytestring(2**32 + 1) == b"\x00\x00\x00\x01\x00\x00\x00\x01"
    assert TOTP(RFC_SECRET).timecode(30 * (2**32 + 5)) == 2**32 + 5


def test_secret_with_spaces_and_lower_case_is_accepted():
    assert generate("gezd gnbv gy3t qojq gezd gnbv gy3t qojq", for_time=59) == "287082"


@pytest.mark.parametrize("secret", ["JBSW1Y3DPEHPK3PX", "NOT BASE32!", "JBSW=Y3DP"])
def test_undecodable_secret_fails(secret):
    with pytest.raises(DecodeFailure) as excinfo:
        generate(secret, for_time=59)
    assert isinstance(excinfo.value.__cause__, InvalidCharacter)


@pytest.mark.parametrize("secret", ["", "   ", "========"])
def test_empty_secret_fails(secret):
    with pytest.raises(DecodeFailure):
        generate(secret, for_time=59)


def test_argument_errors():
    with pytest.raises(ValueError):
        TOTP(RFC_SECRET, digits=11)
    with pytest.raises(ValueError):
        TOTP(RFC_SECRET, digits=0)
    with pytest.raises(ValueError):
        TOTP(RFC_SECRET, interval=0)
    with pytest.raises(ValueError):
        OTP(RFC_SECRET).generate_otp(-1)
    with pytest.raises(ValueError):
        time_remaining(0, for_time=WINDOW_START)


@pytest.mark.parametrize(
    "offset, remaining",
    [(0, 30), (5, 25), (29, 1), (30, 30)],
)
def test_time_remaining(offset, remaining):
    assert time_remaining(30, for_time=WINDOW_START + offset) == remaining


def test_time_remaining_floors_fractional_seconds():
    assert time_remaining(30, for_time=WINDOW_START + 29.9) == 1


def test_progress():
    assert progress(30, for_time=WINDOW_START) == 0
    assert progress(30, for_time=WINDOW_START + 15) == pytest.approx(50)
    late = progress(30, for_time=WINDOW_START + 29)
    assert 95 < late < 100


def test_window_helpers_reread_the_clock(monkeypatch: pytest.MonkeyPatch) -> None:
    now = [WINDOW_START + 5]
    monkeypatch.setattr(time, "time", lambda: now[0])

    assert time_remaining() == 25
    assert progress() == pytest.approx(100 / 6)

    now[0] = WINDOW_START + 29
    assert time_remaining() == 1

    totp = TOTP(RFC_SECRET, interval=60)
    assert totp.time_remaining() == 31
    assert totp.progress() == pytest.approx(29 / 60 * 100)
