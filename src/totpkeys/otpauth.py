import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple
from urllib.parse import parse_qsl, unquote, urlparse

from . import base32, utils
from .exceptions import (
    InvalidCharacter,
    InvalidSecret,
    MissingSecret,
    OTPAuthError,
    UnsupportedScheme,
    UnsupportedType,
)
from .otp import DEFAULT_DIGITS
from .totp import DEFAULT_INTERVAL

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "SHA1"

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass(frozen=True)
class OTPAuthRecord:
    """
    A key read from an otpauth:// URI.

    ``algorithm``, ``digits`` and ``period`` are kept for display only; codes
    are always generated with SHA1, 6 digits and a 30 second period.
    ``notices`` lists the ways the URI asked for something else.
    """

    secret: str
    label: str
    issuer: Optional[str] = None
    account: Optional[str] = None
    algorithm: str = DEFAULT_ALGORITHM
    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_INTERVAL
    notices: Tuple[str, ...] = ()


def _int_param(name: str, value: str, default: int, notices: List[str]) -> int:
    try:
        return int(value)
    except ValueError:
        notices.append("Ignoring non-numeric {} value {!r}, using {}".format(name, value, default))
        return default


def _decode_label_part(part: str) -> Optional[str]:
    if _BAD_ESCAPE.search(part):
        raise OTPAuthError("Malformed percent-escape in label {!r}".format(part))
    try:
        return unquote(part, errors="strict") or None
    except UnicodeDecodeError as e:
        raise OTPAuthError("Label is not valid UTF-8: {!r}".format(part)) from e


def parse_uri(uri: str) -> OTPAuthRecord:
    """
    Parses a TOTP provisioning URI.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param uri: the otpauth://totp/ URI to parse
    :returns: OTPAuthRecord carrying the normalized secret
    :raises UnsupportedScheme: if the scheme is not otpauth
    :raises UnsupportedType: if the type is anything but totp
    :raises MissingSecret: if there is no secret parameter
    :raises InvalidSecret: if the secret is not a usable Base32 key
    :raises OTPAuthError: if the URI or its label is malformed
    """
    try:
        parsed_uri = urlparse(uri.strip())
    except ValueError as e:
        raise OTPAuthError("Malformed URI: {}".format(e)) from e

    if parsed_uri.scheme != "otpauth":
        raise UnsupportedScheme("Not an otpauth URI")
    if parsed_uri.netloc != "totp":
        raise UnsupportedType("Only TOTP keys are supported, got {!r}".format(parsed_uri.netloc))

    # Label is "Issuer:account" or just "account", split before decoding
    issuer = None
    accountinfo_parts = parsed_uri.path[1:].split(":", 1)
    if len(accountinfo_parts) == 1:
        account = _decode_label_part(accountinfo_parts[0])
    else:
        issuer = _decode_label_part(accountinfo_parts[0])
        account = _decode_label_part(accountinfo_parts[1])

    secret = None
    algorithm = DEFAULT_ALGORITHM
    digits = DEFAULT_DIGITS
    period = DEFAULT_INTERVAL
    notices: List[str] = []

    seen = set()
    for key, value in parse_qsl(parsed_uri.query, keep_blank_values=True):
        # the first occurrence of a repeated parameter wins
        if key in seen:
            continue
        seen.add(key)
        if key == "secret":
            secret = value
        elif key == "issuer":
            # the parameter wins over the label prefix
            if value:
                issuer = value
        elif key == "algorithm":
            algorithm = value
        elif key == "digits":
            digits = _int_param("digits", value, DEFAULT_DIGITS, notices)
        elif key == "period":
            period = _int_param("period", value, DEFAULT_INTERVAL, notices)

    if not secret:
        raise MissingSecret("No secret found in URI")

    secret = utils.normalize_secret(secret)
    if not utils.is_secret_format(secret):
        raise InvalidSecret("Secret must be at least {} Base32 characters".format(utils.MIN_SECRET_LENGTH))
    try:
        base32.decode(secret)
    except InvalidCharacter as e:
        raise InvalidSecret(str(e)) from e

    if algorithm.upper() != DEFAULT_ALGORITHM:
        notices.append("Only SHA1 is supported, ignoring algorithm {!r}".format(algorithm))
    if digits != DEFAULT_DIGITS:
        notices.append("Only 6-digit codes are supported, ignoring digits={}".format(digits))
    if period != DEFAULT_INTERVAL:
        notices.append("Only a 30-second period is supported, ignoring period={}".format(period))
    for notice in notices:
        logger.warning(notice)

    return OTPAuthRecord(
        secret=secret,
        label=utils.build_label(issuer, account),
        issuer=issuer,
        account=account,
        algorithm=algorithm,
        digits=digits,
        period=period,
        notices=tuple(notices),
    )
