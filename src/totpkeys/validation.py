import enum
import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

from . import base32, utils
from .exceptions import InvalidCharacter, OTPAuthError
from .otpauth import parse_uri
from .utils import is_otpauth_uri as is_otpauth_uri

logger = logging.getLogger(__name__)

_ALLOWED = re.compile(r"^[A-Z2-7=]*$")


class InvalidReason(enum.Enum):
    BAD_ALPHABET = "bad_alphabet"
    TOO_SHORT = "too_short"
    UNDECODABLE = "undecodable"
    INVALID_URI = "invalid_uri"


@dataclass(frozen=True)
class Valid:
    secret: str

    @property
    def is_valid(self) -> bool:
        return True


@dataclass(frozen=True)
class Invalid:
    reason: InvalidReason
    message: str = ""

    @property
    def is_valid(self) -> bool:
        return False


ValidationResult = Union[Valid, Invalid]


@dataclass(frozen=True)
class KeyData:
    secret: str
    remark: Optional[str] = None


def _reject(reason: InvalidReason, message: str) -> Invalid:
    logger.debug("Rejected key input (%s): %s", reason.value, message)
    return Invalid(reason, message)


def validate_secret(text: str) -> ValidationResult:
    """
    Validates free-form key input and returns its canonical secret.

    Accepts a Base32 secret in any case and with any spacing, or an
    otpauth://totp/ URI carrying one.

        >>> validate_secret("jbsw y3dp ehpk 3pxp")
        Valid(secret='JBSWY3DPEHPK3PXP')

    :param text: what the user typed or pasted
    :returns: Valid with the canonical secret, or Invalid with a reason
    """
    trimmed = text.strip()
    if is_otpauth_uri(trimmed):
        try:
            record = parse_uri(trimmed)
        except OTPAuthError as e:
            return _reject(InvalidReason.INVALID_URI, str(e))
        return Valid(record.secret)

    normalized = utils.normalize_secret(trimmed)
    if not _ALLOWED.match(normalized):
        return _reject(InvalidReason.BAD_ALPHABET, "Only A-Z, 2-7 and = are allowed")
    if utils.symbol_count(normalized) < utils.MIN_SECRET_LENGTH:
        return _reject(
            InvalidReason.TOO_SHORT,
            "Secret must be at least {} characters (excluding padding)".format(utils.MIN_SECRET_LENGTH),
        )
    try:
        base32.decode(normalized)
    except InvalidCharacter as e:
        return _reject(InvalidReason.UNDECODABLE, str(e))

    return Valid(normalized)


def extract_key_data(text: str) -> Optional[KeyData]:
    """
    Returns the secret and, for URIs, the display label to use as a remark.
    Returns None when the input is not a usable key.
    """
    if is_otpauth_uri(text):
        try:
            record = parse_uri(text)
        except OTPAuthError as e:
            logger.debug("Could not extract key data: %s", e)
            return None
        return KeyData(secret=record.secret, remark=record.label)

    result = validate_secret(text)
    if isinstance(result, Invalid):
        return None
    return KeyData(secret=result.secret)
