import logging

from . import base32 as base32
from .exceptions import (
    DecodeFailure as DecodeFailure,
    InvalidCharacter as InvalidCharacter,
    InvalidSecret as InvalidSecret,
    MissingSecret as MissingSecret,
    OTPAuthError as OTPAuthError,
    TOTPError as TOTPError,
    UnsupportedScheme as UnsupportedScheme,
    UnsupportedType as UnsupportedType,
)
from .otp import OTP as OTP
from .otpauth import OTPAuthRecord as OTPAuthRecord
from .otpauth import parse_uri as parse_uri
from .totp import TOTP as TOTP
from .totp import generate as generate
from .totp import progress as progress
from .totp import time_remaining as time_remaining
from .utils import normalize_secret as normalize_secret
from .validation import Invalid as Invalid
from .validation import InvalidReason as InvalidReason
from .validation import KeyData as KeyData
from .validation import Valid as Valid
from .validation import ValidationResult as ValidationResult
from .validation import extract_key_data as extract_key_data
from .validation import is_otpauth_uri as is_otpauth_uri
from .validation import validate_secret as validate_secret

logging.getLogger(__name__).addHandler(logging.NullHandler())

#   Input shapes and where they go:
#
#   "jbsw y3dp ehpk 3pxp"                    ─┐
#   "JBSWY3DPEHPK3PXP"                       ─┼─ validate_secret() ─► "JBSWY3DPEHPK3PXP"
#   "otpauth://totp/Google:me?secret=..."    ─┘        │                      │
#                                               parse_uri()            generate() ─► "482193"
#                                            (label, notices)
