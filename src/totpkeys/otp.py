import hashlib
import hmac
import logging

from . import base32
from .exceptions import DecodeFailure, InvalidCharacter

logger = logging.getLogger(__name__)

DEFAULT_DIGITS = 6


class OTP(object):
    """
    Base class for OTP handlers.

    Only HMAC-SHA1 is supported.
    """

    def __init__(self, s: str, digits: int = DEFAULT_DIGITS) -> None:
        if digits < 1:
            raise ValueError("digits must be a positive integer")
        if digits > 10:
            raise ValueError("digits must be no greater than 10")
        self.digits = digits
        self.secret = s

    def generate_otp(self, input: int) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input.
            Usually the computed integer based on the Unix timestamp
        :raises DecodeFailure: if the secret is not usable Base32
        """
        # Implements RFC 4226
        if input < 0:
            raise ValueError("input must be positive integer")
        hasher = hmac.new(self.byte_secret(), self.int_to_bytestring(input), hashlib.sha1)
        hmac_hash = bytearray(hasher.digest())
        # Dynamic truncation: the low nibble of the last byte picks 4 bytes,
        # the top bit is masked off to leave a 31-bit integer.
        offset = hmac_hash[-1] & 0xF
        code = (
            (hmac_hash[offset] & 0x7F) << 24
            | (hmac_hash[offset + 1] & 0xFF) << 16
            | (hmac_hash[offset + 2] & 0xFF) << 8
            | (hmac_hash[offset + 3] & 0xFF)
        )
        return str(code % 10**self.digits).zfill(self.digits)

    def byte_secret(self) -> bytes:
        try:
            key = base32.decode(self.secret)
        except InvalidCharacter as e:
            logger.debug("Rejected secret: %s", e)
            raise DecodeFailure("Secret is not valid Base32") from e
        if not key:
            raise DecodeFailure("Secret decodes to an empty key")
        return key

    @staticmethod
    def int_to_bytestring(i: int, padding: int = 8) -> bytes:
        """
        Turns an integer to the OATH specified
        bytestring, which is fed to the HMAC
        along with the secret
        """
        result = bytearray()
        while i != 0:
            result.append(i & 0xFF)
            i >>= 8
        # bytes were collected least significant first
        return bytes(bytearray(reversed(result)).rjust(padding, b"\0"))
