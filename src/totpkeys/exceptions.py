class TOTPError(ValueError):
    """
    Base class for every error raised by totpkeys.
    """


class InvalidCharacter(TOTPError):
    """
    A symbol outside the Base32 alphabet was found while decoding.
    """

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__("Invalid Base32 character: {!r}".format(char))


class OTPAuthError(TOTPError):
    """
    An otpauth:// URI could not be turned into a record.
    """


class UnsupportedScheme(OTPAuthError):
    pass


class UnsupportedType(OTPAuthError):
    pass


class MissingSecret(OTPAuthError):
    pass


class InvalidSecret(OTPAuthError):
    pass


class DecodeFailure(TOTPError):
    """
    The generator was handed a secret it cannot turn into key bytes.
    """
