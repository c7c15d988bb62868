import re
from typing import Optional

MIN_SECRET_LENGTH = 8
UNNAMED_LABEL = "Unnamed Key"

_WHITESPACE = re.compile(r"\s+")
_SECRET_FORMAT = re.compile(r"^[A-Z2-7]+=*$")


def normalize_secret(secret: str) -> str:
    """
    Removes all whitespace from a secret and upper-cases it.

        >>> normalize_secret("jbsw y3dp ehpk 3pxp")
        'JBSWY3DPEHPK3PXP'
    """
    return _WHITESPACE.sub("", secret).upper()


def is_otpauth_uri(text: str) -> bool:
    return text.strip().lower().startswith("otpauth://")


def symbol_count(secret: str) -> int:
    # trailing padding carries no key bits
    return len(secret.rstrip("="))


def is_secret_format(secret: str) -> bool:
    """
    Checks a normalized secret: Base32 symbols, optional trailing padding
    and at least MIN_SECRET_LENGTH symbols.
    """
    return bool(_SECRET_FORMAT.match(secret)) and symbol_count(secret) >= MIN_SECRET_LENGTH


def build_label(issuer: Optional[str], account: Optional[str]) -> str:
    """
    Returns the display label for a key.

    For module-internal use.

    :param issuer: the organization that issued the key, if known
    :param account: the account name, if known
    :returns: ``"Issuer (account)"``, ``"Issuer"``, ``"account"`` or ``"Unnamed Key"``
    """
    if issuer:
        label = issuer
        if account and account != issuer:
            label += " ({})".format(account)
    elif account:
        label = account
    else:
        label = UNNAMED_LABEL
    return label.strip()
