"""Field validation for registration and login input.

All functions are pure. Registration checks run in a fixed order and the
first failing rule decides the reported code, so a request with several
bad fields always gets the same answer.
"""

import re

from edugate_identity.exceptions import ErrorCode

SCHOOL_ID_LENGTH = 10
NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 100
LOGIN_MIN_LENGTH = 3
LOGIN_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 8
# bcrypt only looks at the first 72 bytes of its input
PASSWORD_MAX_BYTES = 72
ATTRIBUTE_MAX_LENGTH = 50

PASSWORD_SYMBOLS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

_SCHOOL_ID_RE = re.compile(r"^[0-9]+$")
# Any Unicode letter, so names like "Łukasz" or "Zoë" pass
_NAME_RE = re.compile(r"^[^\W\d_]+$")
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
_LOGIN_RE = re.compile(r"^[a-zA-Z0-9]+$")
_LOWER_RE = re.compile(r"[a-z]")
_UPPER_RE = re.compile(r"[A-Z]")
_DIGIT_RE = re.compile(r"[0-9]")
_SYMBOL_RE = re.compile(f"[{re.escape(PASSWORD_SYMBOLS)}]")


def _utf8_length(value: str) -> int | None:
    # Lone surrogates (legal in JSON strings) have no UTF-8 encoding
    try:
        return len(value.encode("utf-8"))
    except UnicodeEncodeError:
        return None


def is_valid_school_id(school_id: str) -> bool:
    return len(school_id) == SCHOOL_ID_LENGTH and bool(
        _SCHOOL_ID_RE.fullmatch(school_id)
    )


def is_valid_name(name: str) -> bool:
    return NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH and bool(
        _NAME_RE.fullmatch(name)
    )


def is_valid_email(email: str) -> bool:
    return len(email) <= EMAIL_MAX_LENGTH and bool(_EMAIL_RE.fullmatch(email))


def is_valid_login(login: str) -> bool:
    return LOGIN_MIN_LENGTH <= len(login) <= LOGIN_MAX_LENGTH and bool(
        _LOGIN_RE.fullmatch(login)
    )


def is_valid_password(password: str) -> bool:
    """Check length and character class rules for a password.

    A valid password has at least 8 characters, fits into 72 UTF-8 bytes
    and contains a lowercase letter, an uppercase letter, a digit and one
    of ``PASSWORD_SYMBOLS``.
    """
    if len(password) < PASSWORD_MIN_LENGTH:
        return False
    size = _utf8_length(password)
    if size is None or size > PASSWORD_MAX_BYTES:
        return False
    return all(
        pattern.search(password)
        for pattern in (_LOWER_RE, _UPPER_RE, _DIGIT_RE, _SYMBOL_RE)
    )


def is_valid_attribute(value: str) -> bool:
    return 0 < len(value) <= ATTRIBUTE_MAX_LENGTH and (
        _utf8_length(value) is not None
    )


def validate_registration(  # noqa: PLR0913
    school_id: str,
    first_name: str,
    last_name: str,
    email: str,
    login: str,
    password: str,
    role: str,
    status: str,
) -> ErrorCode | None:
    """Validate registration input.

    Returns
    -------
    ``None`` when every rule passes, otherwise the code of the first
    failing rule (``ErrorCode.BAD_SCHOOL`` or ``ErrorCode.BAD_DATA``).
    """
    if not is_valid_school_id(school_id):
        return ErrorCode.BAD_SCHOOL

    rules = (
        (is_valid_name, first_name),
        (is_valid_name, last_name),
        (is_valid_email, email),
        (is_valid_login, login),
        (is_valid_password, password),
        (is_valid_attribute, role),
        (is_valid_attribute, status),
    )
    for rule, value in rules:
        if not rule(value):
            return ErrorCode.BAD_DATA

    return None


def validate_login(login: str, password: str) -> ErrorCode | None:
    """Validate login input using the registration login/password rules."""
    if not is_valid_login(login) or not is_valid_password(password):
        return ErrorCode.BAD_DATA
    return None
