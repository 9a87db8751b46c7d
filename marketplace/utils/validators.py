"""
Validation utilities
"""
import re


EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
PHONE_PATTERN = re.compile(r"^\+?\d{7,15}$")
URL_PATTERN = re.compile(r"^https?://[^\s/$.?#].[^\s]*$", re.IGNORECASE)


def validate_email(email):
    """
    Validate email format

    Args:
        email (str): Email address to validate

    Returns:
        bool: True if valid, False otherwise
    """
    if not email:
        return False
    return bool(EMAIL_PATTERN.match(email))


def validate_phone(phone):
    """
    Validate an international phone number (7-15 digits, optional leading +)

    Args:
        phone (str): Phone number to validate

    Returns:
        bool: True if valid, False otherwise
    """
    if not phone:
        return False
    cleaned = re.sub(r"[\s\-\(\)\.]", "", phone)
    return bool(PHONE_PATTERN.match(cleaned))


def validate_url(url):
    if not url:
        return False
    return bool(URL_PATTERN.match(url))


def password_problems(password):
    """
    Check password strength

    Args:
        password (str): Candidate password

    Returns:
        list: Human readable problems, empty when the password is acceptable
    """
    problems = []
    if len(password or "") < 8:
        problems.append("Password must be at least 8 characters long")
    if not re.search(r"[a-z]", password or ""):
        problems.append("Password must contain a lowercase letter")
    if not re.search(r"[A-Z]", password or ""):
        problems.append("Password must contain an uppercase letter")
    if not re.search(r"\d", password or ""):
        problems.append("Password must contain a number")
    return problems
