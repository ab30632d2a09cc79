"""Format-preserving maskers, one per category.

Every masker is a total function from text to text: empty, short and
malformed input fall back to a fixed mask or pass through unchanged.
"""
import re
from typing import Callable, Dict, Optional

from span_masking.domain.classifier import Category, strip_card_separators

MASK_CHAR = "*"
SECRET_MASK = "********"
USER_ID_MASK = "****"
CARD_MASK = "************"

CARD_GROUPS_PATTERN = re.compile(r"(\d{6})(\d+)(\d{4})")
PHONE_GROUPS_PATTERN = re.compile(r"(\+\d{1,3}|\d{1,4})(\d+)(\d{2,4})")
IPV4_PATTERN = re.compile(r"(\d{1,3}\.\d{1,3})(\.\d{1,3}\.\d{1,3})")


def _stars(count: int) -> str:
    return MASK_CHAR * max(count, 0)


def mask_email(email: Optional[str]) -> str:
    if not email:
        return email or ""

    local, sep, domain = email.partition("@")
    if not sep or not domain:
        return email
    if not local:
        return f"@{domain}"

    return f"{local[0]}{_stars(len(local) - 1)}@{domain}"


def mask_user_id(user_id: Optional[str]) -> str:
    if not user_id or len(user_id) <= 4:
        return USER_ID_MASK
    return f"{_stars(len(user_id) - 4)}{user_id[-4:]}"


def mask_payment_card(card_number: Optional[str]) -> str:
    if not card_number:
        return CARD_MASK

    digits = strip_card_separators(card_number)
    if len(digits) < 10:
        return CARD_MASK

    match = CARD_GROUPS_PATTERN.fullmatch(digits)
    if match is None:
        # Covers 10-digit numbers and values with non-digit characters
        return f"{digits[:6]}{_stars(len(digits) - 10)}{digits[-4:]}"

    head, middle, tail = match.groups()
    return f"{head}{_stars(len(middle))}{tail}"


def mask_phone(phone: Optional[str]) -> str:
    if not phone or len(phone) < 7:
        return phone or ""

    match = PHONE_GROUPS_PATTERN.fullmatch(phone)
    if match is None:
        return f"{_stars(len(phone) - 4)}{phone[-4:]}"

    prefix, middle, suffix = match.groups()
    return f"{prefix}{_stars(len(middle))}{suffix}"


def mask_ip_address(ip: Optional[str]) -> str:
    if not ip:
        return ip or ""

    match = IPV4_PATTERN.fullmatch(ip)
    if match is None:
        return ip

    return f"{match.group(1)}.*.*"


def mask_secret(_value: Optional[str] = None) -> str:
    return SECRET_MASK


MASKERS: Dict[Category, Callable[[Optional[str]], str]] = {
    Category.EMAIL: mask_email,
    Category.USER_ID: mask_user_id,
    Category.PHONE: mask_phone,
    Category.PAYMENT_CARD: mask_payment_card,
    Category.IP_ADDRESS: mask_ip_address,
    Category.SECRET_BLANKET: mask_secret,
}


def get_masker(category: Category) -> Optional[Callable[[Optional[str]], str]]:
    """Masker for ``category``; None for Category.NONE."""
    return MASKERS.get(category)
