"""Attribute classifier for span masking.

Maps a span attribute to the masking category that applies to it:
- Key rules first, evaluated top-to-bottom (first match wins)
- Content sniffing on string values only when no key rule matched
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple


class Category(str, Enum):
    EMAIL = "email"
    USER_ID = "user_id"
    PHONE = "phone"
    PAYMENT_CARD = "payment_card"
    IP_ADDRESS = "ip_address"
    SECRET_BLANKET = "secret_blanket"
    NONE = "none"


@dataclass(frozen=True)
class MaskingRule:
    """Key-substring rule. Matches when any keyword occurs in the lowercased key."""
    category: Category
    keywords: Tuple[str, ...]

    def matches(self, key_lower: str) -> bool:
        return any(keyword in key_lower for keyword in self.keywords)


# Order is significant: "card_token" must resolve to PAYMENT_CARD, not SECRET_BLANKET.
MASKING_RULES: Tuple[MaskingRule, ...] = (
    MaskingRule(Category.EMAIL, ("email",)),
    MaskingRule(Category.USER_ID, ("user.id", "customer.id")),
    MaskingRule(Category.PHONE, ("phone",)),
    MaskingRule(Category.PAYMENT_CARD, ("card", "credit", "payment")),
    MaskingRule(Category.IP_ADDRESS, ("address", "ip")),
    MaskingRule(Category.SECRET_BLANKET, ("password", "secret", "token", "key")),
)

CARD_NUMBER_PATTERN = re.compile(r"\d{13,19}")


def strip_card_separators(value: str) -> str:
    return value.replace(" ", "").replace("-", "")


def looks_like_email(value: str) -> bool:
    """True for `local@domain` with both parts non-empty (split on the first '@')."""
    local, sep, domain = value.partition("@")
    return bool(sep and local and domain)


def looks_like_card_number(value: str) -> bool:
    if not value:
        return False
    return CARD_NUMBER_PATTERN.fullmatch(strip_card_separators(value)) is not None


def match_key_rule(key: Optional[str]) -> Optional[MaskingRule]:
    """Return the first rule whose keywords occur in ``key``, or None."""
    if not key:
        return None
    key_lower = key.lower()
    for rule in MASKING_RULES:
        if rule.matches(key_lower):
            return rule
    return None


def classify(key: Optional[str], value: Any = None) -> Category:
    """
    Classify one attribute.

    Args:
        key: Attribute key (case-insensitive, matched by substring)
        value: Attribute value; only plain strings are content-sniffed

    Returns:
        The masking category, Category.NONE when the value should be left alone
    """
    rule = match_key_rule(key)
    if rule is not None:
        return rule.category

    if isinstance(value, str):
        if looks_like_email(value):
            return Category.EMAIL
        if looks_like_card_number(value):
            return Category.PAYMENT_CARD

    return Category.NONE
