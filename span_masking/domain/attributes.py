"""Span attribute masking.

Applies the classifier and maskers to a full attribute mapping. Keys, key
order and attribute count are preserved; only values change.
"""
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from span_masking.domain.classifier import Category, classify
from span_masking.domain.maskers import get_masker

Scalar = Union[str, bool, int, float]
AttributeValue = Union[Scalar, Sequence[Scalar]]


def to_text(value: Any) -> str:
    """Total conversion of an attribute value to text before masking."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "True" if value else "False"
    return str(value)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def mask_value(key: str, value: Any) -> Tuple[Category, Any]:
    """
    Mask a single attribute value.

    Returns:
        (category, new_value). new_value is the untouched original when the
        category is Category.NONE, otherwise masked text (or a tuple of masked
        text for sequence values).
    """
    category = classify(key, value)
    masker = get_masker(category)
    if masker is None:
        return category, value

    if _is_sequence(value):
        return category, tuple(masker(to_text(item)) for item in value)

    return category, masker(to_text(value))


def mask_attributes(attributes: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Return a copy of ``attributes`` with sensitive values masked."""
    if not attributes:
        return {}

    masked: Dict[str, Any] = {}
    for key, value in attributes.items():
        _, masked[key] = mask_value(key, value)
    return masked
