"""Logging Hardening and Redaction.

This module provides filters to keep the values the span masker protects
(emails, payment-card numbers) out of application logs as well.
"""
import logging
import re

from span_masking.domain.classifier import looks_like_card_number, looks_like_email
from span_masking.domain.maskers import mask_email, mask_payment_card

# Keeps the whitespace runs so the message can be reassembled unchanged
_WHITESPACE_SPLIT = re.compile(r"(\s+)")


def mask_token(token: str) -> str:
    if looks_like_email(token):
        return mask_email(token)
    if looks_like_card_number(token):
        return mask_payment_card(token)
    return token


def mask_text(text: str) -> str:
    """Mask every email-shaped or card-number token in free text."""
    if not text:
        return text
    parts = _WHITESPACE_SPLIT.split(text)
    return "".join(part if part.isspace() else mask_token(part) for part in parts)


class SensitiveValueLogFilter(logging.Filter):
    """Filter that masks email and card-number tokens in log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        # A message with args is a format string; masking it could break "%s" placeholders
        if isinstance(record.msg, str) and not record.args:
            record.msg = mask_text(record.msg)

        # Also mask arguments if they are strings
        if isinstance(record.args, tuple) and record.args:
            record.args = tuple(
                mask_text(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )
        elif isinstance(record.args, dict):
            record.args = {
                name: mask_text(arg) if isinstance(arg, str) else arg
                for name, arg in record.args.items()
            }

        return True


def setup_logging_redaction() -> SensitiveValueLogFilter:
    """Apply the SensitiveValueLogFilter to all existing loggers and root handlers.

    Logger filters only see records logged on that logger; root handler
    filters also see records propagated from loggers created later.
    """
    redact_filter = SensitiveValueLogFilter()

    root_logger = logging.getLogger()
    targets = [root_logger, *root_logger.handlers]
    for name in list(logging.root.manager.loggerDict):
        targets.append(logging.getLogger(name))

    for target in targets:
        # Remove existing filters if any (to avoid duplicates)
        for f in target.filters[:]:
            if isinstance(f, SensitiveValueLogFilter):
                target.removeFilter(f)
        target.addFilter(redact_filter)

    logging.getLogger(__name__).debug("Logging redaction filters active.")
    return redact_filter
