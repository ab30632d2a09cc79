from typing import Any, Mapping, Optional

from opentelemetry.attributes import BoundedAttributes
from opentelemetry.context import Context
from opentelemetry.sdk.trace import ReadableSpan, Span, SpanProcessor

from span_masking.domain.attributes import mask_attributes


def _bounded_copy(original: Any, masked: Mapping[str, Any]) -> BoundedAttributes:
    """Masked attributes with the original limits and dropped count."""
    attributes = BoundedAttributes(
        maxlen=getattr(original, "maxlen", None),
        attributes=masked,
        immutable=True,
        max_value_len=getattr(original, "max_value_len", None),
    )
    attributes.dropped = getattr(original, "dropped", 0)
    return attributes


class MaskingSpanProcessor(SpanProcessor):
    """
    SpanProcessor that masks sensitive attribute values before they reach the
    wrapped processor (and therefore any exporter).
    """
    def __init__(self, processor: SpanProcessor):
        self._processor = processor

    @property
    def delegate(self) -> SpanProcessor:
        return self._processor

    def on_start(self, span: Span, parent_context: Optional[Context] = None) -> None:
        self._processor.on_start(span, parent_context=parent_context)

    def on_end(self, span: ReadableSpan) -> None:
        if span.attributes:
            masked = mask_attributes(span.attributes)
            # ReadableSpan has no public setter once ended; the SDK reads
            # attributes and the dropped count back from `_attributes`.
            if hasattr(span, "_attributes"):
                span._attributes = _bounded_copy(span._attributes, masked)

        self._processor.on_end(span)

    def shutdown(self) -> None:
        self._processor.shutdown()

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return self._processor.force_flush(timeout_millis)
