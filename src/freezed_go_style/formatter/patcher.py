"""
PatchApplier: splice replacement spans into the original buffer.
"""

from typing import List

from freezed_go_style.schemas import ReplacementSpan
from .buffer import SourceBuffer


def _check_overlaps(spans: List[ReplacementSpan]) -> None:
    ordered = sorted(spans, key=lambda s: s.start)
    for previous, current in zip(ordered, ordered[1:]):
        if current.start < previous.end:
            raise ValueError(
                f"Overlapping spans [{previous.start}, {previous.end}) and [{current.start}, {current.end})"
            )


def compose_spans(buffer: SourceBuffer, spans: List[ReplacementSpan]) -> ReplacementSpan:
    """
    Merge the spans of one declaration into a single span.

    The original text between consecutive spans is carried over unchanged.
    """
    if not spans:
        raise ValueError("compose_spans needs at least one span")
    _check_overlaps(spans)

    ordered = sorted(spans, key=lambda s: s.start)
    pieces = [ordered[0].text]
    for previous, current in zip(ordered, ordered[1:]):
        pieces.append(buffer.text(previous.end, current.start))
        pieces.append(current.text)

    return ReplacementSpan(start=ordered[0].start, end=ordered[-1].end, text="".join(pieces))


def apply_spans(data: bytes, spans: List[ReplacementSpan]) -> bytes:
    """
    Apply spans to a byte buffer.

    Spans are applied from the highest start offset down so pending offsets
    stay valid; bytes outside every span are left untouched.
    """
    _check_overlaps(spans)

    result = data
    for span in sorted(spans, key=lambda s: s.start, reverse=True):
        if not 0 <= span.start <= span.end <= len(data):
            raise ValueError(f"Span [{span.start}, {span.end}) is outside the buffer")
        result = result[:span.start] + span.text.encode("utf-8") + result[span.end:]
    return result
