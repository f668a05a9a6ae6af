"""Post-processing that strips model reasoning from commit messages."""

import re
from typing import Callable, List

from commit_gen.config import FALLBACK_MESSAGE

SanitizePass = Callable[[str], str]

_META_LINE_MARKERS = ("thought:", "reasoning:")


def strip_tag_block(tag: str) -> SanitizePass:
    """Build a pass removing every ``<tag>...</tag>`` block, tags included."""

    pattern = re.compile(rf"<{re.escape(tag)}>.*?</{re.escape(tag)}>", re.DOTALL)

    def _strip(text: str) -> str:
        return pattern.sub("", text).strip()

    _strip.__name__ = f"strip_{tag}_blocks"
    return _strip


def drop_meta_lines(text: str) -> str:
    """Drop lines that look like "Thought:" or "Reasoning:" commentary."""

    kept = [
        line
        for line in text.split("\n")
        if not any(marker in line.lower() for marker in _META_LINE_MARKERS)
    ]
    return "\n".join(kept).strip()


SANITIZE_PASSES: List[SanitizePass] = [
    strip_tag_block("thinking"),
    strip_tag_block("think"),
    drop_meta_lines,
]


def _apply_passes(text: str) -> str:
    for sanitize_pass in SANITIZE_PASSES:
        text = sanitize_pass(text)
    return text


def sanitize_commit_message(text: str, fallback: str = FALLBACK_MESSAGE) -> str:
    """Run the sanitize passes in order until the text stops changing.

    Removing one block can splice a new one together (e.g. a `<think>` block
    nested inside an opening `<thinking` tag), so a single sweep is not enough.
    Every sweep either shortens the text or leaves it as is, so the loop ends.
    Falls back to *fallback* when nothing is left.
    """

    message = text.strip()
    while True:
        cleaned = _apply_passes(message)
        if cleaned == message:
            break
        message = cleaned

    return message or fallback
