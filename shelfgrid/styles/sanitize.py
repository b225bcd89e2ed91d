"""Validated CSS values.

Every user-suppliable style token passes through one of these
constructors before it is interpolated into CSS. A value that does not
fully match its allow-listed grammar is rejected (``parse`` returns
None, the ``sanitize_*`` helpers return ``""``) and is never emitted.
"""

import logging
import re
from typing import Any, ClassVar, Optional

logger = logging.getLogger(__name__)


class SafeValue(str):
    """A string that fully matched ``pattern``.

    Subclasses define the grammar. Instances are only created through
    ``parse``, so holding one means the value was validated.
    """

    pattern: ClassVar[re.Pattern]
    keyword: ClassVar[bool] = False

    @classmethod
    def parse(cls, raw: Any) -> Optional["SafeValue"]:
        if isinstance(raw, bool) or not isinstance(raw, (str, int, float)):
            return None
        text = str(raw).strip()
        if cls.keyword:
            text = text.lower()
        if not text or not cls.pattern.fullmatch(text):
            logger.debug(f"Rejected {cls.__name__} value: {raw!r}")
            return None
        return cls(text)


class SafeColor(SafeValue):
    """Hex color (3, 4, 6 or 8 digits) or an rgb/rgba/hsl/hsla function.

    Function arguments may only contain digits, commas, spaces, dots and
    percent signs.
    """

    pattern = re.compile(
        r"#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})"
        r"|(?:rgba?|hsla?)\([0-9., %]+\)",
        re.IGNORECASE,
    )


class SafeDimension(SafeValue):
    """A non-negative number with an optional px, %, em, rem or pt unit."""

    pattern = re.compile(r"(?:\d+(?:\.\d+)?|\.\d+)(?:px|%|em|rem|pt)?")


class SafeBorderStyle(SafeValue):
    pattern = re.compile(r"none|solid|dashed|dotted|double")
    keyword = True


class SafeWidthUnit(SafeValue):
    pattern = re.compile(r"px|%|em|rem|auto")
    keyword = True


class SafeTextTransform(SafeValue):
    pattern = re.compile(r"none|uppercase|lowercase|capitalize")
    keyword = True


FONT_WEIGHTS = {
    "normal": "400",
    "bold": "700",
    "extrabold": "800",
}

CELL_PADDING = {
    "compact": "6px 8px",
    "normal": "10px 12px",
    "spacious": "16px 18px",
}


def sanitize_color(raw: Any) -> str:
    return SafeColor.parse(raw) or ""


def sanitize_dimension(raw: Any) -> str:
    return SafeDimension.parse(raw) or ""


def sanitize_border_style(raw: Any) -> str:
    return SafeBorderStyle.parse(raw) or ""


def sanitize_width_unit(raw: Any) -> str:
    return SafeWidthUnit.parse(raw) or ""


def font_weight(raw: Any) -> str:
    """Map a named weight (or a 100-900 numeric weight) to its CSS value."""
    if isinstance(raw, str):
        text = raw.strip().lower()
        if text in FONT_WEIGHTS:
            return FONT_WEIGHTS[text]
        if re.fullmatch(r"[1-9]00", text):
            return text
    return ""


def cell_padding(raw: Any) -> str:
    if isinstance(raw, str):
        return CELL_PADDING.get(raw.strip().lower(), "")
    return ""


def css_identifier(raw: Any) -> str:
    """Reduce arbitrary text to a safe class-name fragment."""
    text = re.sub(r"[^A-Za-z0-9_-]+", "-", str(raw or "")).strip("-")
    if text and text[0].isdigit():
        text = f"n{text}"
    return text
