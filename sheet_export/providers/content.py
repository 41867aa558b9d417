"""Readers for kind-specific content payloads.

The editor stores content as a loose dictionary whose keys drifted over
time (``stars`` vs ``max`` for ratings, ``items`` vs ``images`` for
carousels). Every backend reads content through these helpers so the
fallbacks stay identical across SVG, React and Flutter.
"""

from dataclasses import dataclass
from typing import Any

from sheet_export.schema import ComponentKind
from sheet_export.walker import WalkNode

# Labels the editor shows for freshly dropped components
DEFAULT_TEXT: dict[ComponentKind, str] = {
    ComponentKind.TEXT: "Text",
    ComponentKind.BUTTON: "Button",
    ComponentKind.BADGE: "Badge",
    ComponentKind.LINK: "Link",
}


@dataclass(frozen=True)
class ListItem:
    text: str
    subtext: str | None = None


@dataclass(frozen=True)
class Step:
    label: str
    completed: bool = False


def _number(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return default
    return default


def text_of(node: WalkNode) -> str:
    """Literal text of a text-like node, with the editor's default label."""
    text = node.content.get("text")
    if isinstance(text, str):
        return text
    if text is not None:
        return str(text)
    return DEFAULT_TEXT.get(node.kind, "")


def progress(content: dict) -> tuple[float, float, float]:
    """Read ``(value, max, fraction)`` for progress indicators.

    The fraction is clamped to 0..1; a non-positive max yields 0.
    """
    value = _number(content.get("value"), 0)
    maximum = _number(content.get("max"), 100)
    if maximum <= 0:
        return value, maximum, 0.0
    return value, maximum, max(0.0, min(1.0, value / maximum))


def percent_label(content: dict) -> str:
    """Static percentage text such as ``"30%"``."""
    _, _, fraction = progress(content)
    return f"{round(fraction * 100)}%"


def rating(content: dict) -> tuple[int, int]:
    """Read ``(filled, total)`` stars; total defaults to 5."""
    total = int(_number(content.get("stars", content.get("max")), 5))
    total = max(total, 0)
    filled = int(_number(content.get("value"), 0))
    return max(0, min(filled, total)), total


def list_items(content: dict) -> list[ListItem]:
    """Items of a list component.

    Items may be plain strings or ``{"text": ..., "subtext": ...}`` maps.
    """
    items = []
    for raw in content.get("items") or []:
        if isinstance(raw, dict):
            subtext = raw.get("subtext") or raw.get("description")
            items.append(
                ListItem(str(raw.get("text", "")), str(subtext) if subtext else None)
            )
        else:
            items.append(ListItem(str(raw)))
    return items


def is_numbered(content: dict) -> bool:
    return content.get("type") == "numbered" or bool(content.get("numbered"))


def image_urls(content: dict) -> list[str]:
    """Image URLs of a carousel, from ``items`` or ``images``."""
    urls = []
    for raw in content.get("items") or content.get("images") or []:
        if isinstance(raw, dict):
            url = raw.get("url") or raw.get("src")
            if url:
                urls.append(str(url))
        elif isinstance(raw, str):
            urls.append(raw)
    return urls


def button_labels(content: dict) -> list[str]:
    labels = []
    for raw in content.get("buttons") or []:
        if isinstance(raw, dict):
            labels.append(str(raw.get("label") or raw.get("text") or ""))
        else:
            labels.append(str(raw))
    return labels


def is_vertical_group(content: dict) -> bool:
    return content.get("layout") == "vertical"


def steps(content: dict) -> list[Step]:
    result = []
    for raw in content.get("steps") or []:
        if isinstance(raw, dict):
            result.append(
                Step(str(raw.get("label", "")), bool(raw.get("completed", False)))
            )
        else:
            result.append(Step(str(raw)))
    return result


def current_step(content: dict) -> int:
    return int(_number(content.get("currentStep"), 0))


__all__ = [
    "DEFAULT_TEXT",
    "ListItem",
    "Step",
    "button_labels",
    "current_step",
    "image_urls",
    "is_numbered",
    "is_vertical_group",
    "list_items",
    "percent_label",
    "progress",
    "rating",
    "steps",
    "text_of",
]
