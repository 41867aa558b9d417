"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env, isolates SHEET_EXPORT_* variables)
- Sample component trees shared by module tests
- Global test configuration
"""

from __future__ import annotations

import pytest
from dotenv import load_dotenv

from sheet_export.config import EnvVar
from sheet_export.schema import ComponentTree, load_tree

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test against configuration defaults.

    Values from a developer's .env must not change generated output.
    """
    for var in EnvVar:
        monkeypatch.delenv(var.value.name, raising=False)


# =============================================================================
# Component Tree Fixtures
# =============================================================================


@pytest.fixture
def sample_tree() -> ComponentTree:
    """White 300x200 root with one text child at (10, 10).

    Returns:
        The smallest tree exercising every backend end to end.
    """
    return load_tree(
        [
            {
                "id": "root",
                "type": "container",
                "position": {
                    "type": "absolute",
                    "x": 0,
                    "y": 0,
                    "width": 300,
                    "height": 200,
                },
                "style": {"backgroundColor": "#FFFFFF"},
                "childIds": ["hello"],
            },
            {
                "id": "hello",
                "type": "text",
                "position": {
                    "type": "absolute",
                    "x": 10,
                    "y": 10,
                    "width": 120,
                    "height": 24,
                },
                "style": {"color": "#111827", "fontSize": 16},
                "content": {"text": "Hello"},
            },
        ]
    )


@pytest.fixture
def nested_tree() -> ComponentTree:
    """Bottom sheet with a card holding two texts, plus a button.

    Returns:
        Three-level tree: root -> card -> (title, body), root -> cta.
    """
    return load_tree(
        {
            "components": [
                {
                    "id": "root",
                    "name": "welcome sheet",
                    "type": "container",
                    "position": {"width": 375, "height": 600},
                    "style": {"backgroundColor": "#FFFFFF", "borderRadius": 24},
                    "childIds": ["card", "cta"],
                },
                {
                    "id": "card",
                    "type": "container",
                    "position": {"x": 20, "y": 20, "width": 335, "height": 200},
                    "style": {"backgroundColor": "#F9FAFB", "borderRadius": 16},
                    "effects": {
                        "shadows": [
                            {
                                "x": 0,
                                "y": 4,
                                "blur": 12,
                                "spread": 0,
                                "color": "rgba(0, 0, 0, 0.1)",
                            }
                        ]
                    },
                    "childIds": ["title", "body"],
                },
                {
                    "id": "title",
                    "type": "text",
                    "position": {"x": 12, "y": 12, "width": 300, "height": 28},
                    "style": {"color": "#111827", "fontSize": 20, "fontWeight": 700},
                    "content": {"text": "Welcome"},
                },
                {
                    "id": "body",
                    "type": "text",
                    "position": {"x": 12, "y": 48, "width": 300, "height": 40},
                    "style": {"color": "#4B5563", "fontSize": 14},
                    "content": {"text": "Line one\nLine two"},
                },
                {
                    "id": "cta",
                    "type": "button",
                    "position": {"x": 20, "y": 520, "width": 335, "height": 48},
                    "style": {
                        "backgroundColor": "#6366F1",
                        "textColor": "#FFFFFF",
                        "borderRadius": 8,
                        "fontSize": 16,
                    },
                    "content": {"text": "Get started"},
                },
            ],
            "rootIds": ["root"],
        }
    )


@pytest.fixture
def cyclic_tree() -> ComponentTree:
    """Two containers listing each other as children, rooted at 'a'."""
    return load_tree(
        {
            "components": [
                {"id": "a", "type": "container", "childIds": ["b"]},
                {"id": "b", "type": "container", "childIds": ["a"]},
            ],
            "rootIds": ["a"],
        }
    )


@pytest.fixture
def all_kinds_tree() -> ComponentTree:
    """Flex column root holding one component of every kind.

    Returns:
        Tree whose root 'root' has 20 in-flow children, one per kind.
    """
    stops = [
        {"position": 0, "color": "#6366F1"},
        {"position": 100, "color": "#EC4899"},
    ]
    children = [
        {"id": "text", "type": "text", "content": {"text": "Title"}},
        {
            "id": "image",
            "type": "image",
            "content": {"url": "https://example.com/a.png", "alt": "Hero"},
            "style": {"objectFit": "cover", "borderRadius": 12},
        },
        {
            "id": "video",
            "type": "video",
            "content": {"url": "https://example.com/v.mp4"},
        },
        {"id": "button", "type": "button", "content": {"text": "Go"}},
        {
            "id": "input",
            "type": "input",
            "content": {"placeholder": "Email", "label": "Your email"},
        },
        {
            "id": "shape",
            "type": "shape",
            "style": {"backgroundColor": "#6366F1"},
            "effects": {"gradient": {"type": "linear", "angle": 90, "stops": stops}},
        },
        {"id": "container", "type": "container"},
        {
            "id": "carousel",
            "type": "carousel",
            "content": {"images": [{"url": "https://example.com/1.png"}]},
        },
        {"id": "rating", "type": "rating", "content": {"value": 4, "max": 5}},
        {"id": "divider", "type": "divider", "style": {"color": "#E5E7EB"}},
        {"id": "spacer", "type": "spacer"},
        {"id": "badge", "type": "badge", "content": {"text": "NEW"}},
        {"id": "richtext", "type": "richtext", "content": {"html": "<b>Bold</b>"}},
        {
            "id": "buttongroup",
            "type": "buttongroup",
            "content": {
                "buttons": [
                    {"label": "Yes", "variant": "primary"},
                    {"label": "No", "variant": "secondary"},
                ],
                "layout": "horizontal",
            },
        },
        {
            "id": "progressbar",
            "type": "progressbar",
            "content": {"value": 30, "max": 100},
            "style": {"color": "#10B981", "backgroundColor": "#E5E7EB"},
        },
        {
            "id": "progresscircle",
            "type": "progresscircle",
            "content": {"value": 3, "max": 4},
        },
        {
            "id": "stepper",
            "type": "stepper",
            "content": {
                "steps": [{"label": "Cart", "completed": True}, {"label": "Pay"}],
                "currentStep": 1,
            },
        },
        {
            "id": "list",
            "type": "list",
            "content": {"items": ["One", {"text": "Two", "subtext": "more"}]},
        },
        {
            "id": "countdown",
            "type": "countdown",
            "content": {"targetDate": "2030-01-01T00:00:00Z"},
        },
        {
            "id": "link",
            "type": "link",
            "content": {"text": "Terms", "href": "https://example.com/terms"},
        },
    ]
    for child in children:
        child.setdefault("position", {"type": "flex", "width": 200, "height": 40})

    root = {
        "id": "root",
        "type": "container",
        "position": {"width": 375, "height": 1200},
        "flexLayout": {"enabled": True, "direction": "column", "gap": 8, "padding": 16},
        "childIds": [c["id"] for c in children],
    }
    return load_tree({"components": [root, *children], "rootIds": ["root"]})
