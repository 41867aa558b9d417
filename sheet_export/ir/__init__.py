"""Intermediate representation for generated markup and Dart source.

Example usage:
    >>> from sheet_export.ir import Call, render_dart
    >>> render_dart(Call("SizedBox", kwargs={"height": 12}))
    'SizedBox(height: 12)'
"""

from .lib import (
    Call,
    Comment,
    DartComment,
    DartList,
    Element,
    Expression,
    MarkupNode,
    Raw,
    Text,
    dart_string,
    render_dart,
    render_markup,
)

__all__ = [
    # Markup
    "Comment",
    "Element",
    "Expression",
    "MarkupNode",
    "Text",
    "render_markup",
    # Dart
    "Call",
    "DartComment",
    "DartList",
    "Raw",
    "dart_string",
    "render_dart",
]
