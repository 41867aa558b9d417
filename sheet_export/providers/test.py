"""Unit tests for the providers module.

Tests for:
- ExportProvider abstract base class
- Export flow (option validation, warning collection)
- Provider registry (register_provider, get_provider, list_providers)
- Renderer table exhaustiveness for every registered backend
"""

import pytest

from sheet_export.core.errors import InputError, WarningCategory
from sheet_export.schema import Component, ComponentKind, ComponentTree
from sheet_export.walker import walk

from . import ExportProvider, get_provider, list_providers


class OutlineProvider(ExportProvider):
    """Minimal provider listing node ids, supporting text only."""

    name = "outline"
    file_extension = ".txt"
    options = ("plain", "upper")
    supported_kinds = frozenset({ComponentKind.TEXT, ComponentKind.CONTAINER})

    @property
    def renderers(self):
        return {kind: self._line for kind in ComponentKind}

    def _line(self, node, context):
        text = "  " * node.depth + node.id
        return text.upper() if context.option == "upper" else text

    def emit(self, walk, context):
        return "\n".join(self.render(node, context) for node in walk)


@pytest.fixture
def mixed_tree():
    return ComponentTree.from_components(
        [
            Component(id="root", kind="container", child_ids=["t", "r", "ghost"]),
            Component(id="t", kind="text"),
            Component(id="r", kind="rating"),
        ]
    )


class TestExportProviderContract:
    """Tests for ExportProvider abstract base class contract."""

    @pytest.mark.unit
    def test_export_provider_is_abstract(self):
        """ExportProvider cannot be instantiated directly."""
        with pytest.raises(TypeError, match="abstract"):
            ExportProvider()  # type: ignore

    @pytest.mark.unit
    def test_concrete_provider_requires_emit(self):
        """Concrete providers must implement emit."""

        class IncompleteProvider(ExportProvider):
            name = "incomplete"
            file_extension = ".x"
            options = ("a",)
            supported_kinds = frozenset()
            renderers = {}

        with pytest.raises(TypeError, match="abstract"):
            IncompleteProvider()

    @pytest.mark.unit
    def test_default_option_is_first(self):
        """The first option is the default."""
        assert OutlineProvider().default_option == "plain"


class TestExport:
    """Tests for ExportProvider.export."""

    @pytest.mark.unit
    def test_export_code(self, mixed_tree):
        """export() returns the emitted code and metadata."""
        result = OutlineProvider().export(walk("root", mixed_tree), "upper")
        assert result.code == "ROOT\n  T\n  R"
        assert result.provider == "outline"
        assert result.option == "upper"

    @pytest.mark.unit
    def test_unknown_option(self, mixed_tree):
        """Options outside the closed set raise InputError."""
        with pytest.raises(InputError, match="Available: plain, upper"):
            OutlineProvider().export(walk("root", mixed_tree), "fancy")

    @pytest.mark.unit
    def test_warnings_collected(self, mixed_tree):
        """Walk warnings come first, then unsupported kinds."""
        result = OutlineProvider().export(walk("root", mixed_tree))
        assert result.has_warnings
        assert [(w.category, w.node_id) for w in result.warnings] == [
            (WarningCategory.MISSING_CHILD, "root"),
            (WarningCategory.UNSUPPORTED_KIND, "r"),
        ]


class TestProviderRegistry:
    """Tests for the provider registry."""

    @pytest.mark.unit
    def test_list_providers(self):
        """All three backends are registered."""
        assert set(list_providers()) >= {"svg", "react", "flutter"}

    @pytest.mark.unit
    def test_get_unknown_provider(self):
        """Unknown names raise KeyError listing the available providers."""
        with pytest.raises(KeyError, match="Available"):
            get_provider("pdf")

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["svg", "react", "flutter"])
    def test_renderers_cover_every_kind(self, name):
        """Every backend maps every ComponentKind to a renderer."""
        provider = get_provider(name)
        assert set(provider.renderers) == set(ComponentKind)
        assert provider.supported_kinds <= set(ComponentKind)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name,options",
        [
            ("svg", ("default",)),
            ("react", ("tailwind", "styled-components", "css-modules")),
            ("flutter", ("material", "cupertino")),
        ],
    )
    def test_options(self, name, options):
        """Backends expose their closed option sets."""
        assert get_provider(name).options == options
