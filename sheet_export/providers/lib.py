"""Provider abstraction for export backends.

This module defines the abstract base class for export providers and
provides a registry/factory for accessing them by name. Each provider maps
every ComponentKind to a renderer and serializes a Walk into one string.
"""

import re
import zlib
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from sheet_export.core import get_logger
from sheet_export.core.errors import ExportWarning, InputError, WarningCategory
from sheet_export.schema import ComponentKind
from sheet_export.walker import Walk, WalkNode

logger = get_logger("providers")

_UNSAFE_ID = re.compile(r"[^A-Za-z0-9_-]")


def safe_id(component_id: str) -> str:
    """Component id restricted to ``[A-Za-z0-9_-]``.

    Other characters become ``-``. When that changed the id, a crc32 of
    the original is appended so distinct components stay distinct.

    Example:
        >>> safe_id("card")
        'card'
        >>> safe_id("a b").startswith("a-b-")
        True
    """
    slug = _UNSAFE_ID.sub("-", component_id)
    if slug != component_id:
        slug = f"{slug}-{zlib.crc32(component_id.encode('utf-8')):08x}"
    return slug


def class_name(name: str | None, default: str) -> str:
    """PascalCase class name from a component name.

    Falls back to ``default`` when the name is empty or would not start
    with a letter.

    Example:
        >>> class_name("welcome sheet", "Component")
        'WelcomeSheet'
    """
    words = re.findall(r"[A-Za-z0-9]+", name or "")
    result = "".join(word[:1].upper() + word[1:] for word in words)
    if not result or not result[0].isalpha():
        return default
    return result


@dataclass
class ExportResult:
    """Result of an export including generated code and any warnings.

    Attributes:
        code: The generated source.
        warnings: Structural and lossy-mapping warnings, in discovery order.
        provider: Name of the provider that generated this result.
        option: Dialect or theme used.
    """

    code: str
    warnings: list[ExportWarning] = field(default_factory=list)
    provider: str = ""
    option: str = ""

    @property
    def has_warnings(self) -> bool:
        """Check if any warnings were emitted."""
        return len(self.warnings) > 0


class RenderContext:
    """Per-export state handed to renderers.

    Holds the walk being serialized, the selected option and the warning
    list. A fresh context is created for every export call.
    """

    def __init__(self, walk: Walk, option: str, provider: str):
        self.walk = walk
        self.option = option
        self.provider = provider
        self.warnings: list[ExportWarning] = []

    def children(self, node: WalkNode) -> list[WalkNode]:
        return self.walk.children(node)

    def warn(
        self,
        category: WarningCategory,
        node: WalkNode,
        message: str,
        value: Any = None,
    ) -> None:
        """Record a warning for ``node``."""
        self.warnings.append(
            ExportWarning(
                category=category,
                node_id=node.id,
                message=message,
                value=None if value is None else str(value),
            )
        )

    def lossy(self, node: WalkNode, message: str, value: Any = None) -> None:
        self.warn(WarningCategory.LOSSY_STYLE, node, message, value)


Renderer = Callable[[WalkNode, RenderContext], Any]


class ExportProvider(ABC):
    """Abstract base class for export backends.

    Subclasses must implement:
        - name: Provider identifier string
        - file_extension: Output file extension
        - options: Closed set of dialects or themes
        - supported_kinds: Kinds with a faithful mapping
        - renderers: ComponentKind to renderer table covering every kind
        - emit: Walk to source conversion

    Example:
        >>> class TextProvider(ExportProvider):
        ...     name = "text"
        ...     file_extension = ".txt"
        ...     options = ("plain",)
        ...     supported_kinds = frozenset(ComponentKind)
        ...     ...
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier string."""
        ...

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Output file extension (e.g., '.svg', '.tsx')."""
        ...

    @property
    @abstractmethod
    def options(self) -> tuple[str, ...]:
        """Dialects or themes this provider accepts, default first."""
        ...

    @property
    def default_option(self) -> str:
        return self.options[0]

    @property
    @abstractmethod
    def supported_kinds(self) -> frozenset[ComponentKind]:
        """Kinds this provider can represent faithfully.

        Every other kind still renders, as a placeholder, and produces an
        unsupported_kind warning.
        """
        ...

    @property
    @abstractmethod
    def renderers(self) -> Mapping[ComponentKind, Renderer]:
        """Renderer for every ComponentKind."""
        ...

    @abstractmethod
    def emit(self, walk: Walk, context: RenderContext) -> str:
        """Serialize a walk.

        Args:
            walk: Pre-order walk of the export root's subtree.
            context: Selected option and warning sink.

        Returns:
            str: Generated source.
        """
        ...

    def create_context(self, walk: Walk, option: str) -> RenderContext:
        """Create the per-export context.

        Backends override this to return a RenderContext subclass carrying
        their own accumulators (SVG defs, styled-component definitions).
        """
        return RenderContext(walk, option, self.name)

    def render(self, node: WalkNode, context: RenderContext) -> Any:
        """Dispatch ``node`` to its kind's renderer."""
        return self.renderers[node.kind](node, context)

    def export(self, walk: Walk, option: str | None = None) -> ExportResult:
        """Serialize a walk and collect warnings.

        Args:
            walk: Pre-order walk of the export root's subtree.
            option: Dialect or theme; the provider default when None.

        Returns:
            ExportResult with code and warnings.

        Raises:
            InputError: If ``option`` is not one of ``options``.
        """
        option = option or self.default_option
        if option not in self.options:
            available = ", ".join(self.options)
            raise InputError(
                f"Unknown {self.name} option '{option}'. Available: {available}"
            )

        context = self.create_context(walk, option)
        context.warnings.extend(walk.warnings)
        for node in walk:
            context.warnings.extend(self._check_node(node))

        code = self.emit(walk, context)

        for warning in context.warnings[len(walk.warnings) :]:
            logger.warning("%s: %s", self.name, warning)
        logger.debug(
            "%s/%s exported %d components (%d warnings)",
            self.name,
            option,
            len(walk),
            len(context.warnings),
        )
        return ExportResult(
            code=code,
            warnings=context.warnings,
            provider=self.name,
            option=option,
        )

    def _check_node(self, node: WalkNode) -> list[ExportWarning]:
        """Check whether a node's kind has a faithful mapping.

        Args:
            node: Node to check.

        Returns:
            List with an unsupported_kind warning, or empty.
        """
        if node.kind in self.supported_kinds:
            return []
        return [
            ExportWarning(
                category=WarningCategory.UNSUPPORTED_KIND,
                node_id=node.id,
                message=f"{node.kind.value} is not supported by {self.name}; "
                "exported as a placeholder",
                value=node.kind.value,
            )
        ]


# Provider registry - populated by provider modules on import
_registry: dict[str, type[ExportProvider]] = {}


def register_provider(provider_cls: type[ExportProvider]) -> type[ExportProvider]:
    """Register a provider class in the registry.

    Uses a temporary instance to retrieve the provider name.

    Args:
        provider_cls: The provider class to register.

    Returns:
        The provider class (for decorator chaining).
    """
    _registry[provider_cls().name] = provider_cls
    return provider_cls


def get_provider(name: str) -> ExportProvider:
    """Get a provider instance by name.

    Args:
        name: The provider identifier ("svg", "react", "flutter").

    Returns:
        ExportProvider: An instance of the requested provider.

    Raises:
        KeyError: If no provider with the given name is registered.

    Example:
        >>> provider = get_provider("svg")
        >>> provider.export(walk).code
    """
    if name not in _registry:
        _import_providers()
        if name not in _registry:
            available = ", ".join(_registry.keys()) or "(none)"
            raise KeyError(f"Unknown provider '{name}'. Available: {available}")
    return _registry[name]()


def list_providers() -> list[str]:
    """List all registered provider names.

    Example:
        >>> list_providers()
        ['svg', 'react', 'flutter']
    """
    _import_providers()
    return list(_registry.keys())


def _import_providers() -> None:
    """Import provider modules to trigger registration."""
    import importlib

    for module_name in ("svg", "react", "flutter"):
        importlib.import_module(f"sheet_export.providers.{module_name}")
