# plotgrade/adapters/__init__.py

from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

from plotgrade.models import Registry


@runtime_checkable
class PlotAdapter(Protocol):
    """Accessor contract between the inspectors and a plotting library.

    The inspectors never touch the library's class hierarchy. They only
    call these methods, so a different plotnine release (or a fake in
    tests) plugs in by implementing this protocol.
    """

    def is_plot(self, obj: Any) -> bool:
        """Whether `obj` is a plot object this adapter understands."""
        ...

    def layers(self, plot: Any) -> Sequence[Any]:
        """The plot's layers, in drawing order."""
        ...

    def geom_id(self, layer: Any) -> str:
        """Canonical lowercase geom name of a layer, e.g. "point"."""
        ...

    def stat_id(self, layer: Any) -> str:
        """Canonical lowercase stat name of a layer, e.g. "identity"."""
        ...

    def local_mapping(self, layer: Any) -> Mapping[str, Any] | None:
        """The layer's own aesthetic mapping, or None if it declares none."""
        ...

    def global_mapping(self, plot: Any) -> Mapping[str, Any]:
        """The plot-level aesthetic mapping ({} if none)."""
        ...

    def geom_params(self, layer: Any) -> Mapping[str, Any]:
        ...

    def stat_params(self, layer: Any) -> Mapping[str, Any]:
        ...

    def geom_registry(self) -> Registry:
        """Short geom name -> default stat and valid parameters."""
        ...

    def stat_registry(self) -> Registry:
        """Short stat name -> default geom and valid parameters."""
        ...


@lru_cache(maxsize=None)
def default_adapter() -> PlotAdapter:
    """The process-wide plotnine adapter, created on first use."""
    from plotgrade.adapters.plotnine import PlotnineAdapter
    return PlotnineAdapter()


def resolve_adapter(adapter: PlotAdapter | None) -> PlotAdapter:
    return default_adapter() if adapter is None else adapter
