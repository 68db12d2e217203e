"""Aesthetic mapping inspection for grading plots.

Global mappings are declared on ggplot(); local mappings on individual
layers. A layer's effective mapping is the global one overridden by its
local one. Aesthetic names are compared after canonicalization, so
"colour" and "color" are the same aesthetic.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from plotgrade.adapters import PlotAdapter, resolve_adapter
from plotgrade.aesthetics import canonical_aesthetics, canonical_mapping
from plotgrade.core.errors import LayerIndexError, PlotTypeError
from plotgrade.layers import check_plot, ith_layer
from plotgrade.models import LayerRef

logger = logging.getLogger(__name__)


def global_mapping(plot: Any, *, adapter: Optional[PlotAdapter] = None) -> dict[str, Any]:
    """The plot-level mapping, {} if none was set."""
    adapter = resolve_adapter(adapter)
    check_plot(plot, adapter)
    return canonical_mapping(adapter.global_mapping(plot))


def _layer_mapping(
    plot: Any, layer: Any, local_only: bool, adapter: PlotAdapter,
) -> Optional[dict[str, Any]]:
    local = adapter.local_mapping(layer)
    if local_only:
        return canonical_mapping(local) if local is not None else None
    merged = global_mapping(plot, adapter=adapter)
    merged.update(canonical_mapping(local))
    return merged


def layer_mapping(
    plot: Any,
    i: int,
    local_only: bool = False,
    *,
    adapter: Optional[PlotAdapter] = None,
) -> Optional[dict[str, Any]]:
    """The mapping used by the ith layer.

    Args:
        plot: A ggplot object.
        i: 1-based layer index.
        local_only: If True, only the layer's own mapping, or None when
            the layer declares none. If False, the global mapping
            overridden by the layer's own.
    """
    adapter = resolve_adapter(adapter)
    layer = ith_layer(plot, i, adapter)
    return _layer_mapping(plot, layer, local_only, adapter)


def _contains(mapping: Mapping[str, Any], expected: Mapping[str, Any]) -> bool:
    return all(key in mapping and mapping[key] == value for key, value in expected.items())


def uses_mappings(
    plot: Any,
    mappings: Mapping[str, Any],
    *,
    adapter: Optional[PlotAdapter] = None,
) -> bool:
    """Does the plot's global mapping include these aesthetic/expression pairs?

    Extra global mappings beyond `mappings` are allowed.
    """
    return _contains(global_mapping(plot, adapter=adapter), canonical_mapping(mappings))


def layer_mapping_matches(
    plot: Any,
    mappings: Mapping[str, Any],
    i: int,
    local_only: bool = False,
    exact: bool = False,
    *,
    adapter: Optional[PlotAdapter] = None,
) -> bool:
    """Does the ith layer use these mappings?

    With `exact`, the layer's mapping must also have no other aesthetics.
    """
    try:
        actual = layer_mapping(plot, i, local_only=local_only, adapter=adapter) or {}
    except LayerIndexError:
        return False
    expected = canonical_mapping(mappings)
    if exact:
        return actual == expected
    return _contains(actual, expected)


def _effective_mapping(
    plot_or_layer: Any, local_only: bool, adapter: PlotAdapter,
) -> dict[str, Any]:
    if isinstance(plot_or_layer, LayerRef):
        mapping = _layer_mapping(plot_or_layer.plot, plot_or_layer.layer, local_only, adapter)
        return mapping or {}
    if adapter.is_plot(plot_or_layer):
        return global_mapping(plot_or_layer, adapter=adapter)
    raise PlotTypeError(
        f"Expected a ggplot object or an extracted layer, got {type(plot_or_layer).__name__}"
    )


def uses_extra_mappings(
    plot_or_layer: Any,
    mappings: Mapping[str, Any],
    local_only: bool = False,
    *,
    adapter: Optional[PlotAdapter] = None,
) -> bool:
    """Is the effective mapping exactly `mappings`, with nothing extra?

    Every supplied pair must be present, and any aesthetic beyond them
    makes the result False.

    Args:
        plot_or_layer: A ggplot object (its global mapping is used) or a
            LayerRef from get_geom_layer.
        mappings: The expected aesthetic -> expression pairs.
        local_only: For a layer, use only its own mapping.
    """
    adapter = resolve_adapter(adapter)
    actual = _effective_mapping(plot_or_layer, local_only, adapter)
    expected = canonical_mapping(mappings)
    extra = set(actual) - set(expected)
    if extra:
        logger.debug("Mapping has extra aesthetics: %s", sorted(extra))
        return False
    return _contains(actual, expected)


def uses_aesthetics(
    plot_or_layer: Any,
    aesthetics: str | Iterable[str],
    exact: bool = False,
    local_only: bool = False,
    *,
    adapter: Optional[PlotAdapter] = None,
) -> bool:
    """Are these aesthetics mapped, whatever they are mapped to?

    With `exact`, the mapped aesthetics must be precisely this set.
    """
    adapter = resolve_adapter(adapter)
    used = set(_effective_mapping(plot_or_layer, local_only, adapter))
    wanted = canonical_aesthetics(aesthetics)
    if exact:
        return used == wanted
    return wanted <= used
