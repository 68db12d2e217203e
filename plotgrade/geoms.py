"""Geom/stat inspection for grading plots.

Answers which geoms and stats a plot's layers use, in which order, and
which parameter values a layer was constructed with.

All functions read the plot through a PlotAdapter (plotnine by default)
and never modify it. Unknown geom/stat names and invalid parameters are
grading-script mistakes and raise ConfigError. A plot that simply does
not match returns False.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Collection, Mapping, Optional, Sequence

from plotgrade.adapters import PlotAdapter, resolve_adapter
from plotgrade.aesthetics import canonical_aesthetic
from plotgrade.core.errors import ConfigError, LayerIndexError
from plotgrade.layers import ith_layer, plot_layers
from plotgrade.models import GeomStat, LayerRef, RegistryEntry, strip_prefix

logger = logging.getLogger(__name__)


def _as_list(names: str | Sequence[str]) -> list[str]:
    return [names] if isinstance(names, str) else list(names)


def layer_count(plot: Any, *, adapter: Optional[PlotAdapter] = None) -> int:
    """Number of layers in the plot."""
    return len(plot_layers(plot, resolve_adapter(adapter)))


def get_geom_layer(
    plot: Any,
    geom: Optional[str] = None,
    i: Optional[int] = None,
    *,
    adapter: Optional[PlotAdapter] = None,
) -> LayerRef:
    """Extract a single layer, by position or by the geom it uses.

    With `i`, returns layer i (1-based). Without `i`, returns the one
    layer that uses `geom`.

    Raises:
        ConfigError: neither argument given, `geom` is unknown, or `geom`
            matches zero or several layers when `i` is omitted.
        LayerIndexError: `i` is past the last layer.
    """
    adapter = resolve_adapter(adapter)
    if i is not None:
        return LayerRef(plot=plot, index=i, layer=ith_layer(plot, i, adapter))
    if geom is None:
        raise ConfigError("Grading error: supply a geom or a layer index i.")

    name = adapter.geom_registry().resolve(geom).name
    matches = [
        (index, layer)
        for index, layer in enumerate(plot_layers(plot, adapter), start=1)
        if adapter.geom_id(layer) == name
    ]
    if len(matches) != 1:
        raise ConfigError(
            f"Grading error: found {len(matches)} layers using geom '{name}'; "
            "specify the layer with i."
        )
    index, layer = matches[0]
    return LayerRef(plot=plot, index=index, layer=layer)


# --- geoms ---


def geom_of(plot: Any, i: int, *, adapter: Optional[PlotAdapter] = None) -> str:
    """Which geom is used in the ith layer, e.g. "point"."""
    adapter = resolve_adapter(adapter)
    return adapter.geom_id(ith_layer(plot, i, adapter))


def geom_stat_of(plot: Any, i: int, *, adapter: Optional[PlotAdapter] = None) -> GeomStat:
    """Which geom/stat combination is used in the ith layer."""
    adapter = resolve_adapter(adapter)
    layer = ith_layer(plot, i, adapter)
    return GeomStat(geom=adapter.geom_id(layer), stat=adapter.stat_id(layer))


def geom_is(plot: Any, geom: str, i: int = 1, *, adapter: Optional[PlotAdapter] = None) -> bool:
    """Is the ith geom what it should be?

    A plot with fewer than i layers does not use the geom there.
    """
    try:
        return geom_of(plot, i, adapter=adapter) == strip_prefix(geom, "geom")
    except LayerIndexError:
        return False


def all_geoms(plot: Any, *, adapter: Optional[PlotAdapter] = None) -> list[str]:
    """The geoms of every layer, in order."""
    adapter = resolve_adapter(adapter)
    return [adapter.geom_id(layer) for layer in plot_layers(plot, adapter)]


def all_geom_stats(plot: Any, *, adapter: Optional[PlotAdapter] = None) -> list[GeomStat]:
    """The geom/stat combination of every layer, in order."""
    adapter = resolve_adapter(adapter)
    return [
        GeomStat(geom=adapter.geom_id(layer), stat=adapter.stat_id(layer))
        for layer in plot_layers(plot, adapter)
    ]


def resolve_geom(name: str, *, adapter: Optional[PlotAdapter] = None) -> GeomStat:
    """Short geom name -> GeomStat with the geom's default stat."""
    entry = resolve_adapter(adapter).geom_registry().resolve(name)
    return GeomStat(geom=entry.name, stat=entry.default_partner)


def resolve_stat(name: str, *, adapter: Optional[PlotAdapter] = None) -> GeomStat:
    """Short stat name -> GeomStat with the stat's default geom."""
    entry = resolve_adapter(adapter).stat_registry().resolve(name)
    return GeomStat(geom=entry.default_partner, stat=entry.name)


def _matches(plot_combos: list[GeomStat], wanted: list[GeomStat], exact: bool) -> bool:
    if exact:
        if plot_combos != wanted:
            logger.debug("Expected layers %s, plot has %s", wanted, plot_combos)
            return False
        return True
    # each requested combination needs its own layer
    available = Counter(plot_combos)
    for combo, count in Counter(wanted).items():
        if available[combo] < count:
            logger.debug("Plot has %d layer(s) of %s, expected %d", available[combo], combo, count)
            return False
    return True


def uses_geoms(
    plot: Any,
    geoms: str | Sequence[str],
    stats: Optional[str | Sequence[str]] = None,
    exact: bool = True,
    *,
    adapter: Optional[PlotAdapter] = None,
) -> bool:
    """Does a plot use one or more geoms?

    Each geom is checked with its default stat unless `stats` supplies
    one stat per geom.

    Args:
        plot: A ggplot object.
        geoms: Geom short names, e.g. ["point", "smooth"].
        stats: Optional stat short names, one per geom.
        exact: If True, the plot's layers must be exactly these geom/stat
            combinations in this order. If False, each requested
            combination must be matched by a distinct layer, in any order.

    Raises:
        ConfigError: unknown geom/stat name, or len(stats) != len(geoms).
    """
    adapter = resolve_adapter(adapter)
    wanted = [resolve_geom(g, adapter=adapter) for g in _as_list(geoms)]

    if stats is not None:
        stats = _as_list(stats)
        if len(stats) != len(wanted):
            raise ConfigError(
                f"Grading error: number of stats supplied ({len(stats)}) "
                f"doesn't match number of geoms ({len(wanted)})."
            )
        wanted = [
            combo.with_stat(resolve_stat(s, adapter=adapter).stat)
            for combo, s in zip(wanted, stats)
        ]

    return _matches(all_geom_stats(plot, adapter=adapter), wanted, exact)


# --- stats ---


def stat_of(plot: Any, i: int, *, adapter: Optional[PlotAdapter] = None) -> str:
    """Which stat is used in the ith layer, e.g. "identity"."""
    adapter = resolve_adapter(adapter)
    return adapter.stat_id(ith_layer(plot, i, adapter))


def stat_is(plot: Any, stat: str, i: int = 1, *, adapter: Optional[PlotAdapter] = None) -> bool:
    try:
        return stat_of(plot, i, adapter=adapter) == strip_prefix(stat, "stat")
    except LayerIndexError:
        return False


def all_stats(plot: Any, *, adapter: Optional[PlotAdapter] = None) -> list[str]:
    adapter = resolve_adapter(adapter)
    return [adapter.stat_id(layer) for layer in plot_layers(plot, adapter)]


def uses_stats(
    plot: Any,
    stats: str | Sequence[str],
    geoms: Optional[str | Sequence[str]] = None,
    exact: bool = True,
    *,
    adapter: Optional[PlotAdapter] = None,
) -> bool:
    """Does a plot use one or more stats?

    The counterpart of uses_geoms for layers created with a stat_*
    function: each stat is checked with its default geom unless `geoms`
    supplies one geom per stat.

    Raises:
        ConfigError: unknown geom/stat name, or len(geoms) != len(stats).
    """
    adapter = resolve_adapter(adapter)
    wanted = [resolve_stat(s, adapter=adapter) for s in _as_list(stats)]

    if geoms is not None:
        geoms = _as_list(geoms)
        if len(geoms) != len(wanted):
            raise ConfigError(
                f"Grading error: number of geoms supplied ({len(geoms)}) "
                f"doesn't match number of stats ({len(wanted)})."
            )
        wanted = [
            combo.with_geom(resolve_geom(g, adapter=adapter).geom)
            for combo, g in zip(wanted, geoms)
        ]

    return _matches(all_geom_stats(plot, adapter=adapter), wanted, exact)


# --- parameters ---


def _param_key(name: str) -> str:
    # outlier.colour (ggplot2 spelling) -> outlier_color
    return canonical_aesthetic(name.replace(".", "_"))


def _identical(expected: Any, actual: Any) -> bool:
    return type(expected) is type(actual) and expected == actual


def uses_geom_param(
    plot: Any,
    geom: Optional[str],
    params: Mapping[str, Any],
    i: Optional[int] = None,
    *,
    adapter: Optional[PlotAdapter] = None,
) -> bool:
    """Does a layer use specific geom or stat parameter values?

    Setting a parameter on a geom_ function may really set a stat
    parameter (binwidth in geom_histogram), so the layer's geom and stat
    parameters are checked together. Values must match exactly, type
    included.

    Args:
        plot: A ggplot object.
        geom: Geom short name. Without `i`, the plot must have exactly one
            layer using it.
        params: Parameter name -> expected value, e.g. {"se": False}.
        i: Optional 1-based layer index. If given together with `geom`,
            that layer must use `geom`.

    Raises:
        ConfigError: a parameter name is not valid for the layer's geom or
            stat, or the layer lookup is ambiguous.
    """
    adapter = resolve_adapter(adapter)
    entry = adapter.geom_registry().resolve(geom) if geom is not None else None

    try:
        ref = get_geom_layer(plot, geom=geom, i=i, adapter=adapter)
    except LayerIndexError:
        ref = None
    if ref is None and entry is None:
        return False
    if ref is None or (entry is not None and adapter.geom_id(ref.layer) != entry.name):
        # no usable layer: still reject names the geom could never accept
        _check_params(params, _registry_params(entry, adapter))
        logger.debug("Layer %s does not use geom '%s'", i, entry.name)
        return False

    merged = dict(adapter.stat_params(ref.layer))
    merged.update(adapter.geom_params(ref.layer))
    _check_params(params, merged)

    return all(_identical(value, merged[_param_key(name)]) for name, value in params.items())


def _registry_params(entry: RegistryEntry, adapter: PlotAdapter) -> frozenset[str]:
    """Parameters a geom accepts with its default stat."""
    stats = adapter.stat_registry()
    if entry.default_partner not in stats:
        return entry.params
    return entry.params | stats.resolve(entry.default_partner).params


def _check_params(params: Mapping[str, Any], valid: Collection[str]) -> None:
    invalid = [name for name in params if _param_key(name) not in valid]
    if invalid:
        raise ConfigError(
            "Grading error: the supplied parameters "
            + ", ".join(f"'{name}'" for name in invalid)
            + " are invalid."
        )
