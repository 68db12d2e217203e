# plotgrade/layers.py

from __future__ import annotations

from typing import Any, Sequence

from plotgrade.adapters import PlotAdapter
from plotgrade.core.errors import ConfigError, LayerIndexError, PlotTypeError


def check_plot(plot: Any, adapter: PlotAdapter) -> None:
    if not adapter.is_plot(plot):
        raise PlotTypeError(f"Expected a ggplot object, got {type(plot).__name__}")


def plot_layers(plot: Any, adapter: PlotAdapter) -> Sequence[Any]:
    """The plot's layers, after checking it really is a plot."""
    check_plot(plot, adapter)
    return adapter.layers(plot)


def check_index(i: int) -> None:
    if isinstance(i, bool) or not isinstance(i, int) or i < 1:
        raise ConfigError(f"Grading error: layer index must be a positive integer, got {i!r}.")


def ith_layer(plot: Any, i: int, adapter: PlotAdapter) -> Any:
    """Layer i (1-based) of the plot."""
    layers = plot_layers(plot, adapter)
    check_index(i)
    if i > len(layers):
        raise LayerIndexError(f"Plot has {len(layers)} layer(s), no layer {i}")
    return layers[i - 1]
