# plotgrade/adapters/plotnine.py

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional, Sequence

import plotnine
from plotnine import ggplot as GGPlot
from plotnine import geoms as p9_geoms
from plotnine import stats as p9_stats
from plotnine.geoms.geom import geom as GeomBase
from plotnine.stats.stat import stat as StatBase

from plotgrade.core.config import RegistryConfig
from plotgrade.models import Registry, RegistryEntry, strip_prefix

logger = logging.getLogger(__name__)


def short_name(obj: Any, prefix: str) -> str:
    """Strip the plotnine class prefix: "geom_point" -> "point".

    Accepts a class, an instance, or a name string.
    """
    if isinstance(obj, str):
        name = obj
    elif isinstance(obj, type):
        name = obj.__name__
    else:
        name = type(obj).__name__
    return strip_prefix(name, prefix)


def parse_version(version: str) -> tuple[int, ...]:
    """Leading numeric components of a version string: "0.13.6.dev1" -> (0, 13, 6)."""
    parts = []
    for part in version.split("."):
        match = re.match(r"\d+", part)
        if match is None:
            break
        parts.append(int(match.group()))
    return tuple(parts)


class PlotnineAdapter:
    """Read plotnine plot objects through the PlotAdapter contract.

    Walks the object graph:
        ggplot → layers → geom/stat instances → params, mapping

    Geom and stat identity come from plotnine's class names
    (geom_point, stat_smooth). The registries are built from the classes
    exported by plotnine.geoms and plotnine.stats, once per adapter.
    """

    def __init__(self, config: Optional[RegistryConfig] = None):
        self.config = config or RegistryConfig()
        self.version = plotnine.__version__
        self._geom_registry: Optional[Registry] = None
        self._stat_registry: Optional[Registry] = None
        self._check_version()

    def _check_version(self) -> None:
        if not self.config.warn_on_unsupported:
            return
        installed = parse_version(self.version)
        if installed and installed < self.config.min_plotnine_version:
            logger.warning(
                "plotnine %s is older than the supported %s; "
                "geom/stat registries may not match",
                self.version,
                ".".join(str(n) for n in self.config.min_plotnine_version),
            )

    # --- plot access ---

    def is_plot(self, obj: Any) -> bool:
        return isinstance(obj, GGPlot)

    def layers(self, plot: Any) -> Sequence[Any]:
        return list(plot.layers)

    def geom_id(self, layer: Any) -> str:
        return short_name(layer.geom, "geom")

    def stat_id(self, layer: Any) -> str:
        return short_name(layer.stat, "stat")

    def local_mapping(self, layer: Any) -> Mapping[str, Any] | None:
        """The layer's own mapping, None if it declares none.

        Only reliable before the plot is drawn: drawing (p.draw(), p.save())
        merges the global mapping into each layer's mapping in place, after
        which it is indistinguishable from a local one.
        """
        # plotnine stores an empty aes() when a layer declares no mapping
        mapping = getattr(layer, "mapping", None)
        return dict(mapping) if mapping else None

    def global_mapping(self, plot: Any) -> Mapping[str, Any]:
        return dict(plot.mapping or {})

    def geom_params(self, layer: Any) -> Mapping[str, Any]:
        return dict(layer.geom.params)

    def stat_params(self, layer: Any) -> Mapping[str, Any]:
        return dict(layer.stat.params)

    # --- registries ---

    def geom_registry(self) -> Registry:
        if self._geom_registry is None:
            self._geom_registry = self._build_geom_registry()
        return self._geom_registry

    def stat_registry(self) -> Registry:
        if self._stat_registry is None:
            self._stat_registry = self._build_stat_registry()
        return self._stat_registry

    def _build_geom_registry(self) -> Registry:
        entries = {}
        for attr, klass in vars(p9_geoms).items():
            if not (attr.startswith("geom_") and isinstance(klass, type)
                    and issubclass(klass, GeomBase)):
                continue
            defaults = klass.DEFAULT_PARAMS
            name = short_name(klass, "geom")
            entries[name] = RegistryEntry(
                name=name,
                default_partner=short_name(defaults.get("stat", "identity"), "stat"),
                params=frozenset(defaults),
            )
        logger.info("Loaded %d geom(s) from plotnine %s", len(entries), self.version)
        return Registry(kind="geom", version=self.version, entries=entries)

    def _build_stat_registry(self) -> Registry:
        entries = {}
        for attr, klass in vars(p9_stats).items():
            if not (attr.startswith("stat_") and isinstance(klass, type)
                    and issubclass(klass, StatBase)):
                continue
            defaults = klass.DEFAULT_PARAMS
            name = short_name(klass, "stat")
            entries[name] = RegistryEntry(
                name=name,
                default_partner=short_name(defaults.get("geom", "point"), "geom"),
                params=frozenset(defaults),
            )
        logger.info("Loaded %d stat(s) from plotnine %s", len(entries), self.version)
        return Registry(kind="stat", version=self.version, entries=entries)
