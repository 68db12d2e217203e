"""plotgrade data models.

Contains all dataclasses that cross module boundaries within plotgrade.
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from plotgrade.core.errors import ConfigError


def strip_prefix(name: str, kind: str) -> str:
    """Lower-case a geom/stat name and drop its function prefix: "geom_point" -> "point"."""
    key = name.lower()
    if key.startswith(f"{kind}_"):
        return key[len(kind) + 1:]
    return key


@dataclass(frozen=True)
class GeomStat:
    """The geom/stat combination a layer draws with.

    Immutable and hashable, so sequences of them can be compared
    directly or counted.
    """

    geom: str
    stat: str

    def with_stat(self, stat: str) -> GeomStat:
        return GeomStat(geom=self.geom, stat=stat)

    def with_geom(self, geom: str) -> GeomStat:
        return GeomStat(geom=geom, stat=self.stat)


@dataclass(frozen=True)
class LayerRef:
    """A single layer extracted from a plot.

    Keeps the plot so the global mapping can still be merged in when a
    mapping query is not local-only.
    """

    plot: Any = field(repr=False)
    index: int                      # 1-based position in plot.layers
    layer: Any = field(repr=False)


@dataclass(frozen=True)
class RegistryEntry:
    """One geom or stat known to the plotting library."""

    name: str                       # short name, e.g. "point"
    default_partner: str            # default stat of a geom, default geom of a stat
    params: frozenset[str] = frozenset()


@dataclass(frozen=True)
class Registry:
    """Immutable short name -> RegistryEntry table.

    Built once per adapter from the plotting library's own vocabulary.
    `version` records which library release it was built from.
    """

    kind: str                       # "geom" or "stat"
    version: str
    entries: Mapping[str, RegistryEntry]

    def __post_init__(self):
        if not isinstance(self.entries, MappingProxyType):
            object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def resolve(self, name: str) -> RegistryEntry:
        """Look up a short name, failing loudly for unknown names.

        Raises:
            ConfigError: if `name` is not a known geom/stat.
        """
        if not isinstance(name, str):
            raise ConfigError(
                f"Grading error: {self.kind} names must be strings, got {name!r}."
            )
        key = strip_prefix(name, self.kind)
        try:
            return self.entries[key]
        except KeyError:
            close = difflib.get_close_matches(key, list(self.entries), n=3)
            hint = f" Did you mean {', '.join(repr(c) for c in close)}?" if close else ""
            raise ConfigError(
                f"Grading error: '{name}' is not a valid {self.kind} "
                f"in plotnine {self.version}.{hint}"
            ) from None
