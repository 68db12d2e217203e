"""Registry configuration.

All behavior-controlling parameters live here, not as magic numbers in code.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RegistryConfig:
    """Configuration for loading the geom/stat registries.

    The registries mirror the vocabulary of the installed plotnine, so
    an older release may be missing geoms or parameters a grader expects.
    """

    min_plotnine_version: tuple[int, int] = (0, 12)
    warn_on_unsupported: bool = True
