"""plotgrade: inspect plotnine plots for automated grading."""

from plotgrade.core.errors import ConfigError, LayerIndexError, PlotgradeError, PlotTypeError
from plotgrade.geoms import (
    all_geom_stats,
    all_geoms,
    all_stats,
    geom_is,
    geom_of,
    geom_stat_of,
    get_geom_layer,
    layer_count,
    resolve_geom,
    resolve_stat,
    stat_is,
    stat_of,
    uses_geom_param,
    uses_geoms,
    uses_stats,
)
from plotgrade.mappings import (
    global_mapping,
    layer_mapping,
    layer_mapping_matches,
    uses_aesthetics,
    uses_extra_mappings,
    uses_mappings,
)
from plotgrade.models import GeomStat, LayerRef

__version__ = "0.1.0"
