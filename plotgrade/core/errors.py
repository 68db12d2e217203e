"""Exception hierarchy for plotgrade.

PlotgradeError is the root. All exceptions inherit from it so graders
can catch broad categories or specific types.

Only authoring mistakes and unusable inputs are errors. A student's plot
that simply does not match is reported as False, never raised.
"""


class PlotgradeError(Exception):
    """Root exception for the entire project."""


class ConfigError(PlotgradeError):
    """Grading-script mistakes: unknown geom/stat names, invalid parameters,
    mismatched argument lengths, ambiguous layer lookups."""


class PlotTypeError(PlotgradeError, TypeError):
    """The object handed in is not a plot (or extracted layer)."""


class LayerIndexError(PlotgradeError, IndexError):
    """Explicit layer index is past the last layer of the plot."""
