"""Tests for plotgrade.core.errors — error hierarchy and isinstance checks."""

import pytest

from plotgrade.core.errors import ConfigError, LayerIndexError, PlotgradeError, PlotTypeError


def test_plotgrade_error_is_base():
    assert issubclass(PlotgradeError, Exception)


def test_errors_inherit_from_root():
    for cls in [ConfigError, PlotTypeError, LayerIndexError]:
        assert issubclass(cls, PlotgradeError)


def test_builtin_categories():
    """Callers catching the builtin exception types still catch ours."""
    assert issubclass(PlotTypeError, TypeError)
    assert issubclass(LayerIndexError, IndexError)
    assert not issubclass(ConfigError, TypeError)


def test_catch_broad_category():
    with pytest.raises(PlotgradeError):
        raise ConfigError("test")


def test_error_message():
    err = ConfigError("Grading error: 'lline' is not a valid geom")
    assert str(err) == "Grading error: 'lline' is not a valid geom"
