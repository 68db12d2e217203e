"""Tests for plotgrade.models."""

import pytest

from plotgrade.core.errors import ConfigError
from plotgrade.models import GeomStat, Registry, RegistryEntry, strip_prefix


@pytest.fixture
def registry():
    return Registry(
        kind="geom",
        version="test",
        entries={
            "point": RegistryEntry("point", "identity", frozenset({"na_rm"})),
            "line": RegistryEntry("line", "identity", frozenset({"na_rm"})),
        },
    )


def test_geom_stat_equality():
    assert GeomStat("point", "identity") == GeomStat("point", "identity")
    assert GeomStat("point", "identity") != GeomStat("point", "sum")
    assert len({GeomStat("point", "identity"), GeomStat("point", "identity")}) == 1


def test_geom_stat_with_stat():
    combo = GeomStat("point", "identity")
    assert combo.with_stat("sum") == GeomStat("point", "sum")
    assert combo == GeomStat("point", "identity")


def test_registry_resolve(registry):
    assert registry.resolve("point").default_partner == "identity"
    assert registry.resolve("Point").name == "point"
    assert registry.resolve("geom_line").name == "line"


def test_registry_unknown_name(registry):
    with pytest.raises(ConfigError, match="not a valid geom"):
        registry.resolve("lline")


def test_registry_non_string_name(registry):
    with pytest.raises(ConfigError):
        registry.resolve(3)


def test_registry_is_read_only(registry):
    with pytest.raises(TypeError):
        registry.entries["bar"] = RegistryEntry("bar", "count")
    assert "bar" not in registry
    assert len(registry) == 2


def test_strip_prefix():
    assert strip_prefix("geom_point", "geom") == "point"
    assert strip_prefix("Stat_Identity", "stat") == "identity"
    assert strip_prefix("point", "geom") == "point"
    assert strip_prefix("stat_bin", "geom") == "stat_bin"
