"""Tests stratégies de migration."""
import pytest
from pydantic import ValidationError

from hero_variants import MigrationStrategy, UnknownStrategyError, get_strategy, list_strategies, register_strategy


def test_builtin_strategies():
    names = [s.name for s in list_strategies()]
    assert names[:3] == ["conservative", "balanced", "flexible"]


@pytest.mark.parametrize("name, structural, coercion, fill", [
    ("conservative", False, False, True),
    ("balanced",     True,  False, False),
    ("flexible",     True,  True,  False),
])
def test_strategy_flags(name, structural, coercion, fill):
    s = get_strategy(name)
    assert s.allow_structural is structural
    assert s.allow_coercion is coercion
    assert s.fill_optional_defaults is fill


def test_default_strategy_is_balanced():
    assert get_strategy().name == "balanced"


def test_strategy_object_passthrough():
    s = get_strategy("flexible")
    assert get_strategy(s) is s


def test_unknown_strategy():
    with pytest.raises(UnknownStrategyError) as exc:
        get_strategy("aggressive")
    assert "balanced" in exc.value.available


def test_strategies_are_immutable():
    with pytest.raises(ValidationError):
        get_strategy("balanced").allow_coercion = True


def test_register_strategy_no_overwrite():
    with pytest.raises(ValueError):
        register_strategy(MigrationStrategy(name="balanced", description="x"))
    custom = register_strategy(MigrationStrategy(
        name="structural-only", description="Structurel sans défauts", allow_structural=True,
    ))
    assert get_strategy("structural-only") is custom
