"""다중 속성 판정 테스트: 주사위 풀, resist 난이도, 결정성"""

import random

import pytest

from src.config import settings
from src.core.checks.models import (
    AttrInfluence,
    EventCheckConfig,
    InfluenceKind,
    MultiAttrCheckResult,
)
from src.core.checks.resolver import (
    dice_count_for,
    make_rng,
    resolve_multi_attr_check,
)

ACTOR_ATTRS = {"courage": 7, "empathy": 4, "fear": 3}


def _support(key: str, die_sides: int, count_factor: float = 1.0, weight=None):
    return AttrInfluence(
        key=key,
        kind=InfluenceKind.SUPPORT,
        die_sides=die_sides,
        count_factor=count_factor,
        weight=weight,
    )


def _resist(key: str, die_sides: int = 6, count_factor: float = 1.0, weight=None):
    return AttrInfluence(
        key=key,
        kind=InfluenceKind.RESIST,
        die_sides=die_sides,
        count_factor=count_factor,
        weight=weight,
    )


def _make_config(**kwargs) -> EventCheckConfig:
    defaults = {
        "actor_id": "spain",
        "influences": [
            _support("courage", 6),
            _support("empathy", 8, count_factor=0.5, weight=1.2),
            _resist("fear", 6, count_factor=0.5),
        ],
        "base_required": 2,
        "resist_to_extra_required": 0.5,
        "success_threshold": 5,
    }
    defaults.update(kwargs)
    return EventCheckConfig(**defaults)


# ── 주사위 개수 ──


class TestDiceCount:
    def test_dice_count_rounds(self):
        assert dice_count_for(7, 1.0, 1.0) == 7
        assert dice_count_for(4, 1.2, 0.5) == 2  # 2.4
        assert dice_count_for(5, 1.0, 0.5) == 3  # 2.5 → 3

    def test_negative_floors_at_zero(self):
        assert dice_count_for(10, -1.0, 1.0) == 0
        assert dice_count_for(-3, 1.0, 1.0) == 0


# ── 시나리오 ──


class TestScenario:
    def test_courage_empathy_fear(self, scripted_rng):
        """courage 7d6 + empathy 2d8, fear 1.5 resist → 요구 3."""
        rng = scripted_rng([5, 1, 6, 2, 3, 4, 5, 8, 4])
        result = resolve_multi_attr_check(_make_config(), ACTOR_ATTRS, rng=rng)

        assert result.required_successes == 3
        assert [log.key for log in result.rolls] == ["courage", "empathy", "fear"]
        assert result.rolls[0].rolled == [5, 1, 6, 2, 3, 4, 5]
        assert result.rolls[1].rolled == [8, 4]
        assert result.rolls[2].rolled == []
        assert result.rolls[2].kind == InfluenceKind.RESIST
        assert result.rolls[2].die_sides == 6
        assert result.successes == 4
        assert result.success is True
        assert rng.calls == [(1, 6)] * 7 + [(1, 8)] * 2

    def test_scenario_failure(self, scripted_rng):
        rng = scripted_rng([1, 1, 1, 1, 1, 1, 5, 2, 3])
        result = resolve_multi_attr_check(_make_config(), ACTOR_ATTRS, rng=rng)
        assert result.successes == 1
        assert result.success is False

    def test_seeded_scenario_consistent(self):
        result = resolve_multi_attr_check(
            _make_config(), ACTOR_ATTRS, rng=random.Random(7)
        )
        all_rolls = result.rolls[0].rolled + result.rolls[1].rolled
        assert len(all_rolls) == 9
        assert all(1 <= r <= 6 for r in result.rolls[0].rolled)
        assert all(1 <= r <= 8 for r in result.rolls[1].rolled)
        assert result.successes == sum(1 for r in all_rolls if r >= 5)
        assert result.success == (result.successes >= 3)


# ── 결정성 ──


class TestDeterminism:
    def test_same_seed_same_result(self):
        first = resolve_multi_attr_check(
            _make_config(), ACTOR_ATTRS, rng=random.Random(99)
        )
        second = resolve_multi_attr_check(
            _make_config(), ACTOR_ATTRS, rng=random.Random(99)
        )
        assert first == second

    def test_make_rng_seeded(self):
        assert make_rng(5).random() == make_rng(5).random()

    def test_make_rng_uses_configured_seed(self, monkeypatch):
        monkeypatch.setattr(settings, "CHECK_RNG_SEED", 11)
        assert make_rng().random() == random.Random(11).random()

    def test_inputs_not_mutated(self, scripted_rng):
        config = _make_config()
        attrs = dict(ACTOR_ATTRS)
        resolve_multi_attr_check(config, attrs, rng=scripted_rng([6] * 9))
        assert attrs == ACTOR_ATTRS
        assert config == _make_config()


# ── 경계 ──


class TestBoundaries:
    def test_no_influences_zero_base(self):
        config = _make_config(influences=[], base_required=0)
        result = resolve_multi_attr_check(config, {})
        assert result == MultiAttrCheckResult(
            success=True, successes=0, required_successes=0, rolls=[]
        )

    def test_no_influences_positive_base_fails(self):
        config = _make_config(influences=[], base_required=1)
        result = resolve_multi_attr_check(config, {})
        assert result.success is False
        assert result.required_successes == 1

    def test_missing_attribute_defaults_to_zero(self, scripted_rng):
        config = _make_config(influences=[_support("stealth", 6)], base_required=0)
        rng = scripted_rng([])
        result = resolve_multi_attr_check(config, {}, rng=rng)
        assert result.rolls[0].rolled == []
        assert result.success is True
        assert rng.calls == []

    def test_zero_dice_still_logged(self, scripted_rng):
        config = _make_config(
            influences=[_support("courage", 6, count_factor=0.0)], base_required=0
        )
        result = resolve_multi_attr_check(config, ACTOR_ATTRS, rng=scripted_rng([]))
        assert len(result.rolls) == 1
        assert result.rolls[0].rolled == []

    def test_resist_never_rolls(self, scripted_rng):
        config = _make_config(
            influences=[_resist("fear", 6, count_factor=2.0)],
            base_required=0,
            resist_to_extra_required=1.0,
        )
        rng = scripted_rng([])
        result = resolve_multi_attr_check(config, ACTOR_ATTRS, rng=rng)
        assert rng.calls == []
        assert result.required_successes == 6
        assert result.success is False

    def test_resist_is_continuous(self):
        """resist는 영향마다 반올림하지 않고 합산 후 한 번만 반올림."""
        config = _make_config(
            influences=[
                _resist("a", count_factor=0.3),
                _resist("b", count_factor=0.3),
            ],
            base_required=0,
            resist_to_extra_required=1.0,
        )
        # 1 * 0.3 + 1 * 0.3 = 0.6 → 1 (영향별 반올림이면 0)
        result = resolve_multi_attr_check(config, {"a": 1, "b": 1})
        assert result.required_successes == 1

    def test_negative_resist_floors_at_zero(self):
        config = _make_config(
            influences=[_resist("fear", count_factor=1.0, weight=-2.0)],
            base_required=2,
            resist_to_extra_required=1.0,
        )
        result = resolve_multi_attr_check(config, ACTOR_ATTRS)
        assert result.required_successes == 2

    def test_zero_sided_die_rolls_nothing(self, scripted_rng):
        config = _make_config(influences=[_support("courage", 0)], base_required=0)
        result = resolve_multi_attr_check(config, ACTOR_ATTRS, rng=scripted_rng([]))
        assert result.rolls[0].rolled == []
        assert result.successes == 0

    @pytest.mark.parametrize("threshold, expected", [(1, 3), (4, 2), (7, 0)])
    def test_success_threshold(self, scripted_rng, threshold, expected):
        config = _make_config(
            influences=[_support("courage", 6)],
            base_required=0,
            success_threshold=threshold,
        )
        result = resolve_multi_attr_check(
            config, {"courage": 3}, rng=scripted_rng([4, 6, 2])
        )
        assert result.successes == expected
