"""다중 속성 판정: 주사위 풀 굴림

support 영향은 주사위 풀을, resist 영향은 추가 요구 성공 수를 만든다.
입력(설정, 속성 맵)을 수정하지 않는 순수 함수.
난수원은 주입 가능 (테스트에서 시드/스크립트 RNG 사용).
"""

import random
from dataclasses import dataclass
from typing import List, Mapping, Optional, Protocol

from src.config import settings
from src.core.attributes.calculations import round_half_away_from_zero
from src.core.logging import get_logger
from src.core.checks.models import (
    EventCheckConfig,
    InfluenceKind,
    MultiAttrCheckResult,
    MultiAttrRollLog,
)

logger = get_logger(__name__)


class DiceRng(Protocol):
    """randint(a, b)만 있으면 된다 (random.Random 호환)."""

    def randint(self, a: int, b: int) -> int: ...


@dataclass
class _SupportDice:
    log_index: int
    die_sides: int
    count: int


def make_rng(seed: Optional[int] = None) -> random.Random:
    """판정용 RNG 생성.

    seed가 None이면 settings.CHECK_RNG_SEED 사용. 그것도 None이면 비결정적.
    """
    if seed is None:
        seed = settings.CHECK_RNG_SEED
    return random.Random(seed)


def dice_count_for(value: int, weight: float, count_factor: float) -> int:
    """속성값 → 주사위 개수. 반올림 후 0 미만은 0."""
    effective = float(value) * weight
    return max(0, round_half_away_from_zero(effective * count_factor))


def resolve_multi_attr_check(
    config: EventCheckConfig,
    actor_attrs: Mapping[str, int],
    rng: Optional[DiceRng] = None,
) -> MultiAttrCheckResult:
    """다중 속성 판정.

    1. 영향별 유효량 = 속성값(없으면 0) * weight
       support → 주사위 round(유효량 * count_factor)개 (최소 0)
       resist → resist_points += 유효량 * count_factor (정수화하지 않음)
    2. 추가 요구 = round(resist_points * resist_to_extra_required), 최소 0
    3. 요구 성공 수 = base_required + 추가 요구
    4. support 주사위를 [1, die_sides]로 굴림. 눈 >= success_threshold 이면 성공
    5. 성공 수 >= 요구 성공 수 → success

    rolls는 영향 1개당 1개, 입력 순서 유지.
    """
    if rng is None:
        rng = make_rng()

    support_dice: List[_SupportDice] = []
    resist_points = 0.0
    roll_logs: List[MultiAttrRollLog] = []

    for influence in config.influences:
        kind = InfluenceKind(influence.kind)
        value = actor_attrs.get(influence.key, 0)
        effective = float(value) * influence.effective_weight()

        log_index = len(roll_logs)
        roll_logs.append(
            MultiAttrRollLog(
                key=influence.key,
                kind=kind,
                die_sides=influence.die_sides,
                rolled=[],
            )
        )

        if kind == InfluenceKind.SUPPORT:
            count = dice_count_for(
                value, influence.effective_weight(), influence.count_factor
            )
            if influence.die_sides < 1 and count > 0:
                logger.warning(
                    "Influence %s has die_sides=%d, skipping %d dice",
                    influence.key,
                    influence.die_sides,
                    count,
                )
                count = 0
            support_dice.append(
                _SupportDice(
                    log_index=log_index,
                    die_sides=influence.die_sides,
                    count=count,
                )
            )
        else:
            resist_points += effective * influence.count_factor

    extra_required = max(
        0, round_half_away_from_zero(resist_points * config.resist_to_extra_required)
    )
    required_successes = config.base_required + extra_required

    total_successes = 0
    for dice in support_dice:
        log = roll_logs[dice.log_index]
        for _ in range(dice.count):
            roll = rng.randint(1, dice.die_sides)
            log.rolled.append(roll)
            if roll >= config.success_threshold:
                total_successes += 1

    success = total_successes >= required_successes
    logger.debug(
        "Check actor=%s: successes=%d required=%d (base=%d, resist=%.2f) -> %s",
        config.actor_id,
        total_successes,
        required_successes,
        config.base_required,
        resist_points,
        success,
    )

    return MultiAttrCheckResult(
        success=success,
        successes=total_successes,
        required_successes=required_successes,
        rolls=roll_logs,
    )
