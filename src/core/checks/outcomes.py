"""판정 결과 → 속성 변동량 / 결과 등급

전부 순수 함수. 변동량 적용과 저장은 호출 측 책임.
"""

import logging
from typing import Dict, List, Mapping, Optional

from src.core.checks.models import (
    AttrDelta,
    AttrUpdateRule,
    EventCheckConfig,
    EventOutcomeTier,
    EventResolutionResult,
    InfluenceKind,
    MultiAttrCheckResult,
)
from src.core.checks.resolver import DiceRng, resolve_multi_attr_check

logger = logging.getLogger(__name__)

# outcome factor 상한 (±)
MAX_OUTCOME_IMPACT = 1.5

# 등급 경계 (margin = successes - required)
GREAT_SUCCESS_MARGIN = 3
MIXED_MARGIN = -1
DISASTER_MARGIN = -3


def compute_outcome_factor(successes: int, required: int) -> float:
    """사건이 액터에게 얼마나 유리/불리했는지 연속값으로 (-1.5 ~ +1.5)."""
    margin = float(successes - required)
    norm = max(float(required), 1.0)
    if successes >= required:
        factor = (margin + 1.0) / (norm + 1.0)
    else:
        factor = -((abs(margin) + 1.0) / (norm + 1.0))
    return max(-MAX_OUTCOME_IMPACT, min(MAX_OUTCOME_IMPACT, factor))


def compute_attribute_deltas(
    config: EventCheckConfig,
    actor_attrs: Mapping[str, int],
    check_result: MultiAttrCheckResult,
    update_rules: Mapping[str, AttrUpdateRule],
) -> List[AttrDelta]:
    """support 속성별 연속 변동량 계산.

    delta = sign * base_scale * |outcome_factor| * 기여 비율
    기여 비율 = 해당 support 유효량 / support 유효량 합 (합이 0이면 0)
    규칙이 없는 속성은 건너뜀. resist 속성은 변동 없음.
    """
    outcome_factor = compute_outcome_factor(
        check_result.successes, check_result.required_successes
    )

    supports = [
        inf
        for inf in config.influences
        if InfluenceKind(inf.kind) == InfluenceKind.SUPPORT
    ]

    support_effective: Dict[str, float] = {}
    support_total = 0.0
    for influence in supports:
        value = float(actor_attrs.get(influence.key, 0))
        effective = value * influence.effective_weight() * influence.count_factor
        support_total += effective
        # 같은 키가 여러 번 나오면 첫 항목 기준
        support_effective.setdefault(influence.key, effective)

    deltas: List[AttrDelta] = []
    for influence in supports:
        rule = update_rules.get(influence.key)
        if rule is None:
            continue

        contrib = support_effective.get(influence.key, 0.0)
        contrib_ratio = contrib / support_total if support_total > 0.0 else 0.0

        if check_result.success:
            sign = 1.0 if rule.success_sign is None else rule.success_sign
        else:
            sign = -1.0 if rule.failure_sign is None else rule.failure_sign

        magnitude = rule.base_scale * abs(outcome_factor) * contrib_ratio
        deltas.append(AttrDelta(key=influence.key, delta=sign * magnitude))

    return deltas


def classify_outcome_tier(result: MultiAttrCheckResult) -> EventOutcomeTier:
    """결과 등급 분류. UI 서술 선택 전용."""
    margin = result.successes - result.required_successes

    if result.successes >= result.required_successes:
        if margin >= GREAT_SUCCESS_MARGIN:
            return EventOutcomeTier.GREAT_SUCCESS
        return EventOutcomeTier.SUCCESS
    if margin >= MIXED_MARGIN:
        return EventOutcomeTier.MIXED
    if margin <= DISASTER_MARGIN:
        return EventOutcomeTier.DISASTER
    return EventOutcomeTier.FAILURE


def resolve_event_with_attribute_updates(
    config: EventCheckConfig,
    actor_attrs: Mapping[str, int],
    update_rules: Mapping[str, AttrUpdateRule],
    rng: Optional[DiceRng] = None,
) -> EventResolutionResult:
    """판정 + 변동량 + 등급을 한 번에."""
    check_result = resolve_multi_attr_check(config, actor_attrs, rng=rng)
    deltas = compute_attribute_deltas(config, actor_attrs, check_result, update_rules)
    outcome_tier = classify_outcome_tier(check_result)

    logger.info(
        "Event resolved: actor=%s tier=%s deltas=%d",
        config.actor_id,
        outcome_tier.value,
        len(deltas),
    )

    return EventResolutionResult(
        check=check_result,
        deltas=deltas,
        outcome_tier=outcome_tier,
    )
