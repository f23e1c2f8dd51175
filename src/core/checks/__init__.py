"""다중 속성 판정 Core 패키지: 공개 API"""

from src.core.checks.models import (
    ActorAttrs,
    AttrDelta,
    AttrInfluence,
    AttrUpdateRule,
    AttrUpdateRuleMap,
    EventCheckConfig,
    EventOutcomeTier,
    EventResolutionResult,
    EventRunResult,
    InfluenceKind,
    MultiAttrCheckResult,
    MultiAttrRollLog,
)
from src.core.checks.resolver import (
    DiceRng,
    dice_count_for,
    make_rng,
    resolve_multi_attr_check,
)
from src.core.checks.outcomes import (
    classify_outcome_tier,
    compute_attribute_deltas,
    compute_outcome_factor,
    resolve_event_with_attribute_updates,
)
from src.core.checks.bridge import (
    apply_actor_attrs_to_character,
    apply_deltas_to_attrs,
    character_attributes_to_actor_attrs,
    run_event_resolution,
)

__all__ = [
    "ActorAttrs",
    "AttrDelta",
    "AttrInfluence",
    "AttrUpdateRule",
    "AttrUpdateRuleMap",
    "EventCheckConfig",
    "EventOutcomeTier",
    "EventResolutionResult",
    "EventRunResult",
    "InfluenceKind",
    "MultiAttrCheckResult",
    "MultiAttrRollLog",
    "DiceRng",
    "dice_count_for",
    "make_rng",
    "resolve_multi_attr_check",
    "classify_outcome_tier",
    "compute_attribute_deltas",
    "compute_outcome_factor",
    "resolve_event_with_attribute_updates",
    "apply_actor_attrs_to_character",
    "apply_deltas_to_attrs",
    "character_attributes_to_actor_attrs",
    "run_event_resolution",
]
