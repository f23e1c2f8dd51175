"""스냅샷 ↔ 액터 속성 맵 변환, 이벤트 1회 실행"""

import copy
import logging
from typing import Dict, Mapping, Optional, Sequence

from src.core.attributes.calculations import clamp_attribute, round_half_away_from_zero
from src.core.attributes.models import (
    AttributeField,
    CharacterAttributes,
    CharacterStateSnapshot,
)
from src.core.checks.models import (
    ActorAttrs,
    AttrDelta,
    AttrUpdateRule,
    EventCheckConfig,
    EventRunResult,
)
from src.core.checks.outcomes import resolve_event_with_attribute_updates
from src.core.checks.resolver import DiceRng

logger = logging.getLogger(__name__)


def character_attributes_to_actor_attrs(attrs: CharacterAttributes) -> ActorAttrs:
    """21개 속성 전부를 키 → 값 맵으로."""
    return {attr.value: attrs.get(attr) for attr in AttributeField}


def apply_actor_attrs_to_character(
    base: CharacterAttributes, attrs: Mapping[str, int]
) -> CharacterAttributes:
    """맵에 있는 속성만 덮어쓴 새 레코드. 모르는 키는 무시, 값은 0 ~ 100 클램프."""
    updated = copy.deepcopy(base)
    for attr in AttributeField:
        if attr.value in attrs:
            updated.set(attr, clamp_attribute(int(attrs[attr.value])))
    return updated


def apply_deltas_to_attrs(
    actor_attrs: Mapping[str, int], deltas: Sequence[AttrDelta]
) -> ActorAttrs:
    """변동량 적용 후 새 맵. 없는 키는 0에서 시작, 결과는 반올림 + 클램프."""
    updated: Dict[str, int] = dict(actor_attrs)
    for delta in deltas:
        current = updated.get(delta.key, 0)
        updated[delta.key] = clamp_attribute(
            round_half_away_from_zero(current + delta.delta)
        )
    return updated


def run_event_resolution(
    snapshot: CharacterStateSnapshot,
    config: EventCheckConfig,
    update_rules: Mapping[str, AttrUpdateRule],
    rng: Optional[DiceRng] = None,
) -> EventRunResult:
    """스냅샷에서 액터를 읽어 판정 → 변동량 적용 → 새 스냅샷 반환.

    액터가 스냅샷에 없으면 전부 0으로 취급. 입력 스냅샷은 수정하지 않는다.
    """
    base = snapshot.characters.get(config.actor_id)
    if base is None:
        logger.debug("Actor %s not in snapshot, using defaults", config.actor_id)
        base = CharacterAttributes()

    actor_attrs = character_attributes_to_actor_attrs(base)
    resolution = resolve_event_with_attribute_updates(
        config, actor_attrs, update_rules, rng=rng
    )
    updated_attrs = apply_deltas_to_attrs(actor_attrs, resolution.deltas)

    new_snapshot = copy.deepcopy(snapshot)
    new_snapshot.characters[config.actor_id] = apply_actor_attrs_to_character(
        base, updated_attrs
    )

    return EventRunResult(
        resolution=resolution,
        updated_attrs=updated_attrs,
        snapshot=new_snapshot,
    )
