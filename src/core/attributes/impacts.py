"""Impact 엔진: 속성/관계/플래그 변경 지시 적용

Impact 목록을 순서대로 적용하여 새 PreviewState를 만든다.
입력 맵은 절대 수정하지 않는다 (copy-on-write).
실패하지 않는다: 범위 밖 값은 클램프, 없는 대상은 기본값으로 생성.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence, Union

from src.core.attributes.calculations import (
    apply_numeric_op,
    clamp_attribute,
    clamp_relationship,
)
from src.core.attributes.flags import set_flag_path
from src.core.attributes.models import (
    AttributeField,
    CharacterAttributes,
    NumericOp,
    PreviewState,
    RelationshipField,
    RelationshipKey,
    RelationshipMetrics,
)

logger = logging.getLogger(__name__)


@dataclass
class CharacterAttributeImpact:
    """캐릭터 속성 1개 변경"""

    character_id: str
    field: AttributeField
    op: NumericOp
    value: int
    type: Literal["character_attribute"] = "character_attribute"


@dataclass
class RelationshipImpact:
    """방향성 관계 수치 1개 변경. 역방향은 건드리지 않음."""

    from_id: str
    to_id: str
    field: RelationshipField
    op: NumericOp
    value: int
    type: Literal["relationship"] = "relationship"


@dataclass
class FlagImpact:
    """traits_flags 안의 경로에 값 쓰기 (e.g. ["quest", "act1", "done"])"""

    character_id: str
    path: List[str]
    value: Any
    type: Literal["flag"] = "flag"


Impact = Union[CharacterAttributeImpact, RelationshipImpact, FlagImpact]


def default_character_impact(character_id: str) -> CharacterAttributeImpact:
    """에디터 신규 행 기본값: morality +0."""
    return CharacterAttributeImpact(
        character_id=character_id,
        field=AttributeField.MORALITY,
        op=NumericOp.ADD,
        value=0,
    )


def _character_entry(
    characters: Dict[str, CharacterAttributes], character_id: str
) -> CharacterAttributes:
    attrs = characters.get(character_id)
    if attrs is None:
        logger.debug("Character %s not in state, creating defaults", character_id)
        attrs = CharacterAttributes()
        characters[character_id] = attrs
    return attrs


def _relationship_entry(
    relationships: Dict[RelationshipKey, RelationshipMetrics], key: RelationshipKey
) -> RelationshipMetrics:
    metrics = relationships.get(key)
    if metrics is None:
        logger.debug("Relationship %s -> %s not in state, creating defaults", *key)
        metrics = RelationshipMetrics()
        relationships[key] = metrics
    return metrics


def apply_impacts(
    attributes: Optional[Mapping[str, CharacterAttributes]],
    relationships: Optional[Mapping[RelationshipKey, RelationshipMetrics]],
    impacts: Sequence[Impact],
) -> PreviewState:
    """Impact를 목록 순서대로 적용 (뒤 Impact는 앞 Impact의 결과를 본다).

    Args:
        attributes: 현재 캐릭터 속성 맵 (None = 빈 맵)
        relationships: 현재 (from_id, to_id) → 관계 수치 맵 (None = 빈 맵)
        impacts: 적용할 Impact 목록

    Returns:
        원본 항목 + 변경분을 담은 새 PreviewState.
    """
    characters: Dict[str, CharacterAttributes] = copy.deepcopy(dict(attributes or {}))
    rels: Dict[RelationshipKey, RelationshipMetrics] = {
        RelationshipKey(*key): copy.deepcopy(metrics)
        for key, metrics in (relationships or {}).items()
    }

    for impact in impacts:
        if isinstance(impact, CharacterAttributeImpact):
            attrs = _character_entry(characters, impact.character_id)
            field = AttributeField(impact.field)
            new_value = apply_numeric_op(
                attrs.get(field), NumericOp(impact.op), impact.value, clamp_attribute
            )
            logger.debug(
                "Impact attr %s.%s %s %d: %d -> %d",
                impact.character_id,
                field.value,
                NumericOp(impact.op).value,
                impact.value,
                attrs.get(field),
                new_value,
            )
            attrs.set(field, new_value)
        elif isinstance(impact, RelationshipImpact):
            key = RelationshipKey(impact.from_id, impact.to_id)
            metrics = _relationship_entry(rels, key)
            metric = RelationshipField(impact.field)
            new_value = apply_numeric_op(
                metrics.get(metric),
                NumericOp(impact.op),
                impact.value,
                clamp_relationship,
            )
            logger.debug(
                "Impact rel %s->%s.%s %s %d: %d -> %d",
                impact.from_id,
                impact.to_id,
                metric.value,
                NumericOp(impact.op).value,
                impact.value,
                metrics.get(metric),
                new_value,
            )
            metrics.set(metric, new_value)
        elif isinstance(impact, FlagImpact):
            attrs = _character_entry(characters, impact.character_id)
            if not isinstance(attrs.traits_flags, dict):
                attrs.traits_flags = {}
            set_flag_path(attrs.traits_flags, impact.path, copy.deepcopy(impact.value))
            logger.debug(
                "Impact flag %s.%s = %r",
                impact.character_id,
                ".".join(impact.path),
                impact.value,
            )
        else:
            raise TypeError(f"Unsupported impact type: {type(impact).__name__}")

    return PreviewState(characters=characters, relationships=rels)
