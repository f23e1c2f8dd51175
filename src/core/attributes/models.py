"""캐릭터 속성 / 관계 도메인 모델

저장소 무관 순수 데이터 클래스.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, NamedTuple, Sequence

if TYPE_CHECKING:
    from src.core.attributes.impacts import Impact

# === 값 범위 ===
ATTRIBUTE_MIN = 0
ATTRIBUTE_MAX = 100
RELATIONSHIP_MIN = -100
RELATIONSHIP_MAX = 100


class NumericOp(str, Enum):
    """수치 연산 3종"""

    ADD = "add"  # current + value
    SET = "set"  # value
    SCALE = "scale"  # round(current * value / 100)


class AttributeField(str, Enum):
    """캐릭터 속성 필드 (성격 15 + 상태 6)"""

    HONESTY = "honesty"
    EMPATHY = "empathy"
    AFFABILITY = "affability"
    INTIMIDATION = "intimidation"
    AGGRESSION = "aggression"
    DISCIPLINE = "discipline"
    CURIOSITY = "curiosity"
    COURAGE = "courage"
    IMPULSIVITY = "impulsivity"
    IDEALISM = "idealism"
    PRAGMATISM = "pragmatism"
    LOYALTY = "loyalty"
    OPPORTUNISM = "opportunism"
    STOICISM = "stoicism"
    MORALITY = "morality"
    HEALTH = "health"
    STRESS = "stress"
    FATIGUE = "fatigue"
    PAIN = "pain"
    MORALE = "morale"
    INTOX = "intox"


class RelationshipField(str, Enum):
    """관계 수치 필드 5종"""

    AFFINITY = "affinity"
    TRUST = "trust"
    RESPECT = "respect"
    FEAR = "fear"
    ATTRACTION = "attraction"


@dataclass
class CharacterAttributes:
    """캐릭터 1명의 속성 레코드. 수치 필드는 전부 0 ~ 100."""

    # 성격
    honesty: int = 0
    empathy: int = 0
    affability: int = 0
    intimidation: int = 0
    aggression: int = 0
    discipline: int = 0
    curiosity: int = 0
    courage: int = 0
    impulsivity: int = 0
    idealism: int = 0
    pragmatism: int = 0
    loyalty: int = 0
    opportunism: int = 0
    stoicism: int = 0
    morality: int = 0

    # 상태
    health: int = 0
    stress: int = 0
    fatigue: int = 0
    pain: int = 0
    morale: int = 0
    intox: int = 0

    # 서사 플래그 (작가 정의, 임의 중첩 JSON 객체)
    traits_flags: Dict[str, Any] = field(default_factory=dict)

    def get(self, attr: AttributeField) -> int:
        return getattr(self, attr.value)

    def set(self, attr: AttributeField, value: int) -> None:
        setattr(self, attr.value, value)


@dataclass
class RelationshipMetrics:
    """방향성 관계 수치. 전부 -100 ~ +100."""

    affinity: int = 0
    trust: int = 0
    respect: int = 0
    fear: int = 0
    attraction: int = 0

    def get(self, metric: RelationshipField) -> int:
        return getattr(self, metric.value)

    def set(self, metric: RelationshipField, value: int) -> None:
        setattr(self, metric.value, value)


class RelationshipKey(NamedTuple):
    """(from_id, to_id) 복합 키. (A, B)와 (B, A)는 별개."""

    from_id: str
    to_id: str


@dataclass
class PreviewState:
    """Impact 엔진이 다루는 정규 인메모리 형태"""

    characters: Dict[str, CharacterAttributes] = field(default_factory=dict)
    relationships: Dict[RelationshipKey, RelationshipMetrics] = field(
        default_factory=dict
    )


@dataclass
class RelationshipState:
    """스냅샷용 관계 레코드"""

    from_id: str
    to_id: str
    metrics: RelationshipMetrics = field(default_factory=RelationshipMetrics)


@dataclass
class CharacterStateSnapshot:
    """직렬화 친화 형태. 관계를 pair 키 맵 대신 리스트로 보관."""

    characters: Dict[str, CharacterAttributes] = field(default_factory=dict)
    relationships: List[RelationshipState] = field(default_factory=list)

    def to_preview_state(self) -> PreviewState:
        """리스트 → pair 키 맵. 중복 pair는 뒤쪽이 이긴다."""
        relationships: Dict[RelationshipKey, RelationshipMetrics] = {}
        for rel in self.relationships:
            relationships[RelationshipKey(rel.from_id, rel.to_id)] = copy.deepcopy(
                rel.metrics
            )

        return PreviewState(
            characters=copy.deepcopy(self.characters),
            relationships=relationships,
        )

    @classmethod
    def from_preview_state(cls, state: PreviewState) -> CharacterStateSnapshot:
        """pair 키 맵 → 리스트. 맵 삽입 순서를 유지."""
        relationships = [
            RelationshipState(from_id=key.from_id, to_id=key.to_id, metrics=metrics)
            for key, metrics in state.relationships.items()
        ]
        return cls(characters=state.characters, relationships=relationships)

    def apply_impacts(self, impacts: Sequence[Impact]) -> CharacterStateSnapshot:
        """Impact 목록 적용 후 새 스냅샷 반환 (원본 불변)."""
        from src.core.attributes.impacts import apply_impacts

        base = self.to_preview_state()
        updated = apply_impacts(base.characters, base.relationships, impacts)
        return CharacterStateSnapshot.from_preview_state(updated)
