"""다중 속성 판정 도메인 모델"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from src.core.attributes.models import CharacterStateSnapshot

# 액터 속성 스냅샷: 속성 키 → 정수값
ActorAttrs = Dict[str, int]

DEFAULT_INFLUENCE_WEIGHT = 1.0


class InfluenceKind(str, Enum):
    """판정 기여 방향"""

    SUPPORT = "support"  # 주사위 풀에 기여
    RESIST = "resist"  # 요구 성공 수를 올림


@dataclass
class AttrInfluence:
    """속성 1개의 판정 기여 설정"""

    key: str  # e.g. "courage"
    kind: InfluenceKind
    die_sides: int  # 4, 6, 8, 10 ...
    count_factor: float  # 속성값 → 유효량 배수
    weight: Optional[float] = None  # None = 1.0

    def effective_weight(self) -> float:
        return DEFAULT_INFLUENCE_WEIGHT if self.weight is None else self.weight


@dataclass
class EventCheckConfig:
    """판정 설정"""

    actor_id: str  # 참조용. 순수 레이어에서는 사용하지 않음
    influences: List[AttrInfluence]
    base_required: int
    resist_to_extra_required: float  # resist 포인트 → 추가 요구 성공 수
    success_threshold: int  # 이 값 이상의 눈이 성공


@dataclass
class MultiAttrRollLog:
    """영향 1개당 1개. resist 항목은 rolled가 항상 비어 있음."""

    key: str
    kind: InfluenceKind
    die_sides: int
    rolled: List[int] = field(default_factory=list)


@dataclass
class MultiAttrCheckResult:
    success: bool
    successes: int
    required_successes: int
    rolls: List[MultiAttrRollLog] = field(default_factory=list)


# === 판정 후속 처리 ===


@dataclass
class AttrUpdateRule:
    """판정 결과에 따른 속성 변동 규칙"""

    key: str  # AttrInfluence.key와 일치
    base_scale: float  # 보통 0.1 ~ 1.0
    success_sign: Optional[float] = None  # None = +1
    failure_sign: Optional[float] = None  # None = -1


AttrUpdateRuleMap = Dict[str, AttrUpdateRule]


@dataclass
class AttrDelta:
    key: str
    delta: float  # 부호 있는 연속 변동량


class EventOutcomeTier(str, Enum):
    """UI 서술 선택용 등급. 수치 변동에는 영향 없음."""

    GREAT_SUCCESS = "great_success"
    SUCCESS = "success"
    MIXED = "mixed"
    FAILURE = "failure"
    DISASTER = "disaster"


@dataclass
class EventResolutionResult:
    check: MultiAttrCheckResult
    deltas: List[AttrDelta]
    outcome_tier: EventOutcomeTier


@dataclass
class EventRunResult:
    """스냅샷 기반 이벤트 1회 실행 결과"""

    resolution: EventResolutionResult
    updated_attrs: ActorAttrs
    snapshot: CharacterStateSnapshot
