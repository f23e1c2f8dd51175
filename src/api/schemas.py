"""API request/response schemas.

Domain payloads (snapshot, impacts, check config) are carried as raw JSON
and parsed by src.core.codec so that saved data and API requests share one
validation path.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


# === Request Schemas ===


class ImpactPreviewRequest(BaseModel):
    """Impact 미리보기 요청"""

    snapshot: dict[str, Any] = Field(
        default_factory=dict, description="CharacterStateSnapshot JSON"
    )
    impacts: list[dict[str, Any]] = Field(
        default_factory=list, description="적용 순서대로의 Impact 목록"
    )


class CheckPreviewRequest(BaseModel):
    """다중 속성 판정 미리보기 요청"""

    config: dict[str, Any] = Field(..., description="EventCheckConfig JSON")
    actor_attrs: dict[str, Any] = Field(
        default_factory=dict, description="속성 키 → 정수값"
    )
    seed: Optional[int] = Field(None, description="재현용 RNG 시드")


class EventPreviewRequest(CheckPreviewRequest):
    """판정 + 속성 변동 미리보기 요청"""

    update_rules: dict[str, Any] = Field(
        default_factory=dict, description="속성 키 → AttrUpdateRule JSON"
    )


# === Response Schemas ===


class ImpactPreviewResponse(BaseModel):
    """Impact 적용 결과"""

    snapshot: dict[str, Any]


class RollLogInfo(BaseModel):
    key: str
    kind: str
    die_sides: int
    rolled: list[int] = []


class CheckResultInfo(BaseModel):
    """판정 결과"""

    success: bool
    successes: int
    required_successes: int
    rolls: list[RollLogInfo] = []


class AttrDeltaInfo(BaseModel):
    key: str
    delta: float


class EventPreviewResponse(BaseModel):
    """판정 + 변동량 + 결과 등급"""

    check: CheckResultInfo
    deltas: list[AttrDeltaInfo] = []
    outcome_tier: str


class ErrorResponse(BaseModel):
    """에러 응답"""

    detail: Any
