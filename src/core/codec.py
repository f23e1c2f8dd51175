"""JSON 직렬화 / 역직렬화

저장 데이터 호환 규칙:
- tagged union은 "type" 판별자 (character_attribute | relationship | flag)
- enum은 snake_case 문자열 (add, set, scale ...)
- 선택 필드(weight, success_sign, failure_sign)는 None이면 생략

형식이 틀린 입력은 기본값으로 대체하지 않고 PayloadParseError로 올린다.
"""

import logging
import math
from typing import Annotated, Any, Dict, List, Optional

from pydantic import AfterValidator, Field, TypeAdapter, ValidationError

from src.core.attributes.impacts import Impact
from src.core.attributes.models import (
    ATTRIBUTE_MAX,
    ATTRIBUTE_MIN,
    RELATIONSHIP_MAX,
    RELATIONSHIP_MIN,
    AttributeField,
    CharacterStateSnapshot,
    RelationshipField,
)
from src.core.checks.models import (
    AttrUpdateRule,
    EventCheckConfig,
    EventResolutionResult,
    MultiAttrCheckResult,
)

logger = logging.getLogger(__name__)


class PayloadParseError(ValueError):
    """저장/요청 데이터 형식 오류. errors에 pydantic 오류 목록."""

    def __init__(self, payload: str, errors: List[Dict[str, Any]]):
        self.payload = payload
        self.errors = errors
        super().__init__(f"Invalid {payload} payload: {len(errors)} error(s)")


# ── 범위 검증 ──


def _check_snapshot_ranges(snapshot: CharacterStateSnapshot) -> CharacterStateSnapshot:
    for character_id, attrs in snapshot.characters.items():
        for attr in AttributeField:
            value = attrs.get(attr)
            if not ATTRIBUTE_MIN <= value <= ATTRIBUTE_MAX:
                raise ValueError(
                    f"characters.{character_id}.{attr.value}={value} "
                    f"outside [{ATTRIBUTE_MIN}, {ATTRIBUTE_MAX}]"
                )
    for rel in snapshot.relationships:
        for metric in RelationshipField:
            value = rel.metrics.get(metric)
            if not RELATIONSHIP_MIN <= value <= RELATIONSHIP_MAX:
                raise ValueError(
                    f"relationships[{rel.from_id}->{rel.to_id}].{metric.value}={value} "
                    f"outside [{RELATIONSHIP_MIN}, {RELATIONSHIP_MAX}]"
                )
    return snapshot


def _require_finite(name: str, value: Optional[float]) -> None:
    if value is not None and not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {value}")


def _check_config_ranges(config: EventCheckConfig) -> EventCheckConfig:
    _require_finite("resist_to_extra_required", config.resist_to_extra_required)
    if config.base_required < 0:
        raise ValueError("base_required must be >= 0")
    if config.success_threshold < 0:
        raise ValueError("success_threshold must be >= 0")
    for influence in config.influences:
        if influence.die_sides < 1:
            raise ValueError(f"influence {influence.key}: die_sides must be >= 1")
        _require_finite(f"influence {influence.key}: count_factor", influence.count_factor)
        _require_finite(f"influence {influence.key}: weight", influence.weight)
    return config


def _check_update_rules(rules: Dict[str, AttrUpdateRule]) -> Dict[str, AttrUpdateRule]:
    for name, rule in rules.items():
        _require_finite(f"{name}.base_scale", rule.base_scale)
        _require_finite(f"{name}.success_sign", rule.success_sign)
        _require_finite(f"{name}.failure_sign", rule.failure_sign)
    return rules


_IMPACTS = TypeAdapter(List[Annotated[Impact, Field(discriminator="type")]])
_SNAPSHOT = TypeAdapter(
    Annotated[CharacterStateSnapshot, AfterValidator(_check_snapshot_ranges)]
)
_CHECK_CONFIG = TypeAdapter(
    Annotated[EventCheckConfig, AfterValidator(_check_config_ranges)]
)
_UPDATE_RULES = TypeAdapter(
    Annotated[Dict[str, AttrUpdateRule], AfterValidator(_check_update_rules)]
)
_ACTOR_ATTRS = TypeAdapter(Dict[str, int])
_CHECK_RESULT = TypeAdapter(MultiAttrCheckResult)
_RESOLUTION = TypeAdapter(EventResolutionResult)


def _validate(adapter: TypeAdapter, payload: str, data: Any) -> Any:
    try:
        return adapter.validate_python(data)
    except ValidationError as e:
        logger.warning("Rejected %s payload: %s", payload, e.errors())
        raise PayloadParseError(payload, e.errors()) from e


def _validate_json(adapter: TypeAdapter, payload: str, raw: str) -> Any:
    try:
        return adapter.validate_json(raw)
    except ValidationError as e:
        logger.warning("Rejected %s JSON: %s", payload, e.errors())
        raise PayloadParseError(payload, e.errors()) from e


# ── Impact ──


def impacts_from_data(data: Any) -> List[Impact]:
    return _validate(_IMPACTS, "impacts", data)


def impacts_from_json(raw: str) -> List[Impact]:
    return _validate_json(_IMPACTS, "impacts", raw)


def impacts_to_data(impacts: List[Impact]) -> List[Dict[str, Any]]:
    return _IMPACTS.dump_python(impacts, mode="json")


def impacts_to_json(impacts: List[Impact]) -> str:
    """들여쓰기 2칸 JSON."""
    return _IMPACTS.dump_json(impacts, indent=2).decode("utf-8")


# ── Snapshot ──


def snapshot_from_data(data: Any) -> CharacterStateSnapshot:
    return _validate(_SNAPSHOT, "snapshot", data)


def snapshot_from_json(raw: str) -> CharacterStateSnapshot:
    return _validate_json(_SNAPSHOT, "snapshot", raw)


def snapshot_to_data(snapshot: CharacterStateSnapshot) -> Dict[str, Any]:
    return _SNAPSHOT.dump_python(snapshot, mode="json")


def snapshot_to_json(snapshot: CharacterStateSnapshot) -> str:
    return _SNAPSHOT.dump_json(snapshot).decode("utf-8")


# ── Check ──


def check_config_from_data(data: Any) -> EventCheckConfig:
    return _validate(_CHECK_CONFIG, "check config", data)


def check_config_from_json(raw: str) -> EventCheckConfig:
    return _validate_json(_CHECK_CONFIG, "check config", raw)


def check_config_to_data(config: EventCheckConfig) -> Dict[str, Any]:
    return _CHECK_CONFIG.dump_python(config, mode="json", exclude_none=True)


def actor_attrs_from_data(data: Any) -> Dict[str, int]:
    return _validate(_ACTOR_ATTRS, "actor attrs", data)


def update_rules_from_data(data: Any) -> Dict[str, AttrUpdateRule]:
    return _validate(_UPDATE_RULES, "update rules", data)


def update_rules_to_data(rules: Dict[str, AttrUpdateRule]) -> Dict[str, Any]:
    return _UPDATE_RULES.dump_python(rules, mode="json", exclude_none=True)


def check_result_to_data(result: MultiAttrCheckResult) -> Dict[str, Any]:
    return _CHECK_RESULT.dump_python(result, mode="json")


def resolution_to_data(resolution: EventResolutionResult) -> Dict[str, Any]:
    return _RESOLUTION.dump_python(resolution, mode="json")
