"""Preview API endpoints.

Stateless: every request carries the state it operates on and the response
carries the derived state. Nothing is stored.
"""

from fastapi import APIRouter, HTTPException

from src.api.schemas import (
    CheckPreviewRequest,
    CheckResultInfo,
    ErrorResponse,
    EventPreviewRequest,
    EventPreviewResponse,
    ImpactPreviewRequest,
    ImpactPreviewResponse,
)
from src.core.checks import (
    make_rng,
    resolve_event_with_attribute_updates,
    resolve_multi_attr_check,
)
from src.core.codec import (
    PayloadParseError,
    actor_attrs_from_data,
    check_config_from_data,
    check_result_to_data,
    impacts_from_data,
    resolution_to_data,
    snapshot_from_data,
    snapshot_to_data,
    update_rules_from_data,
)
from src.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/preview", tags=["preview"])

_PARSE_ERROR_RESPONSES = {422: {"model": ErrorResponse}}


def _unprocessable(error: PayloadParseError) -> HTTPException:
    """PayloadParseError → 422"""
    return HTTPException(
        status_code=422,
        detail={
            "payload": error.payload,
            "errors": [
                {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")}
                for e in error.errors
            ],
        },
    )


@router.post(
    "/impacts",
    response_model=ImpactPreviewResponse,
    responses=_PARSE_ERROR_RESPONSES,
)
def preview_impacts(request: ImpactPreviewRequest) -> ImpactPreviewResponse:
    """
    Impact 미리보기

    스냅샷에 Impact 목록을 순서대로 적용한 새 스냅샷을 반환합니다.
    """
    try:
        snapshot = snapshot_from_data(request.snapshot)
        impacts = impacts_from_data(request.impacts)
    except PayloadParseError as e:
        raise _unprocessable(e)

    updated = snapshot.apply_impacts(impacts)
    logger.info(
        "Impact preview: %d impacts, %d characters, %d relationships",
        len(impacts),
        len(updated.characters),
        len(updated.relationships),
    )
    return ImpactPreviewResponse(snapshot=snapshot_to_data(updated))


@router.post(
    "/check",
    response_model=CheckResultInfo,
    responses=_PARSE_ERROR_RESPONSES,
)
def preview_check(request: CheckPreviewRequest) -> CheckResultInfo:
    """
    다중 속성 판정 미리보기

    seed를 주면 같은 입력에 항상 같은 결과를 반환합니다.
    """
    try:
        config = check_config_from_data(request.config)
        actor_attrs = actor_attrs_from_data(request.actor_attrs)
    except PayloadParseError as e:
        raise _unprocessable(e)

    result = resolve_multi_attr_check(config, actor_attrs, rng=make_rng(request.seed))
    return CheckResultInfo(**check_result_to_data(result))


@router.post(
    "/event",
    response_model=EventPreviewResponse,
    responses=_PARSE_ERROR_RESPONSES,
)
def preview_event(request: EventPreviewRequest) -> EventPreviewResponse:
    """
    이벤트 미리보기

    판정 결과, 속성별 변동량, UI 결과 등급을 반환합니다. 변동량은 적용하지 않습니다.
    """
    try:
        config = check_config_from_data(request.config)
        actor_attrs = actor_attrs_from_data(request.actor_attrs)
        update_rules = update_rules_from_data(request.update_rules)
    except PayloadParseError as e:
        raise _unprocessable(e)

    resolution = resolve_event_with_attribute_updates(
        config, actor_attrs, update_rules, rng=make_rng(request.seed)
    )
    return EventPreviewResponse(**resolution_to_data(resolution))
