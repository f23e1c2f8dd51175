"""Narrative State Core"""
__version__ = "0.1.0"

from src.core.attributes import (
    CharacterAttributes,
    CharacterStateSnapshot,
    Impact,
    PreviewState,
    RelationshipMetrics,
    apply_impacts,
)
from src.core.checks import (
    EventCheckConfig,
    MultiAttrCheckResult,
    resolve_event_with_attribute_updates,
    resolve_multi_attr_check,
)

__all__ = [
    "CharacterAttributes",
    "CharacterStateSnapshot",
    "Impact",
    "PreviewState",
    "RelationshipMetrics",
    "apply_impacts",
    "EventCheckConfig",
    "MultiAttrCheckResult",
    "resolve_event_with_attribute_updates",
    "resolve_multi_attr_check",
]
