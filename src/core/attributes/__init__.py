"""캐릭터 속성 / 관계 / Impact 엔진 Core 패키지: 공개 API"""

from src.core.attributes.models import (
    AttributeField,
    CharacterAttributes,
    CharacterStateSnapshot,
    NumericOp,
    PreviewState,
    RelationshipField,
    RelationshipKey,
    RelationshipMetrics,
    RelationshipState,
)
from src.core.attributes.calculations import (
    apply_numeric_op,
    clamp_attribute,
    clamp_relationship,
    round_half_away_from_zero,
)
from src.core.attributes.flags import get_flag_path, set_flag_path
from src.core.attributes.impacts import (
    CharacterAttributeImpact,
    FlagImpact,
    Impact,
    RelationshipImpact,
    apply_impacts,
    default_character_impact,
)

__all__ = [
    "AttributeField",
    "CharacterAttributes",
    "CharacterStateSnapshot",
    "NumericOp",
    "PreviewState",
    "RelationshipField",
    "RelationshipKey",
    "RelationshipMetrics",
    "RelationshipState",
    "apply_numeric_op",
    "clamp_attribute",
    "clamp_relationship",
    "round_half_away_from_zero",
    "get_flag_path",
    "set_flag_path",
    "CharacterAttributeImpact",
    "FlagImpact",
    "Impact",
    "RelationshipImpact",
    "apply_impacts",
    "default_character_impact",
]
