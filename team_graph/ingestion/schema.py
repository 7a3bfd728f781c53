"""
지식 그래프 스키마 정의

허용된 Node/Relation 타입과 속성 차원(dimension)별 추출 규칙을 정의합니다.
출력 JSON의 type 값은 외부 문서/시각화 생성기가 그대로 사용하므로
값을 바꿀 때는 소비 측도 함께 수정해야 합니다.
"""

from dataclasses import dataclass
from enum import Enum


class NodeType(str, Enum):
    """허용된 노드 타입"""

    PERSON = "person"
    ATTRIBUTE = "attribute"


class AttributeCategory(str, Enum):
    """속성 노드의 차원 태그"""

    SKILL = "skill"
    VALUE = "value"
    INTEREST = "interest"
    MOTIVATION = "motivation"


class RelationType(str, Enum):
    """허용된 관계 타입"""

    # Person -> Attribute (Phase 1)
    HAS_SKILL = "HAS_SKILL"
    VALUES = "VALUES"
    INTERESTED_IN = "INTERESTED_IN"
    MOTIVATED_BY = "MOTIVATED_BY"

    # Person <-> Person (Phase 1)
    SHARES = "SHARES"

    # Person <-> Person (Phase 2, AI 추론)
    COMPLEMENTS = "COMPLEMENTS"
    MENTORING_FIT = "MENTORING_FIT"
    TEAM_SYNERGY = "TEAM_SYNERGY"


class MentoringDirection(str, Enum):
    """MENTORING_FIT 엣지의 방향 태그 (A=source, B=target)"""

    A_TO_B = "A→B"
    B_TO_A = "B→A"
    MUTUAL = "mutual"

    def flipped(self) -> "MentoringDirection":
        """source/target을 뒤집었을 때의 방향"""
        if self is MentoringDirection.A_TO_B:
            return MentoringDirection.B_TO_A
        if self is MentoringDirection.B_TO_A:
            return MentoringDirection.A_TO_B
        return self


@dataclass(frozen=True)
class DimensionRule:
    """
    속성 차원별 추출 규칙

    Attributes:
        category: 속성 노드에 붙는 차원 태그
        field: 사원 레코드의 상위 블록 이름
        sub_field: 블록 안의 리스트 필드 이름
        edge_type: Person -> Attribute 엣지 타입
        color: 속성 노드 색상 (시각화용)
    """

    category: AttributeCategory
    field: str
    sub_field: str
    edge_type: RelationType
    color: str


# [Extraction Rules] 차원 처리 순서가 곧 노드/엣지 출력 순서
DIMENSION_RULES: tuple[DimensionRule, ...] = (
    DimensionRule(
        category=AttributeCategory.SKILL,
        field="work_styles_and_strengths",
        sub_field="dominant_strengths",
        edge_type=RelationType.HAS_SKILL,
        color="#60a5fa",
    ),
    DimensionRule(
        category=AttributeCategory.VALUE,
        field="values_and_motivators",
        sub_field="core_values",
        edge_type=RelationType.VALUES,
        color="#34d399",
    ),
    DimensionRule(
        category=AttributeCategory.INTEREST,
        field="current_state",
        sub_field="recent_topics_of_interest",
        edge_type=RelationType.INTERESTED_IN,
        color="#fb923c",
    ),
    DimensionRule(
        category=AttributeCategory.MOTIVATION,
        field="values_and_motivators",
        sub_field="motivation_triggers",
        edge_type=RelationType.MOTIVATED_BY,
        color="#f472b6",
    ),
)

# SHARES 가중치에 포함되는 차원 (motivation 제외)
SHARED_CATEGORIES: tuple[AttributeCategory, ...] = (
    AttributeCategory.SKILL,
    AttributeCategory.VALUE,
    AttributeCategory.INTEREST,
)

# AI 추론 엣지 타입
AI_RELATION_TYPES: frozenset[RelationType] = frozenset(
    {
        RelationType.COMPLEMENTS,
        RelationType.MENTORING_FIT,
        RelationType.TEAM_SYNERGY,
    }
)

PERSON_ID_PREFIX = "person:"
ATTRIBUTE_ID_PREFIX = "attr:"


def person_id(name: str) -> str:
    """사원 이름으로 Person 노드 ID 생성"""
    return f"{PERSON_ID_PREFIX}{name}"
