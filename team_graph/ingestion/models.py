"""
지식 그래프 데이터 모델 정의

입력 사원 레코드와 출력 그래프(노드/엣지/메타데이터)의 Pydantic 모델을 정의합니다.
사원 레코드의 중첩 블록은 모두 선택적이며, 형식이 잘못된 값은
모델 경계에서 "없음/빈 값"으로 정리되어 이후 단계에서 예외가 발생하지 않습니다.
"""

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from team_graph.ingestion.schema import (
    AttributeCategory,
    DimensionRule,
    MentoringDirection,
    RelationType,
)


def _coerce_label_list(value: Any) -> list[str]:
    """리스트가 아니면 빈 리스트, 문자열이 아닌 항목/빈 문자열은 제외"""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str) and item.strip()]


def _coerce_block(value: Any) -> Any:
    """중첩 블록이 dict가 아니면 없음(None)으로 처리"""
    if value is None or isinstance(value, BaseModel):
        return value
    return value if isinstance(value, dict) else None


# =============================================================================
# 입력: 사원 레코드
# =============================================================================


class TraitScore(BaseModel):
    """성격 특성 점수 (1 ~ 10)"""

    model_config = ConfigDict(extra="ignore")

    score: int | float | None = None

    @field_validator("score", mode="before")
    @classmethod
    def coerce_score(cls, v: Any) -> int | float | None:
        """숫자로 해석할 수 없는 점수는 None"""
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, int | float):
            return v
        try:
            return float(v)
        except (TypeError, ValueError):
            return None


class PersonalityTraits(BaseModel):
    """Big Five 성격 특성"""

    model_config = ConfigDict(extra="ignore")

    openness: TraitScore | None = None
    conscientiousness: TraitScore | None = None
    extraversion: TraitScore | None = None
    agreeableness: TraitScore | None = None
    neuroticism: TraitScore | None = None

    @field_validator(
        "openness",
        "conscientiousness",
        "extraversion",
        "agreeableness",
        "neuroticism",
        mode="before",
    )
    @classmethod
    def coerce_trait(cls, v: Any) -> Any:
        return _coerce_block(v)


class WorkStylesAndStrengths(BaseModel):
    model_config = ConfigDict(extra="ignore")

    dominant_strengths: list[str] = Field(default_factory=list)

    @field_validator("dominant_strengths", mode="before")
    @classmethod
    def coerce_list(cls, v: Any) -> list[str]:
        return _coerce_label_list(v)


class ValuesAndMotivators(BaseModel):
    model_config = ConfigDict(extra="ignore")

    core_values: list[str] = Field(default_factory=list)
    motivation_triggers: list[str] = Field(default_factory=list)

    @field_validator("core_values", "motivation_triggers", mode="before")
    @classmethod
    def coerce_list(cls, v: Any) -> list[str]:
        return _coerce_label_list(v)


class CurrentState(BaseModel):
    model_config = ConfigDict(extra="ignore")

    recent_topics_of_interest: list[str] = Field(default_factory=list)

    @field_validator("recent_topics_of_interest", mode="before")
    @classmethod
    def coerce_list(cls, v: Any) -> list[str]:
        return _coerce_label_list(v)


# (표시용 키, 필드명) - 출력 personality 블록과 프롬프트에서 공통 사용
PERSONALITY_KEYS: tuple[tuple[str, str], ...] = (
    ("O", "openness"),
    ("C", "conscientiousness"),
    ("E", "extraversion"),
    ("A", "agreeableness"),
    ("N", "neuroticism"),
)


class EmployeeRecord(BaseModel):
    """
    입력 사원 레코드 (읽기 전용)

    name은 전역 고유 키로 간주합니다 (동명이인 구분 없음).
    isActive는 명시적으로 false인 경우에만 비활성으로 처리합니다.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    name: str = Field(..., min_length=1)
    job: str = ""
    is_active: bool = Field(default=True, alias="isActive")
    personality_traits: PersonalityTraits | None = None
    work_styles_and_strengths: WorkStylesAndStrengths | None = None
    values_and_motivators: ValuesAndMotivators | None = None
    current_state: CurrentState | None = None
    overall_summary: str = ""

    @field_validator("is_active", mode="before")
    @classmethod
    def coerce_is_active(cls, v: Any) -> bool:
        return v is not False

    @field_validator("job", "overall_summary", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @field_validator(
        "personality_traits",
        "work_styles_and_strengths",
        "values_and_motivators",
        "current_state",
        mode="before",
    )
    @classmethod
    def coerce_blocks(cls, v: Any) -> Any:
        return _coerce_block(v)

    def attribute_items(self, rule: DimensionRule) -> list[str]:
        """차원 규칙에 해당하는 원본 라벨 목록 (블록이 없으면 빈 리스트)"""
        block = getattr(self, rule.field, None)
        if block is None:
            return []
        return list(getattr(block, rule.sub_field, []))

    def trait_score(self, trait: str) -> int | float | None:
        """성격 특성 점수 (없으면 None)"""
        if self.personality_traits is None:
            return None
        entry = getattr(self.personality_traits, trait, None)
        return entry.score if entry is not None else None

    def personality_scores(self) -> dict[str, int | float]:
        """O/C/E/A/N 점수 (없으면 0)"""
        return {
            key: self.trait_score(trait) or 0 for key, trait in PERSONALITY_KEYS
        }


# =============================================================================
# 출력: 노드 / 엣지
# =============================================================================


class PersonNode(BaseModel):
    """사원 노드 (생성 후 변경되지 않음)"""

    model_config = ConfigDict(frozen=True)

    id: str
    type: Literal["person"] = "person"
    label: str
    job: str = ""
    summary: str = ""
    personality: dict[str, int | float] = Field(default_factory=dict)


class AttributeNode(BaseModel):
    """
    속성 노드 (스킬/가치관/관심사/동기)

    여러 사원이 같은 정규화 라벨을 다른 차원으로 참조하면
    categories에 합집합으로 누적됩니다.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: Literal["attribute"] = "attribute"
    label: str
    categories: list[AttributeCategory] = Field(default_factory=list)
    color: str = ""
    connected_people: list[str] = Field(default_factory=list, alias="connectedPeople")

    def add_category(self, category: AttributeCategory) -> None:
        if category not in self.categories:
            self.categories.append(category)

    def add_person(self, name: str) -> None:
        if name not in self.connected_people:
            self.connected_people.append(name)


GraphNode = Annotated[PersonNode | AttributeNode, Field(discriminator="type")]


class SharedAttributes(BaseModel):
    """SHARES 엣지의 공통 항목"""

    skills: list[str] = Field(default_factory=list)
    values: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.skills) + len(self.values) + len(self.interests)


class Edge(BaseModel):
    """그래프 엣지"""

    source: str
    target: str
    type: RelationType
    weight: int | float = 1

    # SHARES 전용
    shared: SharedAttributes | None = None

    # AI 추론 엣지 전용
    reason: str | None = None
    direction: MentoringDirection | None = None
    ai_generated: bool | None = None


# =============================================================================
# 출력: 문서
# =============================================================================


class GraphMetadata(BaseModel):
    """실행 메타데이터"""

    generated_at: datetime
    source: str
    employee_count: int
    node_count: int
    edge_count: int
    ai_enhanced: bool


class GraphDocument(BaseModel):
    """최종 출력 문서 {metadata, nodes, edges}"""

    metadata: GraphMetadata
    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)

    def to_json_dict(self) -> dict[str, Any]:
        """외부 소비자용 JSON dict (camelCase 별칭, None 필드 제외)"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
