"""
테스트 헬퍼

사원 레코드 생성기, Stub 판정기, 판정 생성기를 정의합니다.
"""

from collections.abc import Callable, Sequence
from typing import Any

from team_graph.enrichment.judge import RelationshipJudge
from team_graph.enrichment.models import PairDescriptor, PairJudgment
from team_graph.ingestion.models import EmployeeRecord


def make_employee(
    name: str,
    job: str = "エンジニア",
    strengths: list[str] | None = None,
    values: list[str] | None = None,
    interests: list[str] | None = None,
    motivations: list[str] | None = None,
    is_active: Any = True,
    summary: str = "",
    personality: dict[str, int] | None = None,
) -> EmployeeRecord:
    """테스트용 사원 레코드 생성 (employees.json과 같은 형태로 검증)"""
    raw: dict[str, Any] = {
        "name": name,
        "job": job,
        "isActive": is_active,
        "overall_summary": summary,
        "work_styles_and_strengths": {"dominant_strengths": strengths or []},
        "values_and_motivators": {
            "core_values": values or [],
            "motivation_triggers": motivations or [],
        },
        "current_state": {"recent_topics_of_interest": interests or []},
    }
    if personality is not None:
        raw["personality_traits"] = {
            trait: {"score": score} for trait, score in personality.items()
        }
    return EmployeeRecord.model_validate(raw)


class StubJudge(RelationshipJudge):
    """
    결정적 Stub 판정기

    responder(pairs) 결과를 그대로 반환하며, 예외를 반환하면 raise합니다.
    호출된 배치는 calls에 기록됩니다.
    """

    def __init__(self, responder: Callable[[Sequence[PairDescriptor]], Any]):
        self._responder = responder
        self.calls: list[list[PairDescriptor]] = []
        self.closed = False

    async def evaluate(self, pairs: Sequence[PairDescriptor]) -> list[PairJudgment]:
        self.calls.append(list(pairs))
        result = self._responder(pairs)
        if isinstance(result, Exception):
            raise result
        return result

    async def close(self) -> None:
        self.closed = True


def judgment_for(
    pair: PairDescriptor,
    complements: int | None = 8,
    mentoring: int | None = 3,
    synergy: int | None = 6,
    direction: str = "A→B",
) -> PairJudgment:
    """페어에 대한 판정 생성 (None이면 해당 항목 생략)"""
    name_a, name_b = pair.names
    data: dict[str, Any] = {"person_a": name_a, "person_b": name_b}
    if complements is not None:
        data["complements"] = {"score": complements, "reason": "強みが補完的"}
    if mentoring is not None:
        data["mentoring_fit"] = {
            "score": mentoring,
            "direction": direction,
            "reason": "経験差がある",
        }
    if synergy is not None:
        data["team_synergy"] = {"score": synergy, "reason": "価値観が近い"}
    return PairJudgment.model_validate(data)


