"""
Relationship Inference Pipeline (Phase 2) 단위 테스트

실행 방법:
    pytest tests/test_relationship_pipeline.py -v
"""

from unittest.mock import AsyncMock, patch

import pytest

from team_graph.domain.exceptions import (
    InferenceParseError,
    InferenceRequestError,
    LLMRateLimitError,
)
from team_graph.enrichment.models import PairJudgment
from team_graph.enrichment.pipeline import RelationshipInferencePipeline
from team_graph.ingestion.assembler import GraphAssembler
from team_graph.ingestion.graph import KnowledgeGraph
from team_graph.ingestion.schema import AI_RELATION_TYPES, MentoringDirection, RelationType

from tests.helpers import StubJudge, judgment_for, make_employee


@pytest.fixture
def employees():
    """활성 5명 → 10페어 → 배치 크기 5로 2배치 (+ 비활성 1명)"""
    return [
        make_employee(name, strengths=["AWS"])
        for name in ["田中", "佐藤", "鈴木", "高橋", "伊藤"]
    ] + [make_employee("渡辺", is_active=False)]


@pytest.fixture
def base_graph(employees, normalizer):
    return GraphAssembler(normalizer).build(employees)


def _all_judgments(pairs):
    return [judgment_for(p) for p in pairs]


def _pipeline(judge, **kwargs):
    kwargs.setdefault("batch_delay_seconds", 0)
    return RelationshipInferencePipeline(judge, **kwargs)


class TestBatching:
    """배치 구성 테스트"""

    def test_batches_of_five(self, employees):
        pipeline = _pipeline(StubJudge(_all_judgments))
        batches = pipeline.build_batches(employees)

        assert [len(b) for b in batches] == [5, 5]
        assert batches[0][0].names == ("田中", "佐藤")
        assert batches[1][-1].names == ("高橋", "伊藤")

    def test_partial_last_batch(self, employees):
        pipeline = _pipeline(StubJudge(_all_judgments), batch_size=4)
        assert [len(b) for b in pipeline.build_batches(employees)] == [4, 4, 2]

    def test_inactive_excluded(self, employees):
        pipeline = _pipeline(StubJudge(_all_judgments))
        names = {n for batch in pipeline.build_batches(employees) for p in batch for n in p.names}
        assert "渡辺" not in names

    def test_invalid_batch_size(self):
        with pytest.raises(ValueError):
            RelationshipInferencePipeline(StubJudge(_all_judgments), batch_size=0)

    def test_single_employee_no_batches(self):
        pipeline = _pipeline(StubJudge(_all_judgments))
        assert pipeline.build_batches([make_employee("田中")]) == []


class TestEdgeCreation:
    """점수 → 엣지 변환 테스트"""

    @pytest.mark.asyncio
    async def test_threshold_filter(self, employees, base_graph):
        """임계값(5) 이상만 엣지 생성: complements 8, mentoring 3, synergy 6"""
        judge = StubJudge(_all_judgments)
        stats = await _pipeline(judge).run(base_graph, employees)

        ai_edges = base_graph.ai_edges()
        assert stats.pair_count == 10
        assert stats.edges_added == 20
        assert len(ai_edges) == 20
        assert {e.type for e in ai_edges} == {RelationType.COMPLEMENTS, RelationType.TEAM_SYNERGY}
        assert all(e.ai_generated is True for e in ai_edges)

    @pytest.mark.asyncio
    async def test_score_equal_to_threshold(self, employees, base_graph):
        judge = StubJudge(lambda pairs: [judgment_for(p, 5, 5, 4) for p in pairs])
        await _pipeline(judge).run(base_graph, employees)

        types = {e.type for e in base_graph.ai_edges()}
        assert types == {RelationType.COMPLEMENTS, RelationType.MENTORING_FIT}

    @pytest.mark.asyncio
    async def test_edge_fields(self, employees, base_graph):
        judge = StubJudge(lambda pairs: [judgment_for(p, None, 9, None, "B→A") for p in pairs])
        await _pipeline(judge).run(base_graph, employees)

        edge = base_graph.ai_edges()[0]
        assert edge.source == "person:田中"
        assert edge.target == "person:佐藤"
        assert edge.type == RelationType.MENTORING_FIT
        assert edge.weight == 9
        assert edge.reason == "経験差がある"
        assert edge.direction is MentoringDirection.B_TO_A

    @pytest.mark.asyncio
    async def test_ai_edges_appended_after_base(self, employees, base_graph):
        base_edges = base_graph.edges
        await _pipeline(StubJudge(_all_judgments)).run(base_graph, employees)

        assert base_graph.edges[: len(base_edges)] == base_edges
        assert all(e.type in AI_RELATION_TYPES for e in base_graph.edges[len(base_edges):])

    @pytest.mark.asyncio
    async def test_swapped_names_remapped(self, employees, base_graph):
        """판정의 이름 순서가 반대면 배치 순서로 되돌리고 방향 반전"""

        def respond(pairs):
            return [
                PairJudgment.model_validate(
                    {
                        "person_a": p.names[1],
                        "person_b": p.names[0],
                        "mentoring_fit": {"score": 8, "direction": "A→B"},
                    }
                )
                for p in pairs
            ]

        await _pipeline(StubJudge(respond)).run(base_graph, employees)
        edge = base_graph.ai_edges()[0]

        assert edge.source == "person:田中"
        assert edge.target == "person:佐藤"
        assert edge.direction is MentoringDirection.B_TO_A

    @pytest.mark.asyncio
    async def test_unknown_and_duplicate_pairs_dropped(self, employees, base_graph):
        def respond(pairs):
            first = pairs[0]
            return [
                judgment_for(first),
                judgment_for(first),
                PairJudgment.model_validate(
                    {"person_a": "田中", "person_b": "部外者", "complements": {"score": 9}}
                ),
            ]

        stats = await _pipeline(StubJudge(respond)).run(base_graph, employees)

        assert stats.dropped_judgments == 4
        assert stats.edges_added == 4
        assert all("部外者" not in e.target for e in base_graph.ai_edges())


class TestFailureIsolation:
    """배치 실패 격리 테스트"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            InferenceRequestError("timeout"),
            LLMRateLimitError("429"),
            InferenceParseError("truncated array"),
            RuntimeError("unexpected"),
        ],
    )
    async def test_failed_batch_skipped(self, employees, base_graph, error):
        """첫 배치 실패 → 두 번째 배치 엣지는 그대로"""
        judge = StubJudge(lambda pairs: error if len(judge.calls) == 1 else _all_judgments(pairs))

        stats = await _pipeline(judge).run(base_graph, employees)

        assert len(judge.calls) == 2
        assert stats.failed_batches == 1
        assert 1 in stats.errors
        assert stats.edges_added == 10
        sources = {(e.source, e.target) for e in base_graph.ai_edges()}
        second_batch = {(f"person:{a}", f"person:{b}") for a, b in (p.names for p in judge.calls[1])}
        assert sources == second_batch

    @pytest.mark.asyncio
    async def test_failure_does_not_alter_other_batches(self, employees, normalizer):
        """실패한 배치가 있어도 다른 배치의 엣지는 전부 성공한 경우와 동일"""
        ok_graph = GraphAssembler(normalizer).build(employees)
        await _pipeline(StubJudge(_all_judgments)).run(ok_graph, employees)

        failing_graph = GraphAssembler(normalizer).build(employees)
        judge = StubJudge(
            lambda pairs: InferenceParseError("bad") if len(judge.calls) == 2 else _all_judgments(pairs)
        )
        await _pipeline(judge).run(failing_graph, employees)

        first_batch = {p.names for p in judge.calls[0]}
        expected = [
            e
            for e in ok_graph.ai_edges()
            if (e.source.removeprefix("person:"), e.target.removeprefix("person:")) in first_batch
        ]
        assert failing_graph.ai_edges() == expected

    @pytest.mark.asyncio
    async def test_all_batches_fail(self, employees, base_graph):
        base_count = base_graph.edge_count
        judge = StubJudge(lambda pairs: InferenceRequestError("down"))

        stats = await _pipeline(judge).run(base_graph, employees)

        assert stats.failed_batches == 2
        assert base_graph.edge_count == base_count


class TestRateLimit:
    """배치 간 대기 테스트"""

    @pytest.mark.asyncio
    async def test_delay_between_batches_only(self, employees, base_graph):
        """배치 사이에만 대기 (마지막 배치 후 없음)"""
        pipeline = RelationshipInferencePipeline(StubJudge(_all_judgments), batch_delay_seconds=1.2)

        with patch("team_graph.enrichment.pipeline.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await pipeline.run(base_graph, employees)

        sleep.assert_awaited_once_with(1.2)

    @pytest.mark.asyncio
    async def test_sequential_processing(self, employees):
        """한 번에 하나의 배치만 진행"""
        in_flight = 0
        max_in_flight = 0

        class ConcurrencyProbe(StubJudge):
            async def evaluate(self, pairs):
                nonlocal in_flight, max_in_flight
                in_flight += 1
                max_in_flight = max(max_in_flight, in_flight)
                try:
                    return await super().evaluate(pairs)
                finally:
                    in_flight -= 1

        judge = ConcurrencyProbe(_all_judgments)
        await _pipeline(judge).run(KnowledgeGraph(), employees)

        assert len(judge.calls) == 2
        assert max_in_flight == 1
