"""
Knowledge Graph Pipeline

로드 -> 기본 그래프 구성(Phase 1) -> AI 관계 추론(Phase 2) -> 문서화의
전체 과정을 오케스트레이션합니다.

- Phase 1은 동기/결정적이며 실패하지 않습니다.
- Phase 2는 비활성화되었거나 인증 정보가 없으면 건너뜁니다 (ai_enhanced=false).
- 파일 기록은 호출 측에서 마지막에 한 번만 수행합니다.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from team_graph.config import Settings, get_settings
from team_graph.domain.exceptions import MissingCredentialsError
from team_graph.enrichment.judge import LLMRelationshipJudge, RelationshipJudge
from team_graph.enrichment.models import InferenceStats
from team_graph.enrichment.pipeline import RelationshipInferencePipeline
from team_graph.ingestion.assembler import GraphAssembler, active_employees
from team_graph.ingestion.graph import KnowledgeGraph
from team_graph.ingestion.loaders.base import BaseLoader
from team_graph.ingestion.models import EmployeeRecord, GraphDocument
from team_graph.ingestion.normalizer import LabelNormalizer
from team_graph.ingestion.serializer import DEFAULT_SOURCE, GraphSerializer
from team_graph.repositories.llm_repository import LLMRepository, ModelTier

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """
    파이프라인 실행 결과

    Attributes:
        document: 출력 문서
        inference: Phase 2 통계 (건너뛴 경우 None)
    """

    document: GraphDocument
    inference: InferenceStats | None = None

    @property
    def ai_enhanced(self) -> bool:
        return self.document.metadata.ai_enhanced


class KnowledgeGraphPipeline:
    """
    지식 그래프 빌드 파이프라인

    Workflow:
    1. Load: BaseLoader를 통해 EmployeeRecord 로드
    2. Assemble: 정규화 + 결정적 그래프 구성
    3. Enhance: RelationshipJudge로 사원 페어 관계 추론 (선택)
    4. Serialize: 메타데이터를 붙여 GraphDocument 생성
    """

    def __init__(
        self,
        settings: Settings | None = None,
        normalizer: LabelNormalizer | None = None,
        judge: RelationshipJudge | None = None,
    ) -> None:
        """
        Args:
            settings: 설정 (None이면 get_settings())
            normalizer: 라벨 정규화기 (None이면 설정의 동의어 사전으로 생성)
            judge: 관계 판정기 (None이면 설정의 LLM으로 생성, 테스트에서 주입)
        """
        self.settings = settings or get_settings()
        self.normalizer = normalizer or LabelNormalizer.from_yaml(self.settings.synonyms_path)
        self.assembler = GraphAssembler(self.normalizer)
        self._judge = judge

    async def run(self, loader: BaseLoader, enable_ai: bool = True) -> BuildResult:
        """
        로더에서 사원 데이터를 읽어 파이프라인 실행

        Raises:
            MissingInputError: 입력 파일이 없거나 읽을 수 없는 경우
        """
        logger.info(f"Starting knowledge graph build from loader: {loader.__class__.__name__}")
        employees = list(loader.load())
        logger.info(f"Employee records loaded: {len(employees)}")
        return await self.build(employees, enable_ai=enable_ai, source=loader.source_name)

    async def build(
        self,
        employees: Sequence[EmployeeRecord],
        enable_ai: bool = True,
        source: str = DEFAULT_SOURCE,
    ) -> BuildResult:
        """
        사원 레코드 → 출력 문서

        Args:
            employees: 전체 사원 레코드
            enable_ai: Phase 2 실행 여부 (CLI의 --skip-ai)
            source: 메타데이터 source 값

        Returns:
            BuildResult
        """
        # 비활성/동명이인 제외 목록을 한 번만 계산해 모든 단계에서 공유
        active = active_employees(employees)
        graph = self.assembler.build(active)
        inference = await self._enhance(graph, active, enable_ai)

        document = GraphSerializer(source).build_document(
            graph,
            employee_count=len(active),
            ai_enhanced=inference is not None,
        )
        logger.info(
            f"Build completed. Nodes: {document.metadata.node_count}, "
            f"Edges: {document.metadata.edge_count}, "
            f"AI enhanced: {document.metadata.ai_enhanced}"
        )
        return BuildResult(document=document, inference=inference)

    async def _enhance(
        self,
        graph: KnowledgeGraph,
        employees: Sequence[EmployeeRecord],
        enable_ai: bool,
    ) -> InferenceStats | None:
        """Phase 2 실행 (건너뛴 경우 None)"""
        inference_settings = self.settings.relationship_inference

        if not enable_ai or not inference_settings.enabled:
            logger.info("--- Phase 2: skipped (disabled) ---")
            return None

        try:
            judge = self._judge or self._create_judge()
        except MissingCredentialsError as e:
            logger.warning(f"--- Phase 2: skipped ({e.message}) ---")
            return None

        pipeline = RelationshipInferencePipeline(
            judge=judge,
            batch_size=inference_settings.batch_size,
            batch_delay_seconds=inference_settings.batch_delay_seconds,
            score_threshold=inference_settings.score_threshold,
        )

        try:
            return await pipeline.run(graph, employees)
        finally:
            # 주입받은 judge는 호출 측이 관리
            if self._judge is None:
                await judge.close()

    def _create_judge(self) -> RelationshipJudge:
        """
        설정 기반 LLM 판정기 생성

        Raises:
            MissingCredentialsError: 엔드포인트 또는 API 키가 없는 경우
        """
        if not self.settings.has_llm_credentials:
            raise MissingCredentialsError("Azure OpenAI endpoint/API key not configured")
        return LLMRelationshipJudge(
            LLMRepository(self.settings),
            model_tier=ModelTier(self.settings.relationship_inference.model_tier),
        )
