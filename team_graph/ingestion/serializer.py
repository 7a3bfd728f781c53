"""
Graph Serializer

최종 노드/엣지에 실행 메타데이터를 붙여 출력 문서를 만들고,
실행 마지막에 한 번만 파일로 기록합니다.
"""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from team_graph.ingestion.graph import KnowledgeGraph
from team_graph.ingestion.models import GraphDocument, GraphMetadata

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "employees.json"


class GraphSerializer:
    """
    출력 문서 생성기

    build_document는 입력에 대한 순수 함수이며 (generated_at 주입 가능),
    write는 단일 종료 연산입니다.
    """

    def __init__(self, source: str = DEFAULT_SOURCE) -> None:
        self.source = source

    def build_document(
        self,
        graph: KnowledgeGraph,
        employee_count: int,
        ai_enhanced: bool,
        generated_at: datetime | None = None,
    ) -> GraphDocument:
        """
        그래프 → 출력 문서

        Args:
            graph: 완성된 그래프
            employee_count: 활성 사원 수
            ai_enhanced: Phase 2 실행 여부
            generated_at: 생성 시각 (None이면 현재 UTC)

        Returns:
            GraphDocument
        """
        nodes = graph.nodes
        edges = graph.edges

        metadata = GraphMetadata(
            generated_at=generated_at or datetime.now(UTC),
            source=self.source,
            employee_count=employee_count,
            node_count=len(nodes),
            edge_count=len(edges),
            ai_enhanced=ai_enhanced,
        )
        return GraphDocument(metadata=metadata, nodes=nodes, edges=edges)

    def write(self, document: GraphDocument, output_path: str | Path) -> Path:
        """
        출력 문서를 JSON 파일로 저장 (상위 디렉토리 자동 생성)

        Returns:
            저장된 파일 경로
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(document.to_json_dict(), f, ensure_ascii=False, indent=2)

        logger.info(f"Knowledge graph saved to: {path}")
        return path


def load_document(input_path: str | Path) -> GraphDocument:
    """저장된 지식 그래프 JSON 로드"""
    with open(input_path, encoding="utf-8") as f:
        return GraphDocument.model_validate(json.load(f))
