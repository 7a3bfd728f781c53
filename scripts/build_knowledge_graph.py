#!/usr/bin/env python3
"""
지식 그래프 빌드 CLI

사원 데이터(employees.json)에서 팀 지식 그래프를 생성합니다.

- Phase 1: 사원/속성 노드, 차원 엣지, SHARES 엣지 (결정적)
- Phase 2: LLM 기반 사원 페어 관계 추론 (COMPLEMENTS / MENTORING_FIT / TEAM_SYNERGY)

사용법:
    python scripts/build_knowledge_graph.py
    python scripts/build_knowledge_graph.py --input data/employees.json --output data/knowledge-graph.json
    python scripts/build_knowledge_graph.py --skip-ai
    python scripts/build_knowledge_graph.py --report docs/KNOWLEDGE_GRAPH.md

출력:
    {metadata, nodes, edges} 형식의 지식 그래프 JSON
"""

import argparse
import asyncio
import logging
import sys
from collections import Counter
from pathlib import Path

# 프로젝트 루트를 path에 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from team_graph.config import get_settings
from team_graph.domain.exceptions import TeamGraphError
from team_graph.ingestion.loaders.json_loader import JSONEmployeeLoader
from team_graph.ingestion.normalizer import LabelNormalizer
from team_graph.ingestion.serializer import GraphSerializer
from team_graph.pipeline import KnowledgeGraphPipeline
from team_graph.reporting.markdown_report import write_report

# 환경 변수 로드
load_dotenv()
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format=settings.log_format,
)
logger = logging.getLogger(__name__)


async def main():
    parser = argparse.ArgumentParser(
        description="사원 데이터에서 팀 지식 그래프 생성",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
예시:
  # 기본 실행 (Azure OpenAI 설정이 있으면 AI 관계 추론 포함)
  python scripts/build_knowledge_graph.py

  # AI 관계 추론 없이 기본 그래프만 생성
  python scripts/build_knowledge_graph.py --skip-ai

  # 사용자 동의어 사전 지정
  python scripts/build_knowledge_graph.py --synonyms my_synonyms.yaml

  # Markdown 리포트까지 생성
  python scripts/build_knowledge_graph.py --report docs/KNOWLEDGE_GRAPH.md
        """,
    )

    parser.add_argument(
        "--input",
        help="입력 사원 데이터 JSON (default: 설정의 employees_path)",
    )
    parser.add_argument(
        "--output",
        help="출력 지식 그래프 JSON (default: 설정의 output_path)",
    )
    parser.add_argument(
        "--synonyms",
        help="동의어 사전 YAML (default: 패키지 기본 사전)",
    )
    parser.add_argument(
        "--skip-ai",
        action="store_true",
        help="AI 관계 추론(Phase 2) 건너뛰기",
    )
    parser.add_argument(
        "--report",
        help="Markdown 리포트 출력 경로 (지정 시에만 생성)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="상세 로깅 출력",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    input_path = Path(args.input) if args.input else settings.employees_path
    output_path = Path(args.output) if args.output else settings.output_path
    synonyms_path = args.synonyms or settings.synonyms_path

    logger.info("=" * 60)
    logger.info(" 지식 그래프 빌드 (Knowledge Graph Build)")
    logger.info("=" * 60)

    try:
        loader = JSONEmployeeLoader(input_path)
        pipeline = KnowledgeGraphPipeline(
            settings=settings,
            normalizer=LabelNormalizer.from_yaml(synonyms_path),
        )

        logger.info(f"\n[1/2] 그래프 생성 중: {input_path}")
        result = await pipeline.run(loader, enable_ai=not args.skip_ai)

        logger.info("\n[2/2] 결과 저장 중...")
        GraphSerializer(loader.source_name).write(result.document, output_path)
        if args.report:
            write_report(result.document, args.report)

        meta = result.document.metadata
        logger.info("\n" + "=" * 60)
        logger.info(" 빌드 완료!")
        logger.info("=" * 60)
        logger.info(f"  활성 사원: {meta.employee_count}명")
        logger.info(f"  노드: {meta.node_count}개")
        logger.info(f"  엣지: {meta.edge_count}개")
        logger.info(f"  AI 확장: {'예' if meta.ai_enhanced else '아니오'}")

        edge_types = Counter(e.type.value for e in result.document.edges)
        for edge_type, count in edge_types.most_common():
            logger.info(f"    - {edge_type}: {count}")

        if result.inference:
            stats = result.inference
            logger.info(
                f"  AI 추론: {stats.pair_count}쌍 / {stats.batch_count}배치, "
                f"엣지 {stats.edges_added}개 추가, 실패 배치 {stats.failed_batches}개"
            )

        logger.info(f"  출력 파일: {output_path}")

    except TeamGraphError as e:
        logger.error(f"❌ 오류: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"❌ 오류: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
