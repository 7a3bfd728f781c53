#!/usr/bin/env python3
"""
지식 그래프 리포트 생성 CLI

저장된 지식 그래프 JSON에서 Markdown 분석 리포트를 생성합니다.

사용법:
    python scripts/generate_graph_doc.py
    python scripts/generate_graph_doc.py --input data/knowledge-graph.json --output docs/KNOWLEDGE_GRAPH.md

출력:
    스킬/가치관/관심사 그룹핑, 사원 매칭, AI 관계, 통계를 담은 Markdown
"""

import argparse
import logging
import sys
from pathlib import Path

# 프로젝트 루트를 path에 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
from pydantic import ValidationError

from team_graph.config import get_settings
from team_graph.ingestion.serializer import load_document
from team_graph.reporting.markdown_report import write_report

# 환경 변수 로드
load_dotenv()
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format=settings.log_format,
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="지식 그래프 JSON에서 Markdown 리포트 생성",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
예시:
  # 기본 경로 사용
  python scripts/generate_graph_doc.py

  # 경로 지정
  python scripts/generate_graph_doc.py --input out/graph.json --output out/REPORT.md
        """,
    )

    parser.add_argument(
        "--input",
        help="입력 지식 그래프 JSON (default: 설정의 output_path)",
    )
    parser.add_argument(
        "--output",
        help="출력 Markdown 파일 (default: 설정의 report_path)",
    )

    args = parser.parse_args()

    input_path = Path(args.input) if args.input else settings.output_path
    output_path = Path(args.output) if args.output else settings.report_path

    logger.info("=" * 60)
    logger.info(" 지식 그래프 리포트 생성")
    logger.info("=" * 60)

    if not input_path.exists():
        logger.error(f"입력 파일을 찾을 수 없습니다: {input_path}")
        sys.exit(1)

    try:
        document = load_document(input_path)
    except (ValueError, ValidationError) as e:
        logger.error(f"❌ 지식 그래프 파일을 읽을 수 없습니다: {e}")
        sys.exit(1)

    write_report(document, output_path)
    logger.info(f"  ✓ 리포트 생성 완료: {output_path}")


if __name__ == "__main__":
    main()
