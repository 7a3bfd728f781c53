"""
Knowledge Graph Markdown Report

저장된 지식 그래프 문서를 사람이 읽을 수 있는 Markdown 리포트로 변환합니다.
리포트 본문은 팀 공유용으로 일본어 제목을 사용합니다.
"""

import logging
from collections import Counter
from pathlib import Path

from team_graph.ingestion.models import AttributeNode, Edge, GraphDocument, PersonNode
from team_graph.ingestion.schema import (
    PERSON_ID_PREFIX,
    AttributeCategory,
    MentoringDirection,
    RelationType,
)

logger = logging.getLogger(__name__)

TOP_SHARED_LIMIT = 20
EMPTY_CELL = "-"

CATEGORY_LABELS: dict[AttributeCategory, str] = {
    AttributeCategory.SKILL: "スキル",
    AttributeCategory.VALUE: "価値観",
    AttributeCategory.INTEREST: "関心事",
    AttributeCategory.MOTIVATION: "モチベーション",
}

# (카테고리, 섹션 제목, 인원 컬럼명)
_GROUPING_SECTIONS: tuple[tuple[AttributeCategory, str, str], ...] = (
    (AttributeCategory.SKILL, "スキル・強み別グルーピング", "保有者数"),
    (AttributeCategory.VALUE, "価値観別グルーピング", "共有者数"),
    (AttributeCategory.INTEREST, "関心事別グルーピング", "関心者数"),
)

_AI_SECTIONS: tuple[tuple[RelationType, str], ...] = (
    (RelationType.COMPLEMENTS, "補完関係"),
    (RelationType.MENTORING_FIT, "メンタリング適性"),
    (RelationType.TEAM_SYNERGY, "チーム相乗効果"),
)


def _person_name(node_id: str) -> str:
    return node_id.removeprefix(PERSON_ID_PREFIX)


def _join(items: list[str]) -> str:
    return ", ".join(items) or EMPTY_CELL


def _table(header: list[str], rows: list[list[str]]) -> list[str]:
    lines = [
        "| " + " | ".join(header) + " |",
        "| " + " | ".join("---" for _ in header) + " |",
    ]
    lines.extend("| " + " | ".join(str(cell) for cell in row) + " |" for row in rows)
    lines.append("")
    return lines


def _mentoring_pair(edge: Edge) -> str:
    """방향 태그에 따라 멘토 → 멘티 순서로 표시"""
    a = _person_name(edge.source)
    b = _person_name(edge.target)
    if edge.direction is MentoringDirection.B_TO_A:
        return f"{b} → {a}"
    if edge.direction is MentoringDirection.MUTUAL:
        return f"{a} ↔ {b}"
    return f"{a} → {b}"


def _grouping_section(
    attributes: list[AttributeNode],
    category: AttributeCategory,
    title: str,
    count_label: str,
) -> list[str]:
    nodes = [n for n in attributes if category in n.categories]
    nodes.sort(key=lambda n: len(n.connected_people), reverse=True)

    rows = [[n.label, str(len(n.connected_people)), ", ".join(n.connected_people)] for n in nodes]
    return [f"## {title}", "", *_table([CATEGORY_LABELS[category], count_label, "社員"], rows)]


def _shared_section(edges: list[Edge]) -> list[str]:
    shared = [e for e in edges if e.type == RelationType.SHARES]
    shared.sort(key=lambda e: e.weight, reverse=True)

    rows = []
    for rank, edge in enumerate(shared[:TOP_SHARED_LIMIT], start=1):
        s = edge.shared
        rows.append(
            [
                str(rank),
                f"{_person_name(edge.source)} × {_person_name(edge.target)}",
                str(edge.weight),
                _join(s.skills if s else []),
                _join(s.values if s else []),
                _join(s.interests if s else []),
            ]
        )

    return [
        "## 社員間マッチング",
        "",
        "共通のスキル・価値観・関心事が多い組み合わせです。",
        "",
        *_table(["順位", "社員ペア", "共通数", "共通スキル", "共通価値観", "共通関心事"], rows),
    ]


def _ai_section(edges: list[Edge]) -> list[str]:
    ai_edges = [e for e in edges if e.ai_generated]
    if not ai_edges:
        return []

    lines = ["## AI推論による関係性", "", "LLMによる社員ペアの関係性分析の結果です。", ""]
    for relation_type, title in _AI_SECTIONS:
        typed = [e for e in ai_edges if e.type == relation_type]
        if not typed:
            continue
        typed.sort(key=lambda e: e.weight, reverse=True)

        if relation_type == RelationType.MENTORING_FIT:
            header = ["メンター → メンティー", "スコア", "理由"]
            rows = [[_mentoring_pair(e), f"{e.weight}/10", e.reason or EMPTY_CELL] for e in typed]
        else:
            header = ["社員ペア", "スコア", "理由"]
            rows = [
                [
                    f"{_person_name(e.source)} × {_person_name(e.target)}",
                    f"{e.weight}/10",
                    e.reason or EMPTY_CELL,
                ]
                for e in typed
            ]
        lines.extend([f"### {title}", "", *_table(header, rows)])
    return lines


def _statistics_section(document: GraphDocument) -> list[str]:
    people = [n for n in document.nodes if isinstance(n, PersonNode)]
    attributes = [n for n in document.nodes if isinstance(n, AttributeNode)]

    category_counts: Counter[AttributeCategory] = Counter()
    for node in attributes:
        category_counts.update(node.categories)

    node_rows = [["社員", str(len(people))]]
    node_rows.extend(
        [CATEGORY_LABELS.get(category, category.value), str(count)]
        for category, count in category_counts.items()
    )
    node_rows.append(["**合計**", f"**{len(document.nodes)}**"])

    edge_counts = Counter(e.type.value for e in document.edges)
    edge_rows = [[edge_type, str(count)] for edge_type, count in edge_counts.items()]
    edge_rows.append(["**合計**", f"**{len(document.edges)}**"])

    return [
        "## 統計サマリー",
        "",
        "### ノード分布",
        "",
        *_table(["カテゴリ", "ノード数"], node_rows),
        "### エッジ分布",
        "",
        *_table(["タイプ", "エッジ数"], edge_rows),
    ]


def render_markdown_report(document: GraphDocument) -> str:
    """
    지식 그래프 문서 → Markdown 리포트

    구성:
    1. 헤더 (생성 시각, 사원/노드/엣지 수, AI 확장 여부)
    2. 스킬/가치관/관심사별 그룹핑 (연결 인원 내림차순)
    3. SHARES 가중치 상위 페어
    4. AI 추론 관계 (AI 엣지가 있을 때만)
    5. 노드/엣지 분포 통계

    Args:
        document: 지식 그래프 문서

    Returns:
        Markdown 문자열
    """
    meta = document.metadata
    attributes = [n for n in document.nodes if isinstance(n, AttributeNode)]

    lines = [
        "# ナレッジグラフ分析レポート",
        "",
        f"> 自動生成: {meta.generated_at.isoformat()}",
        f"> 社員数: {meta.employee_count}名 | ノード: {meta.node_count} | "
        f"エッジ: {meta.edge_count} | AI拡張: {'あり' if meta.ai_enhanced else 'なし'}",
        "",
        "---",
        "",
    ]

    for category, title, count_label in _GROUPING_SECTIONS:
        lines.extend(_grouping_section(attributes, category, title, count_label))

    lines.extend(_shared_section(document.edges))
    lines.extend(_ai_section(document.edges))
    lines.extend(_statistics_section(document))

    return "\n".join(lines)


def write_report(document: GraphDocument, output_path: str | Path) -> Path:
    """Markdown 리포트를 파일로 저장 (상위 디렉토리 자동 생성)"""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_markdown_report(document), encoding="utf-8")
    logger.info(f"Knowledge graph report saved to: {path}")
    return path
