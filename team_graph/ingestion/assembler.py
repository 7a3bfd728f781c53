"""
Graph Assembler (Phase 1)

사원 레코드에서 결정적으로 그래프를 구성합니다.
1. Person 노드 생성
2. 속성 노드 + Person -> 속성 엣지 생성 (정규화/중복 제거)
3. 사원 페어별 공통 항목(SHARES) 엣지 생성

이 단계는 데이터 형태 문제로 실패하지 않습니다 (없는 필드는 빈 값).
"""

import logging
from collections.abc import Iterator, Sequence
from itertools import combinations

from team_graph.ingestion.graph import KnowledgeGraph
from team_graph.ingestion.models import (
    Edge,
    EmployeeRecord,
    PersonNode,
    SharedAttributes,
)
from team_graph.ingestion.normalizer import LabelNormalizer
from team_graph.ingestion.schema import (
    ATTRIBUTE_ID_PREFIX,
    DIMENSION_RULES,
    SHARED_CATEGORIES,
    AttributeCategory,
    RelationType,
    person_id,
)

logger = logging.getLogger(__name__)


def active_employees(employees: Sequence[EmployeeRecord]) -> list[EmployeeRecord]:
    """
    그래프에 포함할 사원 목록

    isActive가 명시적으로 false인 레코드를 제외하고, 같은 이름이 반복되면
    첫 번째 레코드만 남깁니다 (이름이 Person 노드 ID이므로).
    """
    active: dict[str, EmployeeRecord] = {}
    for emp in employees:
        if not emp.is_active:
            continue
        if emp.name in active:
            logger.warning(f"Duplicate employee name ignored: {emp.name}")
            continue
        active[emp.name] = emp
    return list(active.values())


def employee_pairs(
    employees: Sequence[EmployeeRecord],
) -> Iterator[tuple[EmployeeRecord, EmployeeRecord]]:
    """
    순서 없는 사원 페어 (i < j)

    Phase 1(SHARES)과 Phase 2(AI 추론)가 같은 페어 집합을 사용합니다.
    """
    return combinations(employees, 2)


class GraphAssembler:
    """
    결정적 그래프 조립기

    O(n² · m) 페어 비교를 수행하므로 수십 명 규모를 전제로 합니다.
    """

    def __init__(self, normalizer: LabelNormalizer) -> None:
        self._normalizer = normalizer

    def build(self, employees: Sequence[EmployeeRecord]) -> KnowledgeGraph:
        """
        전체 사원 레코드에서 기본 그래프 생성

        Args:
            employees: 전체 사원 레코드 (비활성 포함)

        Returns:
            Person/속성 노드와 Phase 1 엣지를 담은 KnowledgeGraph
        """
        logger.info("--- Phase 1: building base graph ---")

        graph = KnowledgeGraph()
        active = active_employees(employees)

        # 1. Person 노드
        person_count = self._add_person_nodes(graph, active)
        logger.info(f"  Person nodes: {person_count}")

        # 2. 속성 노드 / Person -> 속성 엣지
        attr_node_count, attr_edge_count = self._add_attribute_nodes(graph, active)
        logger.info(f"  Attribute nodes: {attr_node_count}")
        logger.info(f"  Person -> attribute edges: {attr_edge_count}")

        # 3. SHARES 엣지
        shared_edge_count = self._add_shared_edges(graph, active)
        logger.info(f"  SHARES edges: {shared_edge_count}")
        logger.info(f"  Total: {graph.node_count} nodes, {graph.edge_count} edges")

        return graph

    def canonical_profile(
        self, employee: EmployeeRecord
    ) -> dict[AttributeCategory, list[str]]:
        """사원의 차원별 정규 라벨 목록 (사원 내 중복 제거)"""
        return {
            rule.category: self._normalizer.canonicalize(employee.attribute_items(rule))
            for rule in DIMENSION_RULES
        }

    def _add_person_nodes(
        self, graph: KnowledgeGraph, employees: list[EmployeeRecord]
    ) -> int:
        count = 0
        for emp in employees:
            node = PersonNode(
                id=person_id(emp.name),
                label=emp.name,
                job=emp.job,
                summary=emp.overall_summary,
                personality=emp.personality_scores(),
            )
            if graph.add_person(node):
                count += 1
        return count

    def _add_attribute_nodes(
        self, graph: KnowledgeGraph, employees: list[EmployeeRecord]
    ) -> tuple[int, int]:
        node_count = 0
        edge_count = 0

        for rule in DIMENSION_RULES:
            for emp in employees:
                source_id = person_id(emp.name)
                items = self._normalizer.canonicalize(emp.attribute_items(rule))

                for label in items:
                    node_id = f"{ATTRIBUTE_ID_PREFIX}{self._normalizer.normalize_for_id(label)}"

                    node, created = graph.get_or_create_attribute(
                        node_id, label=label, color=rule.color
                    )
                    if created:
                        node_count += 1
                    node.add_category(rule.category)
                    node.add_person(emp.name)

                    edge = Edge(
                        source=source_id,
                        target=node_id,
                        type=rule.edge_type,
                        weight=1,
                    )
                    if graph.add_dimension_edge(edge):
                        edge_count += 1

        return node_count, edge_count

    def _add_shared_edges(
        self, graph: KnowledgeGraph, employees: list[EmployeeRecord]
    ) -> int:
        # 페어마다 다시 정규화하지 않도록 사원별 프로필을 먼저 계산
        profiles = {emp.name: self.canonical_profile(emp) for emp in employees}

        count = 0
        for a, b in employee_pairs(employees):
            shared = self._intersect(profiles[a.name], profiles[b.name])
            if shared.total == 0:
                continue

            graph.add_edge(
                Edge(
                    source=person_id(a.name),
                    target=person_id(b.name),
                    type=RelationType.SHARES,
                    weight=shared.total,
                    shared=shared,
                )
            )
            count += 1

        return count

    @staticmethod
    def _intersect(
        profile_a: dict[AttributeCategory, list[str]],
        profile_b: dict[AttributeCategory, list[str]],
    ) -> SharedAttributes:
        """카테고리별 교집합 (A의 순서 유지, motivation 제외)"""
        overlaps: dict[AttributeCategory, list[str]] = {}
        for category in SHARED_CATEGORIES:
            b_items = set(profile_b[category])
            overlaps[category] = [item for item in profile_a[category] if item in b_items]

        return SharedAttributes(
            skills=overlaps[AttributeCategory.SKILL],
            values=overlaps[AttributeCategory.VALUE],
            interests=overlaps[AttributeCategory.INTEREST],
        )
