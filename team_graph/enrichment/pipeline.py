"""
Relationship Inference Pipeline (Phase 2).

Batches employee pairs, asks a RelationshipJudge for each batch, and appends
AI-generated edges for judgments at or above the score threshold. Batches are
processed strictly sequentially with a fixed delay in between; a failing batch
contributes zero edges and never aborts the run.
"""

import asyncio
import logging
from collections.abc import Sequence

from team_graph.domain.exceptions import InferenceParseError, InferenceRequestError
from team_graph.enrichment.judge import RelationshipJudge
from team_graph.enrichment.models import (
    InferenceStats,
    PairDescriptor,
    PairJudgment,
    RelationScore,
)
from team_graph.ingestion.assembler import active_employees, employee_pairs
from team_graph.ingestion.graph import KnowledgeGraph
from team_graph.ingestion.models import Edge, EmployeeRecord
from team_graph.ingestion.schema import MentoringDirection, RelationType, person_id

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

DEFAULT_BATCH_SIZE = 5
DEFAULT_BATCH_DELAY_SECONDS = 1.2
DEFAULT_SCORE_THRESHOLD = 5


class RelationshipInferencePipeline:
    """
    Sequential, rate-limited relationship inference.

    Workflow:
    1. Build the same unordered pair universe as Phase 1
    2. Partition pairs into fixed-size batches
    3. Judge each batch, convert passing scores into edges
    4. Sleep between batches
    """

    def __init__(
        self,
        judge: RelationshipJudge,
        batch_size: int = DEFAULT_BATCH_SIZE,
        batch_delay_seconds: float = DEFAULT_BATCH_DELAY_SECONDS,
        score_threshold: int | float = DEFAULT_SCORE_THRESHOLD,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self._judge = judge
        self._batch_size = batch_size
        self._batch_delay_seconds = batch_delay_seconds
        self._score_threshold = score_threshold

    def build_batches(
        self, employees: Sequence[EmployeeRecord]
    ) -> list[list[PairDescriptor]]:
        """Partition all active employee pairs into batches."""
        pairs = [PairDescriptor(a, b) for a, b in employee_pairs(active_employees(employees))]
        return [
            pairs[i : i + self._batch_size]
            for i in range(0, len(pairs), self._batch_size)
        ]

    async def run(
        self,
        graph: KnowledgeGraph,
        employees: Sequence[EmployeeRecord],
    ) -> InferenceStats:
        """
        Extend ``graph`` in place with AI-generated edges.

        Args:
            graph: Graph produced by Phase 1
            employees: All employee records (inactive ones are filtered)

        Returns:
            InferenceStats for the run
        """
        batches = self.build_batches(employees)
        stats = InferenceStats(
            pair_count=sum(len(batch) for batch in batches),
            batch_count=len(batches),
        )
        logger.info("--- Phase 2: relationship inference ---")
        logger.info(f"  Pairs to analyse: {stats.pair_count} ({stats.batch_count} batches)")

        for batch_num, batch in enumerate(batches, start=1):
            edges = await self._process_batch(batch, batch_num, stats)
            graph.extend_edges(edges)
            stats.edges_added += len(edges)

            # Rate limit: fixed delay before the next batch
            if batch_num < len(batches):
                await asyncio.sleep(self._batch_delay_seconds)

        logger.info(
            f"  AI edges added: {stats.edges_added} "
            f"({stats.failed_batches} failed batches, "
            f"{stats.dropped_judgments} dropped judgments)"
        )
        return stats

    async def _process_batch(
        self,
        batch: list[PairDescriptor],
        batch_num: int,
        stats: InferenceStats,
    ) -> list[Edge]:
        """Judge one batch; failures are contained to this batch."""
        try:
            judgments = await self._judge.evaluate(batch)

        except InferenceRequestError as e:
            logger.error(f"  Batch {batch_num}/{stats.batch_count} request failed: {e}")
            stats.errors[batch_num] = f"REQUEST_ERROR: {e}"
            return []

        except InferenceParseError as e:
            logger.error(f"  Batch {batch_num}/{stats.batch_count} parse failed: {e}")
            stats.errors[batch_num] = f"PARSE_ERROR: {e}"
            return []

        except Exception as e:
            logger.exception(f"  Batch {batch_num}/{stats.batch_count} unexpected error")
            stats.errors[batch_num] = f"UNKNOWN_ERROR: {e}"
            return []

        edges = self._judgments_to_edges(batch, judgments, stats)
        logger.info(
            f"  Batch {batch_num}/{stats.batch_count}: "
            f"{len(judgments)} pairs judged, {len(edges)} edges"
        )
        return edges

    def _judgments_to_edges(
        self,
        batch: list[PairDescriptor],
        judgments: list[PairJudgment],
        stats: InferenceStats,
    ) -> list[Edge]:
        """
        Convert judgments into edges.

        Judgments are matched back to the batch's pairs; names outside the batch
        are dropped and swapped names are mapped to the batch order.
        """
        # (name_a, name_b) -> (pair, swapped)
        index: dict[tuple[str, str], tuple[PairDescriptor, bool]] = {}
        for pair in batch:
            name_a, name_b = pair.names
            index[(name_a, name_b)] = (pair, False)
            index.setdefault((name_b, name_a), (pair, True))

        seen: set[tuple[str, str]] = set()
        edges: list[Edge] = []

        for judgment in judgments:
            match = index.get((judgment.person_a.strip(), judgment.person_b.strip()))
            if match is None:
                logger.warning(
                    f"Dropped judgment for unknown pair: "
                    f"{judgment.person_a} × {judgment.person_b}"
                )
                stats.dropped_judgments += 1
                continue

            pair, swapped = match
            if pair.names in seen:
                logger.warning(f"Dropped duplicate judgment for pair: {' × '.join(pair.names)}")
                stats.dropped_judgments += 1
                continue
            seen.add(pair.names)

            edges.extend(self._edges_for_pair(pair, judgment, swapped))

        return edges

    def _edges_for_pair(
        self,
        pair: PairDescriptor,
        judgment: PairJudgment,
        swapped: bool,
    ) -> list[Edge]:
        source = person_id(pair.person_a.name)
        target = person_id(pair.person_b.name)
        edges: list[Edge] = []

        scored: list[tuple[RelationType, RelationScore | None]] = [
            (RelationType.COMPLEMENTS, judgment.complements),
            (RelationType.MENTORING_FIT, judgment.mentoring_fit),
            (RelationType.TEAM_SYNERGY, judgment.team_synergy),
        ]

        for relation_type, result in scored:
            if result is None or not result.passes(self._score_threshold):
                continue

            direction: MentoringDirection | None = None
            if relation_type == RelationType.MENTORING_FIT:
                direction = getattr(result, "direction", MentoringDirection.MUTUAL)
                if swapped:
                    direction = direction.flipped()

            edges.append(
                Edge(
                    source=source,
                    target=target,
                    type=relation_type,
                    weight=result.score,
                    reason=result.reason,
                    direction=direction,
                    ai_generated=True,
                )
            )

        return edges
