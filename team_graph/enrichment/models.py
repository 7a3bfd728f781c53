"""
Relationship inference data models.

Pair descriptors sent to a judge, tolerant judgment models parsed from the
judge's response, and run statistics.
"""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from team_graph.ingestion.models import EmployeeRecord
from team_graph.ingestion.schema import MentoringDirection

MIN_SCORE = 0
MAX_SCORE = 10

# Accepted spellings for mentoring direction tags
_DIRECTION_ALIASES: dict[str, MentoringDirection] = {
    "a→b": MentoringDirection.A_TO_B,
    "a->b": MentoringDirection.A_TO_B,
    "a=>b": MentoringDirection.A_TO_B,
    "b→a": MentoringDirection.B_TO_A,
    "b->a": MentoringDirection.B_TO_A,
    "b=>a": MentoringDirection.B_TO_A,
    "mutual": MentoringDirection.MUTUAL,
    "a↔b": MentoringDirection.MUTUAL,
    "a<->b": MentoringDirection.MUTUAL,
}


@dataclass(frozen=True)
class PairDescriptor:
    """
    An unordered employee pair submitted for judgment.

    Attributes:
        person_a: First employee (edge source)
        person_b: Second employee (edge target)
    """

    person_a: EmployeeRecord
    person_b: EmployeeRecord

    @property
    def names(self) -> tuple[str, str]:
        return self.person_a.name, self.person_b.name


class RelationScore(BaseModel):
    """A single scored judgment. Unusable scores become None."""

    model_config = ConfigDict(extra="ignore")

    score: int | float | None = None
    reason: str = ""

    @field_validator("score", mode="before")
    @classmethod
    def coerce_score(cls, v: Any) -> int | float | None:
        if v is None or isinstance(v, bool):
            return None
        if not isinstance(v, int | float):
            try:
                v = float(v)
            except (TypeError, ValueError):
                return None
        if not MIN_SCORE <= v <= MAX_SCORE:
            return None
        return v

    @field_validator("reason", mode="before")
    @classmethod
    def coerce_reason(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    def passes(self, threshold: int | float) -> bool:
        return self.score is not None and self.score >= threshold


class MentoringScore(RelationScore):
    """Mentoring judgment with a direction tag (missing or unknown -> mutual)."""

    direction: MentoringDirection = MentoringDirection.MUTUAL

    @field_validator("direction", mode="before")
    @classmethod
    def coerce_direction(cls, v: Any) -> MentoringDirection:
        if isinstance(v, MentoringDirection):
            return v
        if isinstance(v, str):
            key = v.strip().replace(" ", "").lower()
            return _DIRECTION_ALIASES.get(key, MentoringDirection.MUTUAL)
        return MentoringDirection.MUTUAL


def _coerce_judgment_block(v: Any) -> Any:
    return v if isinstance(v, dict | BaseModel) else None


class PairJudgment(BaseModel):
    """Judgment for one pair as returned by a relationship judge."""

    model_config = ConfigDict(extra="ignore")

    person_a: str
    person_b: str
    complements: RelationScore | None = None
    mentoring_fit: MentoringScore | None = None
    team_synergy: RelationScore | None = None

    @field_validator("complements", "mentoring_fit", "team_synergy", mode="before")
    @classmethod
    def coerce_block(cls, v: Any) -> Any:
        return _coerce_judgment_block(v)


@dataclass
class InferenceStats:
    """
    Result statistics of one inference run.

    Attributes:
        pair_count: Number of employee pairs considered
        batch_count: Number of batches submitted
        edges_added: AI edges appended to the graph
        dropped_judgments: Judgments discarded (unknown pair, duplicates)
        errors: Failed batches (batch number -> error message)
    """

    pair_count: int = 0
    batch_count: int = 0
    edges_added: int = 0
    dropped_judgments: int = 0
    errors: dict[int, str] = field(default_factory=dict)

    @property
    def failed_batches(self) -> int:
        return len(self.errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "pair_count": self.pair_count,
            "batch_count": self.batch_count,
            "failed_batches": self.failed_batches,
            "edges_added": self.edges_added,
            "dropped_judgments": self.dropped_judgments,
            "errors": self.errors,
        }
