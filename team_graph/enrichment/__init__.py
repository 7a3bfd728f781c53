from team_graph.enrichment.judge import LLMRelationshipJudge, RelationshipJudge
from team_graph.enrichment.models import (
    InferenceStats,
    MentoringScore,
    PairDescriptor,
    PairJudgment,
    RelationScore,
)
from team_graph.enrichment.pipeline import RelationshipInferencePipeline

__all__ = [
    # Core classes
    "RelationshipJudge",
    "LLMRelationshipJudge",
    "RelationshipInferencePipeline",
    # Data models
    "PairDescriptor",
    "PairJudgment",
    "RelationScore",
    "MentoringScore",
    "InferenceStats",
]
