"""
Relationship judge module.

Defines the RelationshipJudge capability used by the inference pipeline and
an LLM-backed implementation that renders pair descriptions into a prompt
and parses the structured JSON judgments.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from team_graph.domain.exceptions import InferenceParseError
from team_graph.enrichment.models import PairDescriptor, PairJudgment
from team_graph.ingestion.models import PERSONALITY_KEYS, EmployeeRecord
from team_graph.repositories.llm_repository import LLMRepository, ModelTier
from team_graph.utils.prompt_manager import PromptManager

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

PROMPT_NAME = "relationship_judgment"

# Placeholders for missing profile fields (never omitted from the prompt)
UNKNOWN_SUMMARY = "情報なし"
UNKNOWN_SCORE = "?"
UNKNOWN_LIST = "不明"

PAIR_SEPARATOR = "\n---\n"

# Keys under which a JSON object response may wrap the judgment array
RESULT_KEYS = ("results", "pairs", "judgments")


class RelationshipJudge(ABC):
    """
    Capability that judges relationships for a batch of employee pairs.

    Implementations raise InferenceRequestError / InferenceParseError for
    batch-level failures; the pipeline isolates those per batch.
    """

    @abstractmethod
    async def evaluate(self, pairs: Sequence[PairDescriptor]) -> list[PairJudgment]:
        """Return one judgment per pair the judge could assess."""

    async def close(self) -> None:
        """Release underlying resources."""
        return None


def describe_employee(employee: EmployeeRecord) -> str:
    """Render one employee profile block for the prompt."""
    scores = ", ".join(
        f"{key}={_format_score(employee.trait_score(trait))}"
        for key, trait in PERSONALITY_KEYS
    )
    strengths = employee.work_styles_and_strengths
    values = employee.values_and_motivators

    lines = [
        f"{employee.name}（{employee.job or UNKNOWN_LIST}）: "
        f"{employee.overall_summary or UNKNOWN_SUMMARY}",
        f"性格: {scores}",
        f"強み: {_format_list(strengths.dominant_strengths if strengths else [])}",
        f"価値観: {_format_list(values.core_values if values else [])}",
    ]
    return "\n".join(lines)


def describe_pair(pair: PairDescriptor) -> str:
    """Render a pair header with both profiles."""
    name_a, name_b = pair.names
    return "\n".join(
        [
            f"【ペア: {name_a} × {name_b}】",
            describe_employee(pair.person_a),
            "",
            describe_employee(pair.person_b),
        ]
    )


def _format_score(score: int | float | None) -> str:
    if score is None:
        return UNKNOWN_SCORE
    return str(int(score)) if float(score).is_integer() else str(score)


def _format_list(items: list[str]) -> str:
    return ", ".join(items) if items else UNKNOWN_LIST


class LLMRelationshipJudge(RelationshipJudge):
    """
    Relationship judge backed by the LLM repository.

    Issues exactly one request per batch; no retries.
    """

    def __init__(
        self,
        llm_repository: LLMRepository,
        prompt_manager: PromptManager | None = None,
        model_tier: ModelTier = ModelTier.HEAVY,
        temperature: float | None = None,
    ):
        """
        Initialize the LLMRelationshipJudge.

        Args:
            llm_repository: Repository for LLM API calls
            prompt_manager: Optional custom prompt manager (for testing)
            model_tier: Model tier used for judgments
            temperature: Optional temperature override
        """
        self._llm = llm_repository
        self._prompt_manager = prompt_manager or PromptManager()
        self._model_tier = model_tier
        self._temperature = temperature

    async def evaluate(self, pairs: Sequence[PairDescriptor]) -> list[PairJudgment]:
        """
        Judge a batch of pairs.

        Args:
            pairs: Pairs in this batch

        Returns:
            Parsed judgments (malformed items are skipped)

        Raises:
            InferenceRequestError: The request failed
            InferenceParseError: The response body could not be interpreted
        """
        if not pairs:
            return []

        prompt = self._prompt_manager.load_prompt(PROMPT_NAME)
        user_prompt = prompt["user"].format(
            pair_count=len(pairs),
            pair_descriptions=PAIR_SEPARATOR.join(describe_pair(p) for p in pairs),
        )

        response = await self._llm.generate_json(
            system_prompt=prompt["system"],
            user_prompt=user_prompt,
            model_tier=self._model_tier,
            temperature=self._temperature,
        )

        return self._parse_response(response)

    async def close(self) -> None:
        await self._llm.close()

    def _parse_response(self, response: Any) -> list[PairJudgment]:
        """Parse a JSON array (bare or wrapped in an object) into judgments."""
        items = self._extract_items(response)

        judgments: list[PairJudgment] = []
        for item in items:
            if not isinstance(item, dict):
                logger.warning(f"Skipping non-object judgment: {str(item)[:100]}")
                continue
            try:
                judgments.append(PairJudgment.model_validate(item))
            except ValidationError as e:
                logger.warning(
                    f"Skipping malformed judgment {str(item)[:100]}: "
                    f"{e.error_count()} validation errors"
                )
        return judgments

    @staticmethod
    def _extract_items(response: Any) -> list[Any]:
        if isinstance(response, list):
            return response

        if isinstance(response, dict):
            for key in RESULT_KEYS:
                value = response.get(key)
                if isinstance(value, list):
                    return value
            # A single judgment object
            if "person_a" in response and "person_b" in response:
                return [response]

        raise InferenceParseError(
            f"Expected a JSON array of judgments, got {type(response).__name__}"
        )
