"""
LLM Repository

Azure OpenAI 호출을 캡슐화합니다.
- 모델 티어(LIGHT/HEAVY)별 배포명 선택
- openai 예외 → 도메인 예외 변환
- JSON 응답 파싱
"""

import json
import logging
from enum import Enum
from typing import Any

from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncAzureOpenAI,
    RateLimitError,
)

from team_graph.config import Settings
from team_graph.domain.exceptions import (
    InferenceParseError,
    InferenceRequestError,
    LLMConnectionError,
    LLMRateLimitError,
    MissingCredentialsError,
)

logger = logging.getLogger(__name__)


class ModelTier(str, Enum):
    """모델 티어"""

    LIGHT = "light"
    HEAVY = "heavy"


class LLMRepository:
    """
    Azure OpenAI 저장소

    클라이언트는 첫 호출 시점에 생성합니다 (인증 정보 검증 포함).
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._client: AsyncAzureOpenAI | None = None

    def _get_client(self) -> AsyncAzureOpenAI:
        """Azure OpenAI 클라이언트 (지연 생성)"""
        if self._client is None:
            if not self._settings.azure_openai_endpoint or not self._settings.azure_openai_api_key:
                raise MissingCredentialsError(
                    "azure_openai_endpoint and azure_openai_api_key are required"
                )
            self._client = AsyncAzureOpenAI(
                api_key=self._settings.azure_openai_api_key,
                api_version=self._settings.azure_openai_api_version,
                azure_endpoint=self._settings.azure_openai_endpoint,
                timeout=self._settings.relationship_inference.request_timeout_seconds,
                max_retries=0,
            )
        return self._client

    def _get_deployment(self, model_tier: ModelTier) -> str:
        """티어별 배포명"""
        if model_tier == ModelTier.HEAVY:
            return self._settings.heavy_model_deployment
        return self._settings.light_model_deployment

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        model_tier: ModelTier = ModelTier.LIGHT,
        temperature: float | None = None,
        max_completion_tokens: int | None = None,
        response_format: dict[str, Any] | None = None,
    ) -> str:
        """
        텍스트 생성

        Raises:
            LLMRateLimitError: Rate Limit 초과
            LLMConnectionError: 연결 실패
            InferenceRequestError: 비정상 상태 코드 / 타임아웃
            InferenceParseError: 응답 choices 없음
        """
        client = self._get_client()

        kwargs: dict[str, Any] = {
            "model": self._get_deployment(model_tier),
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": (
                temperature if temperature is not None else self._settings.llm_temperature
            ),
            "max_completion_tokens": max_completion_tokens or self._settings.llm_max_tokens,
        }
        if response_format is not None:
            kwargs["response_format"] = response_format

        try:
            response = await client.chat.completions.create(**kwargs)
        except RateLimitError as e:
            logger.warning(f"LLM rate limit exceeded: {e}")
            raise LLMRateLimitError(f"Rate limit exceeded: {e}") from e
        except APITimeoutError as e:
            raise InferenceRequestError(f"LLM request timed out: {e}") from e
        except APIConnectionError as e:
            raise LLMConnectionError(f"Failed to connect to LLM: {e}") from e
        except APIStatusError as e:
            raise InferenceRequestError(
                f"LLM API error (status {e.status_code}): {e.message}"
            ) from e

        # 컨텐츠 필터링 등으로 choices가 비어있을 수 있음
        if not response.choices:
            raise InferenceParseError("No response choices returned from LLM")

        return response.choices[0].message.content or ""

    async def generate_json(
        self,
        system_prompt: str,
        user_prompt: str,
        model_tier: ModelTier = ModelTier.LIGHT,
        temperature: float | None = None,
        max_completion_tokens: int | None = None,
    ) -> Any:
        """
        JSON 생성 (json_object 응답 포맷)

        Returns:
            파싱된 JSON 값 (빈 응답이면 {})

        Raises:
            InferenceParseError: JSON으로 해석할 수 없는 응답
        """
        content = await self.generate(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            model_tier=model_tier,
            temperature=temperature,
            max_completion_tokens=max_completion_tokens,
            response_format={"type": "json_object"},
        )

        if not content.strip():
            return {}

        try:
            return json.loads(_strip_code_fence(content))
        except json.JSONDecodeError as e:
            logger.debug(f"Unparsable LLM content: {content[:200]}")
            raise InferenceParseError(f"Invalid JSON in LLM response: {e}") from e

    async def close(self) -> None:
        """클라이언트 종료"""
        if self._client is not None:
            await self._client.close()
            self._client = None


def _strip_code_fence(content: str) -> str:
    """```json ... ``` 블록으로 감싼 응답 정리"""
    text = content.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()
