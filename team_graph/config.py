"""
애플리케이션 설정 모듈

Pydantic Settings를 활용한 환경변수 기반 설정 관리
- 타입 검증 자동화
- .env 파일 지원
- 관계 추론(Phase 2) 설정 분리
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# 프로젝트 루트 디렉토리 (team_graph/config.py 기준으로 한 단계 상위)
PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"


class RelationshipInferenceSettings(BaseModel):
    """
    관계 추론(Phase 2) 설정

    사원 페어를 배치로 묶어 LLM에 판정을 요청할 때의 설정
    """

    enabled: bool = Field(
        default=True,
        description="AI 관계 추론 활성화 여부 (--skip-ai 로도 끌 수 있음)",
    )
    batch_size: int = Field(
        default=5,
        ge=1,
        le=50,
        description="한 번의 요청에 담을 사원 페어 수",
    )
    batch_delay_seconds: float = Field(
        default=1.2,
        ge=0.0,
        description="배치 사이 대기 시간 (초, Rate Limit 대응)",
    )
    score_threshold: int = Field(
        default=5,
        ge=0,
        le=10,
        description="엣지로 채택할 최소 점수 (0 ~ 10)",
    )
    request_timeout_seconds: float = Field(
        default=60.0,
        ge=1.0,
        description="배치 요청 타임아웃 (초)",
    )
    model_tier: Literal["light", "heavy"] = Field(
        default="heavy",
        description="관계 판정에 사용할 모델 티어 (light / heavy)",
    )


class Settings(BaseSettings):
    """
    애플리케이션 전역 설정

    환경변수 또는 .env 파일에서 값을 로드합니다.
    """

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    # ============================================
    # 애플리케이션 설정
    # ============================================
    app_name: str = Field(default="Team Knowledge Graph", description="애플리케이션 이름")
    app_version: str = Field(default="0.1.0", description="애플리케이션 버전")
    environment: str = Field(default="development", description="실행 환경")

    # ============================================
    # 데이터 경로 설정
    # ============================================
    employees_path: Path = Field(
        default=PROJECT_ROOT / "data" / "employees.json",
        description="입력 사원 데이터(JSON 배열) 경로",
    )
    output_path: Path = Field(
        default=PROJECT_ROOT / "data" / "knowledge-graph.json",
        description="출력 지식 그래프 JSON 경로",
    )
    report_path: Path = Field(
        default=PROJECT_ROOT / "docs" / "KNOWLEDGE_GRAPH.md",
        description="Markdown 리포트 출력 경로",
    )
    synonyms_path: Path | None = Field(
        default=None,
        description="동의어 사전 YAML 경로 (None이면 패키지 기본 사전 사용)",
    )

    # ============================================
    # Azure OpenAI 설정 (모델 버전 비의존적)
    # ============================================
    azure_openai_endpoint: str = Field(
        default="",
        description="Azure OpenAI 엔드포인트 URL",
    )
    azure_openai_api_key: str | None = Field(
        default=None,
        description="Azure OpenAI API 키",
    )
    azure_openai_api_version: str = Field(
        default="2024-10-21",
        description="Azure OpenAI API 버전",
    )

    # 배포 이름 (특정 모델 버전이 아닌 Azure Portal 배포 이름)
    light_model_deployment: str = Field(
        default="gpt-4o-mini",
        description="경량 모델 배포명 (relationship_inference.model_tier=light 시 사용)",
    )
    heavy_model_deployment: str = Field(
        default="gpt-4o",
        description="관계 판정용 모델 배포명 (튜닝 모델 배포명으로 교체 가능)",
    )

    # LLM 공통 파라미터
    llm_temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="LLM 응답 온도",
    )
    llm_max_tokens: int = Field(
        default=4000,
        ge=1,
        le=16000,
        description="LLM 최대 토큰 수",
    )

    # ============================================
    # 관계 추론 설정
    # ============================================
    relationship_inference: RelationshipInferenceSettings = Field(
        default_factory=RelationshipInferenceSettings,
        description="AI 관계 추론(Phase 2) 설정",
    )

    # ============================================
    # 로깅 설정
    # ============================================
    log_level: str = Field(
        default="INFO",
        description="로깅 레벨",
    )
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="로그 포맷",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """로그 레벨 유효성 검사"""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper_v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """환경 유효성 검사"""
        valid_envs = {"development", "staging", "production", "test"}
        lower_v = v.lower()
        if lower_v not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}")
        return lower_v

    @property
    def is_production(self) -> bool:
        """프로덕션 환경 여부"""
        return self.environment == "production"

    @property
    def has_llm_credentials(self) -> bool:
        """관계 추론에 필요한 엔드포인트와 API 키가 모두 설정되었는지 여부"""
        return bool(self.azure_openai_endpoint) and bool(self.azure_openai_api_key)

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """
        프로덕션 환경 필수 설정 검증

        관계 추론이 켜져 있으면 엔드포인트가 반드시 지정되어야 합니다.
        """
        if self.environment == "production" and self.relationship_inference.enabled:
            if not self.azure_openai_endpoint:
                raise ValueError(
                    "Production environment requires azure_openai_endpoint "
                    "when relationship_inference is enabled"
                )
            if not self.azure_openai_api_key:
                logger.warning(
                    "azure_openai_api_key is not set. "
                    "Relationship inference will be skipped."
                )
        return self


@lru_cache
def get_settings() -> Settings:
    """
    설정 싱글톤 인스턴스 반환

    lru_cache를 사용하여 프로세스 생명주기 동안
    단일 Settings 인스턴스를 유지합니다.
    """
    return Settings()
