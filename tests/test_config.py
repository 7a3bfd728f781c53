"""
Config 단위 테스트

실행 방법:
    pytest tests/test_config.py -v
"""

import pytest
from pydantic import ValidationError

from team_graph.config import RelationshipInferenceSettings, Settings


class TestSettingsValidation:
    """Settings 유효성 검사 테스트"""

    def test_default_settings(self):
        """기본 설정 테스트"""
        settings = Settings(
            environment="development",
            _env_file=None,  # .env 파일 무시
        )
        assert settings.app_name == "Team Knowledge Graph"
        assert settings.environment == "development"
        assert settings.is_production is False
        assert settings.output_path.name == "knowledge-graph.json"
        assert settings.synonyms_path is None

    def test_log_level_validation_valid(self):
        """유효한 로그 레벨 테스트"""
        for level in ["debug", "INFO", "Warning", "ERROR", "critical"]:
            settings = Settings(log_level=level, _env_file=None)
            assert settings.log_level == level.upper()

    def test_log_level_validation_invalid(self):
        """유효하지 않은 로그 레벨 테스트"""
        with pytest.raises(ValidationError) as exc_info:
            Settings(log_level="INVALID", _env_file=None)
        assert "log_level" in str(exc_info.value)

    def test_environment_validation_valid(self):
        """유효한 환경 설정 테스트"""
        for env in ["development", "staging", "production", "test"]:
            # production은 엔드포인트가 있어야 함
            if env == "production":
                settings = Settings(
                    environment=env,
                    azure_openai_endpoint="https://test.openai.azure.com",
                    _env_file=None,
                )
            else:
                settings = Settings(environment=env, _env_file=None)
            assert settings.environment == env

    def test_environment_validation_invalid(self):
        """유효하지 않은 환경 설정 테스트"""
        with pytest.raises(ValidationError) as exc_info:
            Settings(environment="invalid_env", _env_file=None)
        assert "environment" in str(exc_info.value)

    def test_llm_temperature_bounds(self):
        """LLM 온도 경계 테스트"""
        settings = Settings(llm_temperature=0.0, _env_file=None)
        assert settings.llm_temperature == 0.0

        settings = Settings(llm_temperature=2.0, _env_file=None)
        assert settings.llm_temperature == 2.0

        with pytest.raises(ValidationError):
            Settings(llm_temperature=-0.1, _env_file=None)

        with pytest.raises(ValidationError):
            Settings(llm_temperature=2.1, _env_file=None)


class TestProductionSettings:
    """프로덕션 필수 설정 테스트"""

    def test_production_requires_endpoint(self):
        """관계 추론이 켜진 프로덕션은 엔드포인트 필수"""
        with pytest.raises(ValidationError) as exc_info:
            Settings(environment="production", azure_openai_endpoint="", _env_file=None)
        assert "azure_openai_endpoint" in str(exc_info.value)

    def test_production_without_inference(self):
        """관계 추론이 꺼져 있으면 엔드포인트 없이도 허용"""
        settings = Settings(
            environment="production",
            azure_openai_endpoint="",
            relationship_inference={"enabled": False},
            _env_file=None,
        )
        assert settings.is_production is True


class TestLLMCredentials:
    """LLM 인증 정보 판정 테스트"""

    def test_has_credentials(self):
        settings = Settings(
            azure_openai_endpoint="https://test.openai.azure.com",
            azure_openai_api_key="test-key",
            _env_file=None,
        )
        assert settings.has_llm_credentials is True

    def test_missing_api_key(self):
        settings = Settings(
            azure_openai_endpoint="https://test.openai.azure.com",
            azure_openai_api_key=None,
            _env_file=None,
        )
        assert settings.has_llm_credentials is False

    def test_missing_endpoint(self):
        settings = Settings(
            azure_openai_endpoint="",
            azure_openai_api_key="test-key",
            _env_file=None,
        )
        assert settings.has_llm_credentials is False


class TestRelationshipInferenceSettings:
    """관계 추론 설정 테스트"""

    def test_defaults(self):
        """기본값: 5페어/배치, 1.2초 대기, 임계값 5"""
        config = RelationshipInferenceSettings()
        assert config.enabled is True
        assert config.batch_size == 5
        assert config.batch_delay_seconds == 1.2
        assert config.score_threshold == 5

    def test_batch_size_bounds(self):
        """배치 크기 경계 테스트"""
        with pytest.raises(ValidationError):
            RelationshipInferenceSettings(batch_size=0)

        with pytest.raises(ValidationError):
            RelationshipInferenceSettings(batch_size=51)

    def test_score_threshold_bounds(self):
        """임계값은 0 ~ 10"""
        assert RelationshipInferenceSettings(score_threshold=0).score_threshold == 0
        assert RelationshipInferenceSettings(score_threshold=10).score_threshold == 10

        with pytest.raises(ValidationError):
            RelationshipInferenceSettings(score_threshold=11)

    def test_model_tier(self):
        """판정 모델 티어: 기본 heavy, light / heavy 외 값은 거부"""
        assert RelationshipInferenceSettings().model_tier == "heavy"
        assert RelationshipInferenceSettings(model_tier="light").model_tier == "light"

        with pytest.raises(ValidationError):
            RelationshipInferenceSettings(model_tier="medium")

    def test_nested_env_override(self, monkeypatch):
        """중첩 환경변수 (RELATIONSHIP_INFERENCE__BATCH_SIZE)"""
        monkeypatch.setenv("RELATIONSHIP_INFERENCE__BATCH_SIZE", "3")
        settings = Settings(_env_file=None)
        assert settings.relationship_inference.batch_size == 3
