"""
공통 테스트 Fixture

그래프 빌드/관계 추론 테스트에서 사용하는 사원 데이터와 설정을 정의합니다.
"""

import pytest

from team_graph.config import Settings
from team_graph.ingestion.normalizer import LabelNormalizer

from tests.helpers import make_employee


@pytest.fixture
def normalizer():
    """기본 동의어 사전을 사용하는 정규화기"""
    return LabelNormalizer.from_yaml()


@pytest.fixture
def scenario_employees():
    """AWS / 自己成長 시나리오 (A, B)"""
    return [
        make_employee("田中", strengths=["AWS", "インフラ設計"], values=["自己成長"]),
        make_employee("佐藤", strengths=["AWS"], values=["成長"]),
    ]


@pytest.fixture
def sample_employees():
    """활성 4명 + 비활성 1명"""
    return [
        make_employee(
            "田中",
            job="インフラエンジニア",
            strengths=["AWS", "インフラ設計", "コミュニケーション能力"],
            values=["自己成長", "貢献感"],
            interests=["生成AI"],
            motivations=["新しい技術の習得"],
            summary="クラウド基盤の設計と運用を担当",
            personality={"openness": 8, "conscientiousness": 7},
        ),
        make_employee(
            "佐藤",
            job="バックエンドエンジニア",
            strengths=["AWS", "Python"],
            values=["成長"],
            interests=["AI活用", "データ分析"],
            motivations=["チームに貢献すること"],
        ),
        make_employee(
            "鈴木",
            job="デザイナー",
            strengths=["UIデザイン", "コミュニケーション"],
            values=["貢献"],
            interests=["ユーザー体験"],
        ),
        make_employee(
            "高橋",
            job="PM",
            strengths=["進行管理"],
            values=["誠実さ"],
        ),
        make_employee(
            "伊藤",
            job="エンジニア",
            strengths=["AWS"],
            values=["成長"],
            is_active=False,
        ),
    ]


@pytest.fixture
def test_settings():
    """.env를 무시하는 테스트 설정 (인증 정보 없음)"""
    return Settings(
        environment="test",
        azure_openai_endpoint="",
        azure_openai_api_key=None,
        _env_file=None,
    )


@pytest.fixture
def llm_settings():
    """인증 정보가 있는 테스트 설정 (배치 간 대기 없음)"""
    return Settings(
        environment="test",
        azure_openai_endpoint="https://test.openai.azure.com",
        azure_openai_api_key="test-key",
        relationship_inference={"batch_delay_seconds": 0.0},
        _env_file=None,
    )
