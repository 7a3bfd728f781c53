"""
Domain Exceptions

지식 그래프 빌드 과정에서 사용하는 예외 계층

- MissingInputError: 처리할 사원 데이터가 없음 (치명적, 출력 전에 중단)
- MissingCredentialsError: LLM 인증 정보 없음 (Phase 2만 건너뜀)
- InferenceRequestError: 배치 요청 실패 (해당 배치만 건너뜀)
- InferenceParseError: 배치 응답 파싱 실패 (해당 배치만 건너뜀)
"""


class TeamGraphError(Exception):
    """모든 도메인 예외의 기본 클래스"""

    def __init__(self, message: str, code: str = "TEAM_GRAPH_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class MissingInputError(TeamGraphError):
    """입력 사원 데이터가 없거나 읽을 수 없음"""

    def __init__(self, message: str):
        super().__init__(message, code="MISSING_INPUT")


class MissingCredentialsError(TeamGraphError):
    """관계 추론에 필요한 인증 정보가 없음"""

    def __init__(self, message: str = "LLM credentials are not configured"):
        super().__init__(message, code="MISSING_CREDENTIALS")


class InferenceRequestError(TeamGraphError):
    """관계 추론 요청 실패 (비정상 응답, 타임아웃 등)"""

    def __init__(self, message: str, code: str = "INFERENCE_REQUEST_ERROR"):
        super().__init__(message, code=code)


class LLMConnectionError(InferenceRequestError):
    """LLM 엔드포인트 연결 실패"""

    def __init__(self, message: str):
        super().__init__(message, code="LLM_CONNECTION_ERROR")


class LLMRateLimitError(InferenceRequestError):
    """LLM Rate Limit 초과"""

    def __init__(self, message: str):
        super().__init__(message, code="LLM_RATE_LIMIT")


class InferenceParseError(TeamGraphError):
    """관계 추론 응답을 해석할 수 없음 (JSON 아님, 잘린 배열 등)"""

    def __init__(self, message: str):
        super().__init__(message, code="INFERENCE_PARSE_ERROR")
