"""
Domain Package

도메인 예외 정의
"""

from team_graph.domain.exceptions import (
    InferenceParseError,
    InferenceRequestError,
    LLMConnectionError,
    LLMRateLimitError,
    MissingCredentialsError,
    MissingInputError,
    TeamGraphError,
)

__all__ = [
    "TeamGraphError",
    "MissingInputError",
    "MissingCredentialsError",
    "InferenceRequestError",
    "InferenceParseError",
    "LLMConnectionError",
    "LLMRateLimitError",
]
