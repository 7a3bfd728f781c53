"""
JSON Employee Loader Implementation

employees.json (사원 레코드 JSON 배열)을 읽어 EmployeeRecord로 변환합니다.
파일은 외부 수집 프로세스(Issue 파싱, Slack 동기화)가 생성하며 여기서는 읽기만 합니다.
"""

import json
import logging
from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from team_graph.domain.exceptions import MissingInputError
from team_graph.ingestion.loaders.base import BaseLoader
from team_graph.ingestion.models import EmployeeRecord

logger = logging.getLogger(__name__)


class JSONEmployeeLoader(BaseLoader):
    """
    JSON 배열 사원 데이터 로더

    - 파일이 없거나 JSON 배열이 아니면 MissingInputError
    - 개별 레코드 검증 실패(이름 없음 등)는 경고 후 건너뜀
    """

    def __init__(self, file_path: str | Path, encoding: str = "utf-8") -> None:
        self.file_path = Path(file_path)
        self.encoding = encoding

    @property
    def source_name(self) -> str:
        return self.file_path.name

    def load(self) -> Iterator[EmployeeRecord]:
        """JSON 파일을 읽어 EmployeeRecord 스트림 반환"""
        if not self.file_path.exists():
            raise MissingInputError(f"Employee data file not found: {self.file_path}")

        try:
            with open(self.file_path, encoding=self.encoding) as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MissingInputError(
                f"Employee data file is not valid JSON: {self.file_path} ({e})"
            ) from e

        if not isinstance(data, list):
            raise MissingInputError(
                f"Employee data must be a JSON array, got {type(data).__name__}"
            )

        for i, raw in enumerate(data):
            if not isinstance(raw, dict):
                logger.warning(f"Skipping non-object employee record at index {i}")
                continue
            try:
                yield EmployeeRecord.model_validate(raw)
            except ValidationError as e:
                logger.warning(
                    f"Skipping invalid employee record at index {i}: "
                    f"{e.error_count()} validation errors"
                )
