"""
Employee Loader Interface (Adapter Pattern)

모든 사원 데이터 소스 로더가 구현해야 할 추상 기본 클래스입니다.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from team_graph.ingestion.models import EmployeeRecord


class BaseLoader(ABC):
    """
    사원 데이터 로더 추상 클래스

    데이터 소스에 관계없이 항상 EmployeeRecord의 Iterator를 반환해야 합니다.
    """

    @property
    @abstractmethod
    def source_name(self) -> str:
        """출력 메타데이터에 기록할 소스 식별자"""

    @abstractmethod
    def load(self) -> Iterator[EmployeeRecord]:
        """
        데이터 소스에서 데이터를 읽어 EmployeeRecord 객체로 변환하여 반환
        """
