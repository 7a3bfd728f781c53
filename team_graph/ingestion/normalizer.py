"""
Label Normalizer

사원마다 독립적으로 추출된 자유 텍스트 속성 라벨을 동의어 사전으로 정규화합니다.
- 완전 일치(exact match) 조회만 수행 (부분/유사 매칭 없음)
- 사전에 없는 라벨은 그대로 반환
- 노드 ID용 slug 생성 (공백/중점 → 밑줄, 소문자화)
"""

import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_SYNONYMS_PATH = Path(__file__).parent / "synonyms.yaml"

# 공백 문자와 중점(・)을 밑줄로 치환
_ID_SEPARATOR_PATTERN = re.compile(r"[\s・]")


def load_synonym_table(path: Path | str | None = None) -> dict[str, str]:
    """
    동의어 YAML 로드 → {alias: canonical} 평면 사전

    YAML 구조:
        category:
          main_term:
            canonical: (선택, 생략 시 main_term)
            aliases: [...]

    파일이 없거나 파싱에 실패하면 빈 사전을 반환합니다 (에러 아님).

    Args:
        path: 동의어 YAML 경로 (None이면 패키지 기본 사전)

    Returns:
        alias → canonical 매핑
    """
    synonyms_path = Path(path) if path is not None else DEFAULT_SYNONYMS_PATH

    if not synonyms_path.exists():
        logger.warning(f"Synonyms file not found: {synonyms_path}")
        return {}

    try:
        with open(synonyms_path, encoding="utf-8") as f:
            data: Any = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse synonyms YAML: {e}")
        return {}
    except UnicodeDecodeError as e:
        logger.error(f"Encoding error in synonyms file (expected UTF-8): {e}")
        return {}
    except OSError as e:
        logger.error(f"Failed to read synonyms file: {e}")
        return {}

    if not isinstance(data, dict):
        logger.error(f"Synonyms file must be a mapping: {synonyms_path}")
        return {}

    table: dict[str, str] = {}

    # _meta 제외한 카테고리 순회
    for category, entries in data.items():
        if str(category).startswith("_") or not isinstance(entries, dict):
            continue

        for main_term, info in entries.items():
            info = info if isinstance(info, dict) else {}
            canonical = str(info.get("canonical", main_term))
            terms = [str(main_term), *(str(a) for a in info.get("aliases", []) or [])]

            for term in terms:
                if term == canonical:
                    continue
                if term in table and table[term] != canonical:
                    logger.warning(
                        f"Conflicting synonym for '{term}': "
                        f"'{table[term]}' kept, '{canonical}' ignored ({category})"
                    )
                    continue
                table[term] = canonical

    logger.info(f"Synonyms loaded: {len(table)} aliases from {synonyms_path}")
    return table


class LabelNormalizer:
    """
    불변 동의어 사전을 가진 라벨 정규화기

    한 번 생성하여 GraphAssembler 등에 명시적으로 전달합니다.
    별칭 체인(a → b → c)은 생성 시점에 최종 정규 라벨로 풀어두므로
    normalize_label은 멱등입니다.

    사용 예시:
        normalizer = LabelNormalizer.from_yaml()
        normalizer.normalize_label("自己成長")   # "成長"
        normalizer.normalize_for_id("AI 技術")   # "ai_技術"
    """

    def __init__(self, synonyms: Mapping[str, str] | None = None):
        self._synonyms: Mapping[str, str] = MappingProxyType(
            self._resolve_chains(dict(synonyms or {}))
        )

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> "LabelNormalizer":
        """
        동의어 YAML에서 정규화기 생성

        순환 매핑이 있는 사전은 다른 파싱 오류와 마찬가지로 에러를 기록하고
        빈 사전으로 대체합니다 (그래프 빌드는 계속 진행).
        """
        table = load_synonym_table(path)
        try:
            return cls(table)
        except ValueError as e:
            logger.error(f"Invalid synonyms file, falling back to empty table: {e}")
            return cls()

    @property
    def synonyms(self) -> Mapping[str, str]:
        """읽기 전용 alias → canonical 매핑"""
        return self._synonyms

    def normalize_label(self, label: str) -> str:
        """정규 라벨 반환 (사전에 없으면 입력 그대로)"""
        return self._synonyms.get(label, label)

    def normalize_for_id(self, label: str) -> str:
        """노드 ID용 slug 반환"""
        canonical = self.normalize_label(label)
        return _ID_SEPARATOR_PATTERN.sub("_", canonical).lower()

    def canonicalize(self, labels: Iterable[str]) -> list[str]:
        """정규화 후 중복 제거 (첫 등장 순서 유지)"""
        return list(dict.fromkeys(self.normalize_label(label) for label in labels))

    @staticmethod
    def _resolve_chains(table: dict[str, str]) -> dict[str, str]:
        """
        별칭 체인을 최종 정규 라벨로 평탄화

        Raises:
            ValueError: 순환 매핑이 있는 경우
        """
        table = {alias: canonical for alias, canonical in table.items() if alias != canonical}
        resolved: dict[str, str] = {}
        for alias in table:
            seen = {alias}
            canonical = table[alias]
            while canonical in table:
                if canonical in seen:
                    raise ValueError(f"Circular synonym mapping detected at '{alias}'")
                seen.add(canonical)
                canonical = table[canonical]
            if canonical != alias:
                resolved[alias] = canonical
        return resolved
