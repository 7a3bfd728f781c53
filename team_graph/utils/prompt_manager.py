"""
Prompt Manager

YAML 파일로 관리되는 프롬프트 템플릿(system/user)을 로드합니다.
"""

import logging
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_PROMPTS_DIR = Path(__file__).parent.parent / "prompts"


class PromptManager:
    """
    프롬프트 템플릿 로더 (인스턴스 단위 캐시)

    사용 예시:
        manager = PromptManager()
        prompt = manager.load_prompt("relationship_judgment")
        user_prompt = prompt["user"].format(pair_descriptions=...)
    """

    def __init__(self, prompts_dir: str | Path | None = None) -> None:
        self._prompts_dir = Path(prompts_dir) if prompts_dir else DEFAULT_PROMPTS_DIR
        self._cache: dict[str, dict[str, str]] = {}

    def load_prompt(self, name: str, use_cache: bool = True) -> dict[str, str]:
        """
        프롬프트 로드

        Args:
            name: 프롬프트 이름 (확장자 제외 파일명)
            use_cache: 캐시 사용 여부

        Returns:
            {"system": ..., "user": ...}

        Raises:
            FileNotFoundError: 프롬프트 파일이 없는 경우
            ValueError: system/user 키가 없는 경우
        """
        if use_cache and name in self._cache:
            return self._cache[name]

        prompt_path = self._prompts_dir / f"{name}.yaml"
        if not prompt_path.exists():
            raise FileNotFoundError(f"Prompt file not found: {prompt_path}")

        with open(prompt_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict) or "system" not in data or "user" not in data:
            raise ValueError(f"Prompt '{name}' must define 'system' and 'user'")

        prompt = {"system": str(data["system"]), "user": str(data["user"])}
        self._cache[name] = prompt
        logger.debug(f"Prompt loaded: {prompt_path}")
        return prompt
