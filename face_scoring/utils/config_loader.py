"""
설정 파일(config.yaml) 로더

기본 경로는 패키지의 config.yaml 이며 FACE_SCORING_CONFIG_PATH 환경 변수로 바꿀 수 있다.
파일 없음, 읽기 실패, YAML 문법 오류, 최상위가 매핑이 아닌 경우 모두 ConfigurationError.
"""
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .exceptions import ConfigurationError

CONFIG_ENV_VAR = 'FACE_SCORING_CONFIG_PATH'


def default_config_path() -> Path:
    """환경 변수 > 패키지 config.yaml"""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path(__file__).resolve().parent.parent / 'config.yaml'


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    YAML 설정 파일 읽기

    Args:
        path: 설정 파일 경로

    Returns:
        최상위 매핑 (빈 파일이면 빈 dict)

    Raises:
        ConfigurationError: 파일이 없거나 읽을 수 없거나 형식이 잘못된 경우
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(
            f"Config file not found: {path} (set {CONFIG_ENV_VAR} to use another file)"
        )

    try:
        with path.open('r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config root must be a mapping, got {type(data).__name__} in {path}"
        )
    return data


class ConfigSection:
    """
    중첩 매핑을 속성 / 점 경로로 읽는 래퍼

    Usage:
        section.console.level
        section.get('console.level', 'INFO')
    """

    def __init__(self, data: Dict[str, Any], name: str = ''):
        self._data = data
        self._name = name

    def _child(self, key: str, value: Any) -> Any:
        if isinstance(value, dict):
            return ConfigSection(value, f"{self._name}.{key}" if self._name else key)
        return value

    def __getattr__(self, key: str) -> Any:
        if key.startswith('_'):
            raise AttributeError(key)
        if key not in self._data:
            where = f"section '{self._name}'" if self._name else 'config'
            raise AttributeError(f"No key '{key}' in {where}")
        return self._child(key, self._data[key])

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        점(.) 구분 경로로 값 읽기

        Args:
            key_path: 예) 'analysis.min_denominator'
            default: 경로가 없을 때 값

        Returns:
            값 (dict 는 ConfigSection) 또는 default
        """
        value: Any = self._data
        for key in key_path.split('.'):
            if not isinstance(value, dict) or key not in value:
                return default
            value = value[key]
        return self._child(key_path, value)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)

    def __repr__(self):
        return f"ConfigSection({self._name or '<root>'}: {sorted(self._data)})"


class Config(ConfigSection):
    """config.yaml 전체 (최상위 섹션)"""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self.config_path = Path(config_path) if config_path is not None else default_config_path()
        super().__init__(load_yaml(self.config_path))

    def __repr__(self):
        return f"Config(path={self.config_path})"


_global_config: Optional[Config] = None


def get_config() -> Config:
    """프로세스 전역 Config (최초 호출 시 로드)"""
    global _global_config

    if _global_config is None:
        _global_config = Config()

    return _global_config
