"""
cloudcore/config.py - 중앙 설정 관리

라이브러리 전체에서 사용하는 기본값과 환경변수 헬퍼를 모아둡니다.

포함 항목:
    - Settings: 불변 설정 데이터클래스 (모듈 전역 `settings` 인스턴스)
    - LogConfig: 로깅 설정 (환경변수 LOG_LEVEL, LOG_FORMAT)
    - get_env_bool / get_env_int: 환경변수 타입 변환
    - get_default_region: 기본 리전 (CLOUD_REGION)
    - get_version: 패키지 버전

Usage:
    from cloudcore.config import settings, get_default_region

    retry_count = settings.DEFAULT_RETRY_COUNT  # 2
    region = get_default_region()
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from cloudcore.exceptions import ConfigError

__version__ = "0.1.0"

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """라이브러리 기본 설정 (불변)"""

    # REST 호출 기본값
    DEFAULT_RETRY_COUNT: int = 2
    DEFAULT_RETRY_DELAY_MS: int = 200
    DEFAULT_NON200_SUCCESS_CODES: tuple[int, ...] = (401, 409)
    HTTP_TIMEOUT_SECONDS: int = 30
    USER_AGENT: str = f"cloudcore/{__version__}"

    # 인증
    AUTH_HEADER: str = "X-Auth-Token"
    TOKEN_EXPIRY_BUFFER_SECONDS: int = 60
    IDENTITY_TOKENS_PATH: str = "v2.0/tokens"


settings = Settings()


# =============================================================================
# 환경변수 헬퍼
# =============================================================================


def get_env_bool(name: str, default: bool = False) -> bool:
    """환경변수를 bool로 변환

    알 수 없는 값이면 default를 반환합니다.
    """
    value = os.environ.get(name)
    if value is None:
        return default

    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


def get_env_int(name: str, default: int) -> int:
    """환경변수를 int로 변환

    Raises:
        ConfigError: 값이 있지만 정수가 아닌 경우
    """
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigError(name, f"정수가 아닙니다: {value!r}", cause=e) from e


def get_default_region() -> str | None:
    """기본 리전 반환 (CLOUD_REGION 환경변수)"""
    region = os.environ.get("CLOUD_REGION", "").strip()
    return region or None


def get_http_timeout() -> int:
    """HTTP 타임아웃 (초) - CLOUDCORE_HTTP_TIMEOUT으로 덮어쓰기 가능"""
    return get_env_int("CLOUDCORE_HTTP_TIMEOUT", settings.HTTP_TIMEOUT_SECONDS)


def get_version() -> str:
    """패키지 버전 문자열 반환"""
    return __version__


# =============================================================================
# 로깅 설정
# =============================================================================


@dataclass
class LogConfig:
    """로깅 설정

    Attributes:
        level: 로그 레벨 이름
        format: 로그 포맷 문자열
        date_format: 날짜 포맷
    """

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    handlers: list[logging.Handler] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> LogConfig:
        """환경변수에서 로드 (LOG_LEVEL, LOG_FORMAT)"""
        config = cls()
        level = os.environ.get("LOG_LEVEL")
        if level:
            config.level = level.upper()
        fmt = os.environ.get("LOG_FORMAT")
        if fmt:
            config.format = fmt
        return config

    def configure_logging(self) -> None:
        """루트 로거에 설정 적용"""
        level = logging.getLevelName(self.level)
        if not isinstance(level, int):
            level = logging.INFO

        logging.basicConfig(
            level=level,
            format=self.format,
            datefmt=self.date_format,
            handlers=self.handlers or None,
            force=True,
        )

        # urllib3 연결 로그 노이즈 제한
        logging.getLogger("urllib3.connectionpool").setLevel(max(level, logging.WARNING))
