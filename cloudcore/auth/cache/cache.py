"""
cloudcore/auth/cache/cache.py - 인증 결과 캐시 구현

- CacheEntry: 만료 시간을 가진 제네릭 캐시 항목
- UserAccessCache: identity fingerprint → UserAccess 메모리 캐시
- get_shared_cache: 프로세스 전역 공유 인스턴스

설계 원칙:
- 모든 지역(geography)의 Provider가 하나의 캐시를 참조로 공유
- 캐시는 자체 Lock으로 동시성을 보장, 호출자는 잠금을 신경쓰지 않음
- 토큰 만료 시간은 Identity 응답의 expires 값을 따름
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Generic, Optional, TypeVar

from cloudcore.config import settings

from ..types import UserAccess

logger = logging.getLogger(__name__)

# =============================================================================
# Generic Cache Entry
# =============================================================================

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    """캐시 항목을 나타내는 제네릭 데이터 클래스

    Attributes:
        value: 캐시된 값
        created_at: 생성 시간 (UTC)
        expires_at: 만료 시간 (UTC, None이면 만료되지 않음)
    """

    value: T
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: Optional[datetime] = None

    def is_expired(self, buffer_seconds: int = 60) -> bool:
        """캐시 항목이 만료되었는지 확인

        Args:
            buffer_seconds: 만료 전 버퍼 시간 (초) - 기본 1분

        Returns:
            True if 만료됨, False otherwise
        """
        if self.expires_at is None:
            return False

        buffer = timedelta(seconds=buffer_seconds)
        return datetime.now(timezone.utc) >= (self.expires_at - buffer)

    def remaining_seconds(self) -> Optional[int]:
        """남은 시간을 초 단위로 반환

        Returns:
            남은 초 또는 None (만료되지 않는 경우)
        """
        if self.expires_at is None:
            return None

        remaining = self.expires_at - datetime.now(timezone.utc)
        return max(0, int(remaining.total_seconds()))


# =============================================================================
# User Access Cache
# =============================================================================


class UserAccessCache:
    """메모리 기반 UserAccess 캐시

    키는 CloudIdentity.fingerprint() 값입니다.
    항목의 만료 시간은 UserAccess 토큰의 만료 시간을 그대로 사용합니다.

    Thread-safe 구현. refresh 콜백(네트워크 호출)은 Lock 밖에서 실행되므로
    같은 identity에 대한 동시 갱신이 겹칠 수 있으며, 마지막 결과가 저장됩니다.
    """

    def __init__(self, buffer_seconds: Optional[int] = None):
        """UserAccessCache 초기화

        Args:
            buffer_seconds: 만료 전 버퍼 (초) - None이면 설정값 사용
        """
        self._cache: Dict[str, CacheEntry[UserAccess]] = {}
        self._lock = threading.RLock()
        self._buffer_seconds = (
            settings.TOKEN_EXPIRY_BUFFER_SECONDS if buffer_seconds is None else buffer_seconds
        )

    def peek(self, key: str) -> Optional[UserAccess]:
        """유효한 캐시 값 조회 (갱신하지 않음)"""
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._buffer_seconds):
                logger.debug("UserAccess 캐시 만료: key=%s…", key[:8])
                del self._cache[key]
                return None
            logger.debug(
                "UserAccess 캐시 적중: key=%s… 남은 시간=%s초", key[:8], entry.remaining_seconds()
            )
            return entry.value

    def get(
        self,
        key: str,
        refresh_callback: Callable[[], Optional[UserAccess]],
        force_refresh: bool = False,
    ) -> Optional[UserAccess]:
        """캐시 조회, 없거나 만료됐으면 refresh_callback으로 갱신

        Args:
            key: identity fingerprint
            refresh_callback: 새 UserAccess를 만드는 함수
            force_refresh: True이면 캐시를 무시하고 항상 갱신

        Returns:
            UserAccess 또는 None (갱신 결과가 None인 경우)
        """
        if not force_refresh:
            cached = self.peek(key)
            if cached is not None:
                return cached

        logger.debug("UserAccess 캐시 갱신: key=%s… force=%s", key[:8], force_refresh)
        value = refresh_callback()
        if value is not None:
            self.set(key, value)
        return value

    def set(self, key: str, value: UserAccess) -> None:
        """UserAccess 저장 (토큰 만료 시간 기준)"""
        with self._lock:
            self._cache[key] = CacheEntry(value=value, expires_at=value.token.expires)

    def invalidate(self, key: str) -> bool:
        """특정 identity 캐시 무효화

        Returns:
            True if 삭제됨
        """
        with self._lock:
            if key in self._cache:
                del self._cache[key]
                return True
            return False

    def clear(self) -> None:
        """모든 캐시 클리어"""
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        """유효한 캐시 항목 수"""
        with self._lock:
            # 만료된 항목 제외하고 카운트
            expired_keys = [
                key
                for key, entry in self._cache.items()
                if entry.is_expired(self._buffer_seconds)
            ]
            # 만료된 항목 정리
            for key in expired_keys:
                del self._cache[key]
            return len(self._cache)


# =============================================================================
# 공유 인스턴스
# =============================================================================

_shared_cache: Optional[UserAccessCache] = None
_shared_lock = threading.Lock()


def get_shared_cache() -> UserAccessCache:
    """프로세스 전역 공유 UserAccessCache 반환

    IdentityProviderFactory에서 캐시가 주입되지 않았을 때만 사용합니다.
    """
    global _shared_cache

    with _shared_lock:
        if _shared_cache is None:
            _shared_cache = UserAccessCache()
        return _shared_cache
