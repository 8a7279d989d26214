# cloudcore/auth/provider/factory.py
"""
지역(geography) 코드 → Identity 서비스 선택

고정 테이블로 지역 코드를 Identity 기본 URL(IdentityAuthority)에 매핑하고,
기본 URL별로 Provider 인스턴스를 한 번만 만들어 재사용합니다.

지역 코드 (대소문자 무시):
    dfw, ord, us → US
    lon          → LON

Usage:
    factory = IdentityProviderFactory()
    provider = factory.get("DFW")       # US Identity
    assert provider is factory.get("us")
"""

from __future__ import annotations

import logging
import threading
from enum import Enum

from cloudcore.rest import JsonRestService, RestService

from ..cache import UserAccessCache, get_shared_cache
from ..types import IdentityProvider, UnknownGeographyError
from .geographical import GeographicalIdentityProvider

logger = logging.getLogger(__name__)


class IdentityAuthority(Enum):
    """Identity 서비스 기본 URL"""

    US = "https://identity.api.rackspacecloud.com"
    LON = "https://lon.identity.api.rackspacecloud.com"

    @property
    def base_url(self) -> str:
        return self.value


GEOGRAPHY_AUTHORITIES: dict[str, IdentityAuthority] = {
    "dfw": IdentityAuthority.US,
    "ord": IdentityAuthority.US,
    "us": IdentityAuthority.US,
    "lon": IdentityAuthority.LON,
}


def authority_for(geo: str) -> IdentityAuthority:
    """지역 코드에 해당하는 IdentityAuthority

    Raises:
        UnknownGeographyError: 테이블에 없는 코드 (원래 입력값 포함)
    """
    authority = GEOGRAPHY_AUTHORITIES.get((geo or "").lower())
    if authority is None:
        raise UnknownGeographyError(geo)
    return authority


class IdentityProviderFactory:
    """지역별 IdentityProvider 생성/캐시

    생성된 모든 Provider는 같은 RestService와 UserAccessCache를 공유합니다.
    Provider 생성은 순수한 객체 조립이며 네트워크 호출이 없습니다.
    """

    def __init__(
        self,
        rest_service: RestService | None = None,
        cache: UserAccessCache | None = None,
    ):
        """IdentityProviderFactory 초기화

        Args:
            rest_service: HTTP 실행기 (기본: JsonRestService)
            cache: UserAccess 캐시 (기본: 프로세스 공유 인스턴스)
        """
        self.rest_service = rest_service if rest_service is not None else JsonRestService()
        self.cache = cache if cache is not None else get_shared_cache()
        self._providers: dict[IdentityAuthority, IdentityProvider] = {}
        self._lock = threading.Lock()

    def get(self, geo: str) -> IdentityProvider:
        """지역 코드에 묶인 IdentityProvider 반환

        Raises:
            UnknownGeographyError: 알 수 없는 지역 코드
        """
        authority = authority_for(geo)

        with self._lock:
            provider = self._providers.get(authority)
            if provider is None:
                logger.debug("IdentityProvider 생성: %s (%s)", authority.name, authority.base_url)
                provider = GeographicalIdentityProvider(
                    authority.base_url, self.rest_service, self.cache
                )
                self._providers[authority] = provider
            return provider

    def close(self) -> None:
        """캐시된 Provider 정리 (이후 get은 새 인스턴스 생성)"""
        with self._lock:
            self._providers.clear()

    def __enter__(self) -> IdentityProviderFactory:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
