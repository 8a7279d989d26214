# cloudcore/auth/provider/geographical.py
"""
지역별 Identity 서비스에 인증하는 기본 IdentityProvider

하나의 인스턴스는 하나의 Identity 기본 URL에 묶입니다.
RestService와 UserAccessCache는 외부에서 주입받아 다른 Provider와 공유합니다.

인증 흐름:
    1. cache.get(identity.fingerprint(), refresh)
    2. refresh: POST {base_url}/v2.0/tokens (identity.to_auth_payload())
    3. 응답의 access 문서 → UserAccess
"""

from __future__ import annotations

import json
import logging
from urllib.parse import urljoin

from cloudcore.config import settings
from cloudcore.rest import HttpMethod, RestService, build_default_request_settings

from ..cache import UserAccessCache
from ..types import CloudIdentity, IdentityProvider, UserAccess, UserAuthenticationError

logger = logging.getLogger(__name__)


class GeographicalIdentityProvider(IdentityProvider):
    """지역 Identity 서비스 기반 Provider

    Attributes:
        base_url: Identity 서비스 기본 URL
    """

    def __init__(
        self,
        base_url: str,
        rest_service: RestService,
        cache: UserAccessCache,
    ):
        self.base_url = base_url.rstrip("/") + "/"
        self._rest_service = rest_service
        self._cache = cache

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.base_url!r})"

    @property
    def tokens_url(self) -> str:
        return urljoin(self.base_url, settings.IDENTITY_TOKENS_PATH)

    def authenticate(self, identity: CloudIdentity) -> UserAccess | None:
        return self._get_user_access(identity, force_refresh=False)

    def get_token(self, identity: CloudIdentity, force_refresh: bool = False) -> str:
        user_access = self._get_user_access(identity, force_refresh=force_refresh)
        if user_access is None or not user_access.token.id:
            raise UserAuthenticationError(
                f"토큰을 발급받지 못했습니다: {identity.username}"
            )
        return user_access.token.id

    def _get_user_access(self, identity: CloudIdentity, force_refresh: bool) -> UserAccess | None:
        # force_refresh이면 캐시 항목을 새 결과로 덮어씀
        return self._cache.get(
            identity.fingerprint(),
            lambda: self._request_user_access(identity),
            force_refresh=force_refresh,
        )

    def _request_user_access(self, identity: CloudIdentity) -> UserAccess | None:
        logger.info("인증 요청: %s (%s)", identity.username, self.base_url)

        response = self._rest_service.execute(
            self.tokens_url,
            HttpMethod.POST,
            json.dumps(identity.to_auth_payload()),
            {},
            build_default_request_settings(),
        )

        if not response.ok or not isinstance(response.data, dict):
            logger.warning(
                "인증 실패: %s (status=%s)", identity.username, response.status_code
            )
            return None

        user_access = UserAccess.from_dict(response.data)
        if user_access is None:
            logger.warning("인증 응답에 access 문서가 없습니다: %s", identity.username)
        return user_access
