"""
cloudcore/providers/base.py - 인증된 REST 호출 실행기

서비스 클라이언트(compute, storage 등)의 기반 클래스입니다.

주요 기능:
    - execute_rest_request: 토큰 주입 → 실행 → 401이면 토큰 갱신 후 1회 재시도
    - get_service_endpoint: 서비스 카탈로그에서 이름 + 리전으로 엔드포인트 조회
    - serialize_body: 요청 본문 JSON 직렬화 (null 필드 생략, RawJson은 그대로)

401 재시도 규칙:
    1차 시도가 401이고 is_retry=False일 때만 get_token(force_refresh=True)로
    새 토큰을 받아 is_retry=True로 한 번 더 시도합니다.
    두 번째 401은 그대로 호출자에게 반환됩니다 (최대 2회 호출).
"""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Callable, Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any
from urllib.parse import urljoin, urlparse

from cloudcore.auth.types import (
    CloudIdentity,
    IdentityProvider,
    RegionAccessError,
    ServiceAccessError,
    UserAuthenticationError,
)
from cloudcore.config import settings
from cloudcore.exceptions import is_unauthorized
from cloudcore.rest import (
    HttpMethod,
    RawJson,
    RequestSettings,
    Response,
    RestService,
    build_default_request_settings,
)

logger = logging.getLogger(__name__)


# =============================================================================
# 본문 직렬화
# =============================================================================


def _to_plain(value: Any) -> Any:
    if isinstance(value, (Enum, date)):
        # _json_default에서 변환
        return value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if hasattr(value, "__dict__") and not isinstance(value, type):
        # 일반 객체는 공개 속성만
        return {k: v for k, v in vars(value).items() if not k.startswith("_")}
    return value


def _json_default(value: Any) -> Any:
    """json.dumps가 모르는 값 변환 (datetime → ISO 8601, Enum → value)"""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _strip_nulls(value: Any) -> Any:
    """dict의 None 값 필드를 재귀적으로 제거 (리스트 원소 None은 유지)"""
    value = _to_plain(value)
    if isinstance(value, Mapping):
        return {k: _strip_nulls(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_strip_nulls(v) for v in value]
    return value


def serialize_body(body: Any) -> str | None:
    """요청 본문을 JSON 문자열로 변환

    Args:
        body: None, RawJson, dataclass, to_dict()를 가진 객체, 일반 객체, dict/list 등

    Returns:
        JSON 문자열 또는 None (본문 없음)
    """
    if body is None:
        return None
    if isinstance(body, RawJson):
        return body.text
    return json.dumps(_strip_nulls(body), default=_json_default)


def _mask(token: str) -> str:
    return f"{token[:4]}…" if token else "<empty>"


# =============================================================================
# ProviderBase
# =============================================================================


class ProviderBase:
    """인증된 REST 호출의 기반 클래스

    Attributes:
        base_url: 상대 경로를 붙일 서비스 기본 URL
    """

    def __init__(
        self,
        base_url: str | None,
        identity_provider: IdentityProvider,
        rest_service: RestService,
    ):
        self.base_url = base_url
        self._identity_provider = identity_provider
        self._rest_service = rest_service

    @property
    def identity_provider(self) -> IdentityProvider:
        return self._identity_provider

    def _resolve_url(self, path_or_uri: str) -> str:
        """상대 경로는 base_url에 붙이고, 절대 URI는 그대로 사용"""
        parsed = urlparse(path_or_uri)
        if parsed.scheme and parsed.netloc:
            return path_or_uri
        if not self.base_url:
            raise ValueError(f"base_url이 없어 상대 경로를 처리할 수 없습니다: {path_or_uri}")
        return urljoin(self.base_url, path_or_uri)

    def execute_rest_request(
        self,
        path_or_uri: str,
        method: HttpMethod,
        body: Any,
        identity: CloudIdentity,
        is_retry: bool = False,
        token: str | None = None,
        request_settings: RequestSettings | None = None,
        response_type: Callable[[Any], Any] | None = None,
    ) -> Response:
        """인증된 REST 호출 실행

        Args:
            path_or_uri: base_url 기준 상대 경로 또는 절대 URI
            method: HTTP 메서드
            body: 요청 본문 (serialize_body 규칙 적용)
            identity: 호출자 CloudIdentity
            is_retry: 이미 401 재시도 중인지 여부
            token: 사용할 토큰 (비어 있으면 identity_provider.get_token)
            request_settings: 전송 설정 (None이면 기본값)
            response_type: 응답 본문 타입

        Returns:
            Response (401 재시도 후에도 401이면 그대로 반환)
        """
        url = self._resolve_url(path_or_uri)
        request_settings = request_settings or build_default_request_settings()
        body_text = serialize_body(body)

        response = self._execute_once(
            url, method, body_text, identity, token, request_settings, response_type
        )

        if not is_unauthorized(response.status_code) or is_retry:
            return response

        logger.info("401 응답 - 토큰 갱신 후 재시도: %s %s", method.value, url)
        fresh_token = self._identity_provider.get_token(identity, force_refresh=True)
        return self._execute_once(
            url, method, body_text, identity, fresh_token, request_settings, response_type
        )

    def _execute_once(
        self,
        url: str,
        method: HttpMethod,
        body_text: str | None,
        identity: CloudIdentity,
        token: str | None,
        request_settings: RequestSettings,
        response_type: Callable[[Any], Any] | None,
    ) -> Response:
        if token is None or not token.strip():
            token = self._identity_provider.get_token(identity)

        headers = {settings.AUTH_HEADER: token}
        logger.debug("%s %s token=%s", method.value, url, _mask(token))

        return self._rest_service.execute(
            url, method, body_text, headers, request_settings, response_type
        )

    def get_service_endpoint(self, service_name: str, identity: CloudIdentity) -> str:
        """서비스 카탈로그에서 identity 리전의 public URL 조회

        Args:
            service_name: 서비스 이름 (대소문자 구분)
            identity: 호출자 CloudIdentity (region 사용, 대소문자 무시)

        Returns:
            엔드포인트 public URL

        Raises:
            UserAuthenticationError: 인증 결과나 서비스 카탈로그가 없는 경우
            ServiceAccessError: 서비스가 없거나 엔드포인트가 비어 있는 경우
            RegionAccessError: identity 리전과 일치하는 엔드포인트가 없는 경우
        """
        user_access = self._identity_provider.authenticate(identity)

        if user_access is None or user_access.service_catalog is None:
            raise UserAuthenticationError(
                "Unable to authenticate user and retrieve authorized service endpoints"
            )

        service = next(
            (s for s in user_access.service_catalog if s.name == service_name),
            None,
        )
        if service is None or not service.endpoints:
            raise ServiceAccessError(service_name)

        endpoint = None
        if identity.region:
            region = identity.region.casefold()
            endpoint = next(
                (e for e in service.endpoints if (e.region or "").casefold() == region),
                None,
            )
        if endpoint is None:
            raise RegionAccessError(service_name, identity.region)

        return endpoint.public_url

