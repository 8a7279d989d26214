# cloudcore/auth/types/types.py
"""
cloudcore/auth/types/types.py - 인증 모듈의 핵심 타입 정의

이 모듈은 인증 시스템 전체에서 사용되는 기본 타입들을 정의합니다.

포함 항목:
    - CloudIdentity: 호출자가 제공하는 자격 증명 + 대상 리전
    - Token / Endpoint / ServiceCatalogEntry / UserAccess: 인증 결과 데이터 클래스
    - IdentityProvider: 모든 Identity Provider가 구현해야 하는 추상 기본 클래스 (ABC)
    - 에러 클래스: AuthError, ConfigurationError, UnknownGeographyError,
      UserAuthenticationError, UserAuthorizationError,
      ServiceAccessError, RegionAccessError
"""

from __future__ import annotations

import hashlib
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from cloudcore.exceptions import CloudError

logger = logging.getLogger(__name__)


# =============================================================================
# Cloud Identity
# =============================================================================


@dataclass(frozen=True)
class CloudIdentity:
    """호출자가 제공하는 자격 증명 descriptor

    core는 이 객체를 참조로만 전달하며 절대 수정하지 않습니다.

    Attributes:
        username: 사용자 이름
        api_key: API 키 (password보다 우선)
        password: 비밀번호
        region: 엔드포인트 매칭에 사용할 리전 (예: "DFW")
        tenant_id: 테넌트 ID (옵션)
    """

    username: str
    api_key: str | None = field(default=None, repr=False)
    password: str | None = field(default=None, repr=False)
    region: str | None = None
    tenant_id: str | None = None

    def fingerprint(self) -> str:
        """캐시 키로 사용할 식별자 해시

        자격 증명 필드 전체로 SHA-1 해시를 생성합니다.
        키 자체에는 비밀 값이 드러나지 않습니다.
        """
        parts = [
            self.username or "",
            self.api_key or "",
            self.password or "",
            self.tenant_id or "",
        ]
        return hashlib.sha1("\x1f".join(parts).encode("utf-8")).hexdigest()

    def to_auth_payload(self) -> dict[str, Any]:
        """Identity 서비스에 보낼 자격 증명 문서

        Raises:
            ConfigurationError: api_key와 password가 모두 없는 경우
        """
        if self.api_key:
            credentials: dict[str, Any] = {
                "RAX-KSKEY:apiKeyCredentials": {
                    "username": self.username,
                    "apiKey": self.api_key,
                }
            }
        elif self.password:
            credentials = {
                "passwordCredentials": {
                    "username": self.username,
                    "password": self.password,
                }
            }
        else:
            raise ConfigurationError(
                f"api_key 또는 password가 필요합니다: {self.username}",
                config_key="credentials",
            )

        if self.tenant_id:
            credentials["tenantId"] = self.tenant_id
        return {"auth": credentials}


# =============================================================================
# User Access (인증 결과)
# =============================================================================


def _parse_expires(value: str | None) -> datetime | None:
    """ISO 8601 만료 시간 파싱 (실패 시 None)"""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("토큰 만료 시간 파싱 실패: %s", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class Token:
    """인증 토큰

    Attributes:
        id: X-Auth-Token 헤더에 들어갈 토큰 값
        expires: 만료 시간 (UTC, None이면 만료되지 않음)
        tenant_id: 토큰이 발급된 테넌트
    """

    id: str
    expires: datetime | None = None
    tenant_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Token:
        tenant = data.get("tenant") or {}
        return cls(
            id=data.get("id", ""),
            expires=_parse_expires(data.get("expires")),
            tenant_id=tenant.get("id"),
        )


@dataclass
class Endpoint:
    """서비스의 리전별 엔드포인트"""

    region: str
    public_url: str
    internal_url: str | None = None
    tenant_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Endpoint:
        return cls(
            region=data.get("region", ""),
            public_url=data.get("publicURL", ""),
            internal_url=data.get("internalURL"),
            tenant_id=data.get("tenantId"),
        )


@dataclass
class ServiceCatalogEntry:
    """서비스 카탈로그 항목 (이름 + 리전별 엔드포인트)"""

    name: str
    type: str | None = None
    endpoints: list[Endpoint] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServiceCatalogEntry:
        return cls(
            name=data.get("name", ""),
            type=data.get("type"),
            endpoints=[Endpoint.from_dict(e) for e in data.get("endpoints") or []],
        )


@dataclass
class UserAccess:
    """인증 결과 번들 (토큰 + 서비스 카탈로그)

    Identity Provider가 생성하며, 한번 얻은 뒤에는 읽기 전용으로 취급합니다.
    """

    token: Token
    service_catalog: list[ServiceCatalogEntry] | None = None
    user: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserAccess | None:
        """Identity 응답의 access 문서에서 생성

        Args:
            data: {"access": {...}} 또는 access 문서 자체

        Returns:
            UserAccess 또는 None (access 문서/토큰이 없는 경우)
        """
        access = data.get("access", data) if isinstance(data, dict) else None
        if not isinstance(access, dict) or not access.get("token"):
            return None

        catalog = access.get("serviceCatalog")
        return cls(
            token=Token.from_dict(access["token"]),
            service_catalog=(
                [ServiceCatalogEntry.from_dict(s) for s in catalog] if catalog is not None else None
            ),
            user=access.get("user"),
        )


# =============================================================================
# Identity Provider Interface (Abstract Base Class)
# =============================================================================


class IdentityProvider(ABC):
    """모든 Identity Provider가 구현해야 하는 추상 기본 클래스

    core(Selector, Executor)는 이 두 메서드에만 의존합니다.

    Example:
        class StaticTokenProvider(IdentityProvider):
            def authenticate(self, identity):
                return UserAccess(token=Token(id="fixed"), service_catalog=[])

            def get_token(self, identity, force_refresh=False):
                return "fixed"
    """

    @abstractmethod
    def authenticate(self, identity: CloudIdentity) -> UserAccess | None:
        """인증을 수행하고 UserAccess를 반환합니다.

        Returns:
            UserAccess 또는 None (인증 결과가 없는 경우)
        """
        pass

    @abstractmethod
    def get_token(self, identity: CloudIdentity, force_refresh: bool = False) -> str:
        """요청에 사용할 토큰 문자열을 반환합니다.

        Args:
            identity: 대상 CloudIdentity
            force_refresh: True이면 캐시를 우회하고 새로 인증

        Raises:
            UserAuthenticationError: 토큰을 얻지 못한 경우
        """
        pass


# =============================================================================
# Error Classes
# =============================================================================


class AuthError(CloudError):
    """인증 관련 기본 에러 클래스

    모든 인증 에러의 부모 클래스입니다.
    원인 예외(cause)를 체이닝하여 디버깅을 용이하게 합니다.
    """

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message, cause)


class ConfigurationError(AuthError):
    """설정 오류가 발생했을 때 발생하는 에러

    Attributes:
        config_key: 문제가 된 설정 키 이름 (옵션)
    """

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message, cause)
        self.config_key = config_key


class UnknownGeographyError(ConfigurationError):
    """알 수 없는 지역(geography) 코드

    Attributes:
        geography: 호출자가 전달한 원래 값 (정규화 전)
    """

    def __init__(self, geography: str):
        super().__init__(f"알 수 없는 지역 코드입니다: {geography}", config_key="geography")
        self.geography = geography
        self.details["geography"] = geography


class UserAuthenticationError(AuthError):
    """Identity Provider가 사용 가능한 인증 결과를 돌려주지 못한 경우

    엔드포인트 조회 중의 인증 실패는 재시도하지 않고 즉시 전파합니다.
    """


class UserAuthorizationError(AuthError):
    """인증된 사용자가 요청한 서비스/리전에 접근 권한이 없는 경우"""


class ServiceAccessError(UserAuthorizationError):
    """서비스 카탈로그에 요청한 서비스가 없거나 엔드포인트가 비어 있음

    Attributes:
        service_name: 요청한 서비스 이름
    """

    def __init__(self, service_name: str):
        super().__init__("The user does not have access to the requested service.")
        self.service_name = service_name
        self.details["service_name"] = service_name


class RegionAccessError(UserAuthorizationError):
    """서비스는 있지만 identity의 리전과 일치하는 엔드포인트가 없음

    Attributes:
        service_name: 요청한 서비스 이름
        region: identity에 설정된 리전
    """

    def __init__(self, service_name: str, region: str | None):
        super().__init__("The user does not have access to the requested service or region.")
        self.service_name = service_name
        self.region = region
        self.details.update({"service_name": service_name, "region": region})
