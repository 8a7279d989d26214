# cloudcore/auth/__init__.py
"""
통합 인증 모듈 (cloudcore/auth)

구성:
- types: CloudIdentity, UserAccess, IdentityProvider 인터페이스, 인증 에러
- cache: UserAccessCache (identity fingerprint 기반 메모리 캐시)
- provider: GeographicalIdentityProvider, IdentityProviderFactory

사용 예시:
    from cloudcore.auth import CloudIdentity, IdentityProviderFactory

    identity = CloudIdentity(username="demo", api_key="...", region="DFW")
    provider = IdentityProviderFactory().get("dfw")
    token = provider.get_token(identity)

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
    실제 사용 시점에만 하위 모듈이 로드되어 CLI 시작 시간을 최적화합니다.
"""

__all__ = [
    # Types
    "IdentityProvider",
    "CloudIdentity",
    "Token",
    "Endpoint",
    "ServiceCatalogEntry",
    "UserAccess",
    "AuthError",
    "ConfigurationError",
    "UnknownGeographyError",
    "UserAuthenticationError",
    "UserAuthorizationError",
    "ServiceAccessError",
    "RegionAccessError",
    # Cache
    "CacheEntry",
    "UserAccessCache",
    "get_shared_cache",
    # Providers
    "GeographicalIdentityProvider",
    "IdentityAuthority",
    "IdentityProviderFactory",
    "GEOGRAPHY_AUTHORITIES",
    "authority_for",
]

_CACHE_NAMES = {"CacheEntry", "UserAccessCache", "get_shared_cache"}
_PROVIDER_NAMES = {
    "GeographicalIdentityProvider",
    "IdentityAuthority",
    "IdentityProviderFactory",
    "GEOGRAPHY_AUTHORITIES",
    "authority_for",
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name not in __all__:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    import importlib

    if name in _CACHE_NAMES:
        module = importlib.import_module(".cache", __name__)
    elif name in _PROVIDER_NAMES:
        module = importlib.import_module(".provider", __name__)
    else:
        module = importlib.import_module(".types", __name__)
    return getattr(module, name)
