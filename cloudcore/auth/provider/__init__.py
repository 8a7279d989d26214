# cloudcore/auth/provider/__init__.py
"""
Identity Provider 구현 모듈

Provider 목록:
- GeographicalIdentityProvider: 지역 Identity 서비스 기반 인증
- IdentityProviderFactory: 지역 코드 → Provider 선택/캐시

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = [
    "GeographicalIdentityProvider",
    "IdentityAuthority",
    "IdentityProviderFactory",
    "GEOGRAPHY_AUTHORITIES",
    "authority_for",
]

_IMPORT_MAPPING = {
    "GeographicalIdentityProvider": (".geographical", "GeographicalIdentityProvider"),
    "IdentityAuthority": (".factory", "IdentityAuthority"),
    "IdentityProviderFactory": (".factory", "IdentityProviderFactory"),
    "GEOGRAPHY_AUTHORITIES": (".factory", "GEOGRAPHY_AUTHORITIES"),
    "authority_for": (".factory", "authority_for"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
