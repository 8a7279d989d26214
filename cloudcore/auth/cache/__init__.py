# cloudcore/auth/cache/__init__.py
"""
인증 결과(UserAccess) 캐시 관리 모듈

이 모듈은 identity별 토큰과 서비스 카탈로그를 캐시하여 불필요한 인증 호출을 줄입니다.

캐시 전략:
- UserAccessCache: 메모리 기반, 토큰 만료 시간까지 유지
- get_shared_cache: 외부에서 주입하지 않으면 사용하는 전역 인스턴스

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = [
    "CacheEntry",
    "UserAccessCache",
    "get_shared_cache",
]

_IMPORT_MAPPING = {
    "CacheEntry": (".cache", "CacheEntry"),
    "UserAccessCache": (".cache", "UserAccessCache"),
    "get_shared_cache": (".cache", "get_shared_cache"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
