# cloudcore/__init__.py
"""
cloudcore - 멀티 리전 클라우드용 인증 REST 호출 코어

지역 코드로 Identity 서비스를 선택하고, 토큰을 붙여 REST 호출을 실행하며,
401 응답 시 토큰을 갱신해 한 번만 재시도합니다.

아키텍처:
    cloudcore/
    ├── auth/           # 인증 (types, cache, provider)
    │   ├── types/      # CloudIdentity, UserAccess, IdentityProvider, 에러
    │   ├── cache/      # UserAccessCache
    │   └── provider/   # GeographicalIdentityProvider, IdentityProviderFactory
    ├── rest/           # RequestSettings, Response, JsonRestService
    ├── providers/      # ProviderBase (실행기 + 엔드포인트 조회)
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 통합 예외 계층

Usage:
    from cloudcore.auth import CloudIdentity, IdentityProviderFactory
    from cloudcore.providers import ProviderBase
    from cloudcore.rest import HttpMethod

    factory = IdentityProviderFactory()
    identity = CloudIdentity(username="demo", api_key="...", region="DFW")
    provider = factory.get("dfw")

    base = ProviderBase(None, provider, factory.rest_service)
    url = base.get_service_endpoint("cloudServersOpenStack", identity)
    response = base.execute_rest_request(f"{url}/servers", HttpMethod.GET, None, identity)
"""

from cloudcore.config import __version__

__all__ = ["__version__"]
