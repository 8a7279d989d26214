# cloudcore/rest/__init__.py
"""
HTTP 실행 계층

- RequestSettings / build_default_request_settings: 전송 설정
- HttpMethod / Response / RawJson: 공통 타입
- RestService / JsonRestService: HTTP 실행 인터페이스와 requests 기반 구현
"""

from .service import JsonRestService, RestService
from .settings import RequestSettings, build_default_request_settings
from .types import HttpMethod, RawJson, Response

__all__ = [
    "HttpMethod",
    "JsonRestService",
    "RawJson",
    "RequestSettings",
    "Response",
    "RestService",
    "build_default_request_settings",
]
