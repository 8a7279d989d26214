# cloudcore/providers/__init__.py
"""
서비스 클라이언트 기반 모듈

- ProviderBase: 인증된 REST 호출 실행 + 서비스 엔드포인트 조회
- serialize_body: 요청 본문 직렬화 규칙
"""

from .base import ProviderBase, serialize_body

__all__ = ["ProviderBase", "serialize_body"]
