"""
tests/conftest.py - pytest 공통 픽스처

Identity 응답, RestService 모킹과 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(identity, mock_rest_service, identity_response):
        mock_rest_service.execute.return_value = identity_response
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from cloudcore.auth.cache import UserAccessCache  # noqa: E402
from cloudcore.auth.types import (  # noqa: E402
    CloudIdentity,
    Endpoint,
    ServiceCatalogEntry,
    Token,
    UserAccess,
)
from cloudcore.rest import Response, RestService  # noqa: E402

# =============================================================================
# 헬퍼
# =============================================================================


def future_iso(hours: int = 12) -> str:
    """현재 시각 기준 hours 후의 ISO 8601 문자열"""
    return (datetime.now(timezone.utc) + timedelta(hours=hours)).strftime("%Y-%m-%dT%H:%M:%SZ")


def make_access_document(token_id: str = "token-abc", hours: int = 12) -> Dict[str, Any]:
    """Identity 서비스 응답 형식의 access 문서"""
    return {
        "access": {
            "token": {
                "id": token_id,
                "expires": future_iso(hours),
                "tenant": {"id": "123456", "name": "123456"},
            },
            "serviceCatalog": [
                {
                    "name": "cloudServersOpenStack",
                    "type": "compute",
                    "endpoints": [
                        {
                            "region": "DFW",
                            "tenantId": "123456",
                            "publicURL": "https://dfw.servers.api.rackspacecloud.com/v2/123456",
                        },
                        {
                            "region": "ORD",
                            "tenantId": "123456",
                            "publicURL": "https://ord.servers.api.rackspacecloud.com/v2/123456",
                        },
                    ],
                },
                {
                    "name": "cloudFiles",
                    "type": "object-store",
                    "endpoints": [
                        {
                            "region": "LON",
                            "tenantId": "MossoCloudFS_123",
                            "publicURL": "https://storage101.lon3.clouddrive.com/v1/MossoCloudFS_123",
                            "internalURL": "https://snet-storage101.lon3.clouddrive.com/v1/MossoCloudFS_123",
                        }
                    ],
                },
            ],
            "user": {"id": "172157", "name": "demo"},
        }
    }


# =============================================================================
# 픽스처
# =============================================================================


@pytest.fixture
def identity() -> CloudIdentity:
    """DFW 리전 identity"""
    return CloudIdentity(username="demo", api_key="secret-key", region="dfw")


@pytest.fixture
def user_access() -> UserAccess:
    """compute 서비스(DFW, ORD 엔드포인트)를 가진 UserAccess"""
    return UserAccess(
        token=Token(id="token-abc"),
        service_catalog=[
            ServiceCatalogEntry(
                name="compute",
                type="compute",
                endpoints=[
                    Endpoint(region="DFW", public_url="https://dfw.compute.example.com/v2/1"),
                    Endpoint(region="ORD", public_url="https://ord.compute.example.com/v2/1"),
                ],
            ),
            ServiceCatalogEntry(name="empty", endpoints=[]),
        ],
    )


@pytest.fixture
def identity_response() -> Response:
    """성공한 인증 응답"""
    return Response(status_code=200, data=make_access_document())


@pytest.fixture
def mock_rest_service() -> MagicMock:
    """RestService 모킹"""
    return MagicMock(spec=RestService)


@pytest.fixture
def cache() -> UserAccessCache:
    """테스트별 독립 캐시"""
    return UserAccessCache()


@pytest.fixture
def access_document():
    """access 문서 생성 함수 (token_id, hours 지정 가능)"""
    return make_access_document
