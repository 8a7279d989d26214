"""
cloudcore/rest/types.py - REST 호출 공통 타입

- HttpMethod: HTTP 메서드 열거형
- Response: 상태 코드 + 역직렬화된 본문 + 헤더
- RawJson: 이미 JSON 텍스트인 요청 본문 (재인코딩 없이 그대로 전송)
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class HttpMethod(Enum):
    """HTTP 메서드"""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"

    def __str__(self) -> str:
        return self.value


@dataclass
class Response(Generic[T]):
    """HTTP 응답

    Attributes:
        status_code: HTTP 상태 코드
        data: 역직렬화된 본문 (response_type 적용 결과, 없으면 None)
        headers: 응답 헤더 (JsonRestService는 대소문자 무시 매핑)
        raw_body: 원본 본문 텍스트
    """

    status_code: int
    data: T | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    raw_body: str = ""

    @property
    def ok(self) -> bool:
        """2xx 응답 여부"""
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class RawJson:
    """이미 직렬화된 JSON 본문

    Provider는 이 값을 다시 인코딩하지 않고 text를 그대로 전송합니다.
    """

    text: str

    @classmethod
    def from_value(cls, value: Any) -> RawJson:
        return cls(json.dumps(value))

    def __str__(self) -> str:
        return self.text
