"""
cloudcore/rest/settings.py - HTTP 요청 설정

RequestSettings는 전송 계층(RestService)이 사용하는 설정 묶음입니다.
- retry_count / retry_delay_ms: 실패 응답·연결 오류 재시도
- non200_success_codes: 2xx가 아니어도 "정상 응답"으로 취급할 상태 코드

Provider 계층의 401 단일 재시도와는 별개입니다.
401이 기본 허용 코드에 포함되는 이유는 전송 계층이 401을 재시도하지 않고
그대로 돌려줘야 Provider가 토큰을 갱신할 수 있기 때문입니다.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from cloudcore.config import get_http_timeout, settings


@dataclass
class RequestSettings:
    """HTTP 요청 설정

    Attributes:
        retry_count: 실패 시 추가 시도 횟수 (0이면 재시도 안함)
        retry_delay_ms: 재시도 사이 대기 시간 (밀리초)
        non200_success_codes: 정상으로 취급할 non-2xx 상태 코드
        timeout_seconds: 요청 타임아웃 (초)
        content_type: Content-Type 헤더
        accept: Accept 헤더
        user_agent: User-Agent 헤더
    """

    retry_count: int = settings.DEFAULT_RETRY_COUNT
    retry_delay_ms: int = settings.DEFAULT_RETRY_DELAY_MS
    non200_success_codes: list[int] = field(
        default_factory=lambda: list(settings.DEFAULT_NON200_SUCCESS_CODES)
    )
    timeout_seconds: float = settings.HTTP_TIMEOUT_SECONDS
    content_type: str = "application/json"
    accept: str = "application/json"
    user_agent: str = settings.USER_AGENT

    @property
    def retry_delay_seconds(self) -> float:
        return self.retry_delay_ms / 1000.0

    def is_success(self, status_code: int) -> bool:
        """전송 계층 기준 정상 응답 여부"""
        return 200 <= status_code < 300 or status_code in self.non200_success_codes


def build_default_request_settings(extra_codes: Iterable[int] | None = None) -> RequestSettings:
    """기본 요청 설정 생성

    재시도 2회, 대기 200ms, 허용 코드 {401, 409} ∪ extra_codes.

    Args:
        extra_codes: 추가로 허용할 non-2xx 상태 코드

    Returns:
        RequestSettings
    """
    codes = list(settings.DEFAULT_NON200_SUCCESS_CODES)
    for code in extra_codes or ():
        if code not in codes:
            codes.append(code)

    return RequestSettings(
        retry_count=settings.DEFAULT_RETRY_COUNT,
        retry_delay_ms=settings.DEFAULT_RETRY_DELAY_MS,
        non200_success_codes=codes,
        timeout_seconds=get_http_timeout(),
    )
