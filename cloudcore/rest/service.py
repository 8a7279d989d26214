"""
cloudcore/rest/service.py - HTTP 실행 계층

RestService는 core가 의존하는 HTTP 실행 인터페이스이고,
JsonRestService는 requests.Session 기반 기본 구현입니다.

재시도 정책 (RequestSettings):
    - 2xx 또는 non200_success_codes에 포함된 응답 → 즉시 반환
    - 그 외 응답 / 연결 오류 / 타임아웃 → retry_count회까지 재시도 (retry_delay_ms 대기)
    - 재시도 소진 후: 마지막 응답을 반환, 응답 자체가 없으면 RestServiceError
    - 그 밖의 requests 예외 (잘못된 URL 등) → 재시도 없이 RestServiceError
"""

from __future__ import annotations

import json
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any

import requests
from requests.structures import CaseInsensitiveDict

from cloudcore.exceptions import RestServiceError

from .settings import RequestSettings, build_default_request_settings
from .types import HttpMethod, Response

logger = logging.getLogger(__name__)


class RestService(ABC):
    """HTTP 실행 인터페이스"""

    @abstractmethod
    def execute(
        self,
        uri: str,
        method: HttpMethod,
        body: str | None,
        headers: Mapping[str, str],
        settings: RequestSettings | None = None,
        response_type: Callable[[Any], Any] | None = None,
    ) -> Response:
        """요청을 실행하고 Response를 반환합니다.

        Args:
            uri: 절대 URI
            method: HTTP 메서드
            body: 직렬화된 본문 (None이면 본문 없음)
            headers: 추가 헤더 (X-Auth-Token 등)
            settings: 요청 설정 (None이면 기본값)
            response_type: 파싱된 JSON에 적용할 타입 (from_dict 또는 callable)
        """
        pass


def _coerce(payload: Any, response_type: Callable[[Any], Any] | None) -> Any:
    """파싱된 JSON을 요청한 타입으로 변환"""
    if response_type is None or payload is None:
        return payload
    from_dict = getattr(response_type, "from_dict", None)
    if callable(from_dict):
        return from_dict(payload)
    return response_type(payload)


def _deserialize(text: str, response_type: Callable[[Any], Any] | None) -> Any:
    if not text:
        return None
    try:
        payload = json.loads(text)
    except ValueError:
        # JSON이 아닌 본문은 텍스트 그대로
        return text
    return _coerce(payload, response_type)


class JsonRestService(RestService):
    """requests 기반 JSON REST 실행기

    Example:
        with JsonRestService() as service:
            response = service.execute(
                "https://identity.api.rackspacecloud.com/v2.0/tokens",
                HttpMethod.POST,
                body,
                {},
            )
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """JsonRestService 초기화

        Args:
            session: 사용할 requests.Session (None이면 새로 생성)
            sleep: 재시도 대기 함수 (테스트용 주입)
        """
        self._session = session or requests.Session()
        self._sleep = sleep

    def execute(
        self,
        uri: str,
        method: HttpMethod,
        body: str | None,
        headers: Mapping[str, str],
        settings: RequestSettings | None = None,
        response_type: Callable[[Any], Any] | None = None,
    ) -> Response:
        settings = settings or build_default_request_settings()
        request_headers = {
            "Content-Type": settings.content_type,
            "Accept": settings.accept,
            "User-Agent": settings.user_agent,
        }
        request_headers.update(headers)

        attempts = max(int(settings.retry_count), 0) + 1
        last_error: requests.RequestException | None = None
        raw: requests.Response | None = None

        for attempt in range(1, attempts + 1):
            logger.debug("%s %s attempt=%s/%s", method.value, uri, attempt, attempts)
            try:
                raw = self._session.request(
                    method.value,
                    uri,
                    data=body.encode("utf-8") if body is not None else None,
                    headers=request_headers,
                    timeout=settings.timeout_seconds,
                )
                last_error = None
                if settings.is_success(raw.status_code):
                    break
                logger.debug("%s %s -> %s (재시도 대상)", method.value, uri, raw.status_code)
            except (requests.ConnectionError, requests.Timeout) as exc:
                last_error = exc
                logger.debug("%s %s 연결 실패: %s", method.value, uri, exc)
            except requests.RequestException as exc:
                # 잘못된 URL, 리다이렉트 초과 등은 재시도하지 않음
                raise RestServiceError(
                    uri=uri,
                    method=method.value,
                    message=exc.__class__.__name__,
                    cause=exc,
                ) from exc

            if attempt < attempts:
                self._sleep(settings.retry_delay_seconds)

        if last_error is not None or raw is None:
            raise RestServiceError(
                uri=uri,
                method=method.value,
                message=f"{attempts}회 시도 후 응답 없음",
                cause=last_error,
            )

        if not settings.is_success(raw.status_code):
            logger.warning("%s %s 실패 응답: %s", method.value, uri, raw.status_code)

        text = raw.text or ""
        return Response(
            status_code=raw.status_code,
            data=_deserialize(text, response_type),
            headers=CaseInsensitiveDict(raw.headers),
            raw_body=text,
        )

    def close(self) -> None:
        """세션 정리"""
        self._session.close()

    def __enter__(self) -> JsonRestService:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
