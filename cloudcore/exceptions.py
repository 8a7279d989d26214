"""
cloudcore/exceptions.py - 통합 예외 계층 구조

라이브러리 전체에서 사용되는 예외 클래스들을 정의합니다.
일관된 예외 처리와 에러 메시지를 제공합니다.

예외 계층 구조:
    CloudError (베이스)
    ├── AuthError (인증 관련) - cloudcore.auth.types에서 정의
    │   ├── ConfigurationError
    │   │   └── UnknownGeographyError
    │   ├── UserAuthenticationError
    │   └── UserAuthorizationError
    │       ├── ServiceAccessError
    │       └── RegionAccessError
    ├── RestServiceError (HTTP 전송 실패)
    └── ConfigError (설정 관련)

Usage:
    from cloudcore.exceptions import RestServiceError, format_error_for_user

    try:
        response = service.execute(uri, HttpMethod.GET, None, headers, settings)
    except RestServiceError as e:
        print(format_error_for_user(e))
"""

from typing import Any, Dict, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class CloudError(Exception):
    """cloudcore 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# HTTP 전송 관련 예외
# =============================================================================


class RestServiceError(CloudError):
    """HTTP 호출 자체가 실패한 경우 (연결 실패, 타임아웃 등)

    non-2xx 응답은 예외가 아니라 Response로 반환됩니다.
    이 예외는 재시도를 모두 소진한 뒤에도 응답을 받지 못했을 때만 발생합니다.
    """

    def __init__(
        self,
        uri: str,
        method: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"요청 실패 [{method} {uri}]: {message}"
        super().__init__(full_message, cause)
        self.uri = uri
        self.method = method
        self.details.update({"uri": uri, "method": method})


# =============================================================================
# 설정 관련 예외
# =============================================================================


class ConfigError(CloudError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def is_unauthorized(status_code: int) -> bool:
    """토큰 만료/무효로 인한 401 응답인지 확인"""
    return status_code == 401


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, CloudError):
        # 커스텀 예외는 이미 포맷팅됨
        return str(error)

    return f"{error.__class__.__name__}: {error}"
