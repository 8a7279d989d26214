# cli/ui - 콘솔 출력 컴포넌트 (rich)
"""
콘솔 출력 모듈

CLI 전용 UI 컴포넌트들 (메시지, 테이블, JSON 출력)
"""

from .console import (
    get_rich_handler,
    print_error,
    print_response_body,
    print_success,
    print_table,
    print_warning,
)

__all__ = [
    "get_rich_handler",
    "print_error",
    "print_response_body",
    "print_success",
    "print_table",
    "print_warning",
]
