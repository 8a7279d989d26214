"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.

명령어 구조:
    cloudcore --version                         # 버전 표시
    cloudcore geos                              # 지역 코드 → Identity URL 표
    cloudcore endpoint SERVICE [옵션]           # 서비스 엔드포인트 조회
    cloudcore request METHOD PATH [옵션]        # 인증된 REST 호출

    예시:
    cloudcore endpoint cloudServersOpenStack -g dfw -u demo -k $API_KEY -r DFW
    cloudcore request GET servers -s cloudServersOpenStack -g dfw -u demo -k $API_KEY -r DFW

자격 증명은 환경변수로도 지정할 수 있습니다:
    CLOUD_USERNAME, CLOUD_API_KEY, CLOUD_PASSWORD, CLOUD_REGION, CLOUD_GEO

CLOUDCORE_DEBUG=true 이면 --verbose와 같이 DEBUG 로그를 출력합니다.
"""

import json
import logging
from collections.abc import Callable
from typing import Any, NoReturn

import click

from cli.ui import (
    get_rich_handler,
    print_error,
    print_response_body,
    print_success,
    print_table,
    print_warning,
)
from cloudcore.auth import (
    GEOGRAPHY_AUTHORITIES,
    CloudIdentity,
    IdentityProviderFactory,
)
from cloudcore.config import LogConfig, get_default_region, get_env_bool, get_version
from cloudcore.exceptions import CloudError, format_error_for_user
from cloudcore.providers import ProviderBase
from cloudcore.rest import HttpMethod, RawJson, build_default_request_settings

# Keep lightweight, centralized logging config
# WARNING 레벨로 설정하여 INFO 로그가 명령 출력에 섞이지 않도록 함
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _identity_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """identity 관련 공통 옵션"""
    options = [
        click.option("-g", "--geo", envvar="CLOUD_GEO", required=True, help="지역 코드 (dfw, ord, us, lon)"),
        click.option("-u", "--username", envvar="CLOUD_USERNAME", required=True, help="사용자 이름"),
        click.option("-k", "--api-key", "api_key", envvar="CLOUD_API_KEY", default=None, help="API 키"),
        click.option("-p", "--password", envvar="CLOUD_PASSWORD", default=None, help="비밀번호"),
        click.option(
            "-r",
            "--region",
            default=get_default_region,
            help="엔드포인트 리전 (기본: CLOUD_REGION)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_identity(
    username: str,
    api_key: str | None,
    password: str | None,
    region: str | None,
) -> CloudIdentity:
    if not api_key and not password:
        raise click.UsageError("--api-key 또는 --password 중 하나가 필요합니다")
    return CloudIdentity(username=username, api_key=api_key, password=password, region=region)


def _build_executor(factory: IdentityProviderFactory, geo: str) -> ProviderBase:
    provider = factory.get(geo)
    return ProviderBase(getattr(provider, "base_url", None), provider, factory.rest_service)


def _fail(error: Exception) -> NoReturn:
    print_error(format_error_for_user(error))
    raise SystemExit(1)


@click.group()
@click.version_option(version=get_version(), prog_name="cloudcore")
@click.option("-v", "--verbose", is_flag=True, help="DEBUG 로그 출력")
def cli(verbose: bool) -> None:
    """인증된 클라우드 REST 호출 도구"""
    if verbose or get_env_bool("CLOUDCORE_DEBUG"):
        LogConfig(level="DEBUG", format="%(message)s", handlers=[get_rich_handler()]).configure_logging()


@cli.command("geos")
def geos_cmd() -> None:
    """지원하는 지역 코드 목록"""
    rows = [[code, authority.name, authority.base_url] for code, authority in GEOGRAPHY_AUTHORITIES.items()]
    print_table("Identity 지역", ["코드", "Authority", "URL"], rows)


@cli.command("endpoint")
@click.argument("service")
@_identity_options
def endpoint_cmd(
    service: str,
    geo: str,
    username: str,
    api_key: str | None,
    password: str | None,
    region: str | None,
) -> None:
    """SERVICE의 리전 엔드포인트 public URL 출력"""
    identity = _build_identity(username, api_key, password, region)

    try:
        with IdentityProviderFactory() as factory:
            url = _build_executor(factory, geo).get_service_endpoint(service, identity)
    except CloudError as e:
        _fail(e)

    click.echo(url)


@cli.command("request")
@click.argument("method", type=click.Choice([m.value for m in HttpMethod], case_sensitive=False))
@click.argument("target")
@click.option("-s", "--service", default=None, help="서비스 이름 (TARGET을 서비스 엔드포인트 기준으로 해석)")
@click.option("-d", "--data", default=None, help="JSON 요청 본문 (그대로 전송)")
@click.option("--accept-code", "accept_codes", type=int, multiple=True, help="추가로 허용할 non-2xx 상태 코드")
@_identity_options
def request_cmd(
    method: str,
    target: str,
    service: str | None,
    data: str | None,
    accept_codes: tuple[int, ...],
    geo: str,
    username: str,
    api_key: str | None,
    password: str | None,
    region: str | None,
) -> None:
    """인증된 REST 호출 실행

    TARGET은 절대 URL 또는 상대 경로입니다. 상대 경로는 --service가 있으면
    서비스 엔드포인트, 없으면 Identity 기본 URL에 붙습니다.
    """
    identity = _build_identity(username, api_key, password, region)

    body = None
    if data is not None:
        try:
            json.loads(data)
        except ValueError as e:
            raise click.BadParameter(f"JSON 형식이 아닙니다: {e}", param_hint="--data")
        body = RawJson(data)

    try:
        with IdentityProviderFactory() as factory:
            executor = _build_executor(factory, geo)
            if service:
                endpoint = executor.get_service_endpoint(service, identity)
                executor.base_url = endpoint.rstrip("/") + "/"
                target = target if "://" in target else target.lstrip("/")

            response = executor.execute_rest_request(
                target,
                HttpMethod(method.upper()),
                body,
                identity,
                request_settings=build_default_request_settings(accept_codes),
            )
    except CloudError as e:
        _fail(e)

    status = f"HTTP {response.status_code}"
    if response.ok:
        print_success(status)
    elif response.status_code in accept_codes:
        print_warning(f"{status} (허용된 상태 코드)")
    else:
        print_error(status)
    print_response_body(response.data)

    if not response.ok and response.status_code not in accept_codes:
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
