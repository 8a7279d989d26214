# tests/cli/test_cloudcore_cli.py
"""
cli/app.py 단위 테스트

IdentityProviderFactory를 모킹된 RestService로 교체하여
네트워크 없이 명령어 전체 흐름을 검증합니다.
"""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from cli.app import cli
from cloudcore.auth import IdentityProviderFactory
from cloudcore.rest import Response

TOKENS_URL = "https://identity.api.rackspacecloud.com/v2.0/tokens"
SERVERS_URL = "https://dfw.servers.api.rackspacecloud.com/v2/123456/servers"

IDENTITY_ARGS = ["-g", "dfw", "-u", "demo", "-k", "secret-key", "-r", "DFW"]


@pytest.fixture
def runner():
    """Click CliRunner"""
    return CliRunner()


@pytest.fixture
def factory(mock_rest_service, cache, identity_response):
    """토큰 URL은 인증 응답, 나머지는 routes에서 찾아 응답"""
    routes = {}

    def execute(uri, method, body, headers, settings=None, response_type=None):
        if uri == TOKENS_URL:
            return identity_response
        return routes.get((method.value, uri), Response(404, {"itemNotFound": {}}))

    mock_rest_service.execute.side_effect = execute
    factory = IdentityProviderFactory(rest_service=mock_rest_service, cache=cache)
    factory.routes = routes
    return factory


@pytest.fixture
def patched_factory(factory):
    with patch("cli.app.IdentityProviderFactory", return_value=factory):
        yield factory


# =============================================================================
# 기본 옵션
# =============================================================================


class TestCLI:
    """CLI 그룹 테스트"""

    def test_version_option(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "cloudcore" in result.output

    def test_help_option(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "endpoint" in result.output
        assert "request" in result.output

    def test_geos(self, runner):
        result = runner.invoke(cli, ["geos"])
        assert result.exit_code == 0
        assert "lon" in result.output
        assert "lon.identity.api.rackspacecloud.com" in result.output

    def test_debug_env_enables_verbose_logging(self, runner):
        """CLOUDCORE_DEBUG=true 이면 --verbose와 같이 DEBUG 로깅"""
        with patch("cli.app.LogConfig") as log_config:
            result = runner.invoke(cli, ["geos"], env={"CLOUDCORE_DEBUG": "true"})

        assert result.exit_code == 0
        assert log_config.call_args.kwargs["level"] == "DEBUG"
        log_config.return_value.configure_logging.assert_called_once()

    def test_debug_env_off(self, runner):
        with patch("cli.app.LogConfig") as log_config:
            runner.invoke(cli, ["geos"], env={"CLOUDCORE_DEBUG": "no"})

        log_config.assert_not_called()


# =============================================================================
# endpoint 명령
# =============================================================================


class TestEndpointCommand:
    def test_prints_public_url(self, runner, patched_factory, mock_rest_service):
        result = runner.invoke(cli, ["endpoint", "cloudServersOpenStack", *IDENTITY_ARGS])

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "https://dfw.servers.api.rackspacecloud.com/v2/123456"
        assert mock_rest_service.execute.call_args.args[0] == TOKENS_URL

    def test_region_not_available(self, runner, patched_factory):
        result = runner.invoke(
            cli, ["endpoint", "cloudFiles", "-g", "dfw", "-u", "demo", "-k", "k", "-r", "DFW"]
        )

        assert result.exit_code == 1
        assert "service or region" in result.output

    def test_unknown_geography(self, runner, patched_factory):
        result = runner.invoke(
            cli, ["endpoint", "cloudFiles", "-g", "mars", "-u", "demo", "-k", "k", "-r", "DFW"]
        )

        assert result.exit_code == 1
        assert "mars" in result.output

    def test_missing_credentials(self, runner, patched_factory):
        result = runner.invoke(
            cli,
            ["endpoint", "cloudFiles", "-g", "dfw", "-u", "demo", "-r", "DFW"],
            env={"CLOUD_API_KEY": None, "CLOUD_PASSWORD": None},
        )

        assert result.exit_code == 2
        assert "--api-key" in result.output


# =============================================================================
# request 명령
# =============================================================================


class TestRequestCommand:
    def test_get_with_service(self, runner, patched_factory, mock_rest_service):
        patched_factory.routes[("GET", SERVERS_URL)] = Response(200, {"servers": []})

        result = runner.invoke(
            cli, ["request", "get", "/servers", "-s", "cloudServersOpenStack", *IDENTITY_ARGS]
        )

        assert result.exit_code == 0, result.output
        assert "HTTP 200" in result.output
        assert '"servers"' in result.output

        last = mock_rest_service.execute.call_args
        assert last.args[0] == SERVERS_URL
        assert last.args[3] == {"X-Auth-Token": "token-abc"}

    def test_post_sends_data_verbatim(self, runner, patched_factory, mock_rest_service):
        patched_factory.routes[("POST", SERVERS_URL)] = Response(202, {"server": {"id": "x"}})
        data = '{"server": {"name": "web", "key_name": null}}'

        result = runner.invoke(
            cli,
            ["request", "POST", SERVERS_URL, "-d", data, *IDENTITY_ARGS],
        )

        assert result.exit_code == 0, result.output
        assert mock_rest_service.execute.call_args.args[2] == data

    def test_invalid_json_data(self, runner, patched_factory):
        result = runner.invoke(cli, ["request", "POST", SERVERS_URL, "-d", "{oops", *IDENTITY_ARGS])

        assert result.exit_code == 2
        assert "JSON" in result.output

    def test_accept_code_added(self, runner, patched_factory, mock_rest_service):
        """--accept-code로 허용한 상태 코드는 경고만 출력하고 종료 코드 0"""
        result = runner.invoke(
            cli, ["request", "GET", SERVERS_URL, "--accept-code", "404", *IDENTITY_ARGS]
        )

        settings = mock_rest_service.execute.call_args.args[4]
        assert 404 in settings.non200_success_codes
        assert 401 in settings.non200_success_codes
        assert result.exit_code == 0, result.output
        assert "! HTTP 404" in result.output

    def test_failed_status_exits_nonzero(self, runner, patched_factory):
        patched_factory.routes[("GET", SERVERS_URL)] = Response(500, {"error": "boom"})

        result = runner.invoke(cli, ["request", "GET", SERVERS_URL, *IDENTITY_ARGS])

        assert result.exit_code == 1
        assert "✗ HTTP 500" in result.output

    def test_success_status_marked(self, runner, patched_factory):
        patched_factory.routes[("GET", SERVERS_URL)] = Response(200, {"servers": []})

        result = runner.invoke(cli, ["request", "GET", SERVERS_URL, *IDENTITY_ARGS])

        assert result.exit_code == 0, result.output
        assert "✓ HTTP 200" in result.output

    def test_invalid_timeout_env(self, runner, patched_factory):
        """CLOUDCORE_HTTP_TIMEOUT이 정수가 아니면 설정 오류로 종료"""
        result = runner.invoke(
            cli,
            ["request", "GET", SERVERS_URL, *IDENTITY_ARGS],
            env={"CLOUDCORE_HTTP_TIMEOUT": "fast"},
        )

        assert result.exit_code == 1
        assert "CLOUDCORE_HTTP_TIMEOUT" in result.output

    def test_unauthorized_refreshes_once(
        self, runner, patched_factory, mock_rest_service, access_document
    ):
        """401이면 토큰을 갱신하고 한 번만 재시도"""
        calls = []

        def execute(uri, method, body, headers, settings=None, response_type=None):
            calls.append((uri, headers))
            if uri == TOKENS_URL:
                token_id = "first" if len(calls) == 1 else "second"
                return Response(200, access_document(token_id=token_id))
            if headers.get("X-Auth-Token") == "first":
                return Response(401, {"unauthorized": {}})
            return Response(200, {"ok": True})

        mock_rest_service.execute.side_effect = execute

        result = runner.invoke(cli, ["request", "GET", SERVERS_URL, *IDENTITY_ARGS])

        assert result.exit_code == 0, result.output
        api_calls = [headers for uri, headers in calls if uri == SERVERS_URL]
        assert api_calls == [{"X-Auth-Token": "first"}, {"X-Auth-Token": "second"}]
        assert '"ok": true' in result.output
