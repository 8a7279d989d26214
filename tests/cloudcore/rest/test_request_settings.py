"""
tests/cloudcore/rest/test_request_settings.py - RequestSettings 테스트
"""

import os
from unittest.mock import patch

from cloudcore.rest import HttpMethod, RawJson, RequestSettings, Response, build_default_request_settings


class TestBuildDefaultRequestSettings:
    """build_default_request_settings 테스트"""

    def test_defaults(self):
        s = build_default_request_settings()

        assert s.retry_count == 2
        assert s.retry_delay_ms == 200
        assert s.non200_success_codes == [401, 409]

    def test_extra_codes_merged(self):
        s = build_default_request_settings([404, 202])
        assert set(s.non200_success_codes) == {401, 409, 404, 202}

    def test_extra_codes_deduplicated(self):
        s = build_default_request_settings([409, 401, 404, 404])
        assert sorted(s.non200_success_codes) == [401, 404, 409]

    def test_returns_independent_instances(self):
        a = build_default_request_settings()
        b = build_default_request_settings()
        a.non200_success_codes.append(500)
        assert 500 not in b.non200_success_codes

    def test_timeout_from_env(self):
        with patch.dict(os.environ, {"CLOUDCORE_HTTP_TIMEOUT": "7"}):
            assert build_default_request_settings().timeout_seconds == 7


class TestRequestSettings:
    def test_retry_delay_seconds(self):
        assert RequestSettings(retry_delay_ms=250).retry_delay_seconds == 0.25

    def test_is_success(self):
        s = RequestSettings()
        assert s.is_success(200)
        assert s.is_success(204)
        assert s.is_success(401)
        assert s.is_success(409)
        assert not s.is_success(404)
        assert not s.is_success(500)

    def test_default_headers(self):
        s = RequestSettings()
        assert s.content_type == "application/json"
        assert s.accept == "application/json"
        assert s.user_agent.startswith("cloudcore/")


class TestRestTypes:
    """HttpMethod / Response / RawJson 테스트"""

    def test_http_method_str(self):
        assert str(HttpMethod.DELETE) == "DELETE"
        assert HttpMethod("PATCH") is HttpMethod.PATCH

    def test_response_ok(self):
        assert Response(204).ok
        assert not Response(401).ok
        assert not Response(409).ok

    def test_raw_json(self):
        raw = RawJson.from_value({"a": None})
        assert raw.text == '{"a": null}'
        assert str(raw) == raw.text
