"""Tests for the HTTP AI client, using httpx.MockTransport."""

import json

import httpx
import pytest

from resume_builder.errors import RequestError
from resume_builder.models import ApiConfig, AppConfig
from resume_builder.services import HttpAIClient, LLMService, build_ai_client, drain_stream


def _config():
    return ApiConfig(base_url="http://resume.test")


class TestHttpAIClient:
    @pytest.mark.asyncio
    async def test_streams_analysis_body(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b'noise {"extractedSkills": []}')

        async with HttpAIClient(_config(), transport=httpx.MockTransport(handler)) as client:
            payload = {"jobDescription": "jd", "currentSkills": ["Go"]}
            text = await drain_stream(client.stream_analysis(payload))

        assert text == 'noise {"extractedSkills": []}'
        assert seen[0].method == "POST"
        assert seen[0].url.path == "/api/ai/analyze-job"
        assert json.loads(seen[0].content) == {"jobDescription": "jd", "currentSkills": ["Go"]}

    @pytest.mark.asyncio
    async def test_generation_uses_generate_path(self):
        paths = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append(request.url.path)
            return httpx.Response(200, content=b"{}")

        async with HttpAIClient(_config(), transport=httpx.MockTransport(handler)) as client:
            await drain_stream(client.stream_generation({"jobDescription": "jd"}))

        assert paths == ["/api/ai/generate-resume"]

    @pytest.mark.asyncio
    async def test_non_success_status_is_request_error(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(500, content=b"oops"))

        async with HttpAIClient(_config(), transport=transport) as client:
            with pytest.raises(RequestError) as exc_info:
                await drain_stream(client.stream_analysis({}))

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_transport_failure_is_request_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with HttpAIClient(_config(), transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(RequestError) as exc_info:
                await drain_stream(client.stream_generation({}))

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_requires_context_manager(self):
        client = HttpAIClient(_config())
        with pytest.raises(RequestError, match="not initialized"):
            await drain_stream(client.stream_analysis({}))


class TestBuildAIClient:
    def test_http_backend_by_default(self):
        assert isinstance(build_ai_client(AppConfig()), HttpAIClient)

    def test_llm_backend(self):
        assert isinstance(build_ai_client(AppConfig(backend="llm")), LLMService)
