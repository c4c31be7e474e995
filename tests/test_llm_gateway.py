import httpx
import pytest

from thingstodo.errors import RemoteGenerationError
from thingstodo.gateways.llm import ArkGateway

ENDPOINT = "https://ark.example.com/api/v3/chat/completions"


def _gateway(handler, api_key="secret"):
    return ArkGateway(api_key, ENDPOINT, "test-model", timeout=5, transport=httpx.MockTransport(handler))


def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


async def test_complete_returns_message_content():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=_completion('{"itinerary": []}'))

    text = await _gateway(handler).complete("Plan a trip")

    assert text == '{"itinerary": []}'
    assert requests[0].headers["Authorization"] == "Bearer secret"
    assert b'"model":"test-model"' in requests[0].content.replace(b" ", b"")


async def test_missing_api_key_fails_fast():
    def handler(request):
        raise AssertionError("no request expected")

    with pytest.raises(RemoteGenerationError, match="API key"):
        await _gateway(handler, api_key=None).complete("Plan a trip")


async def test_error_status():
    def handler(request):
        return httpx.Response(429, text="slow down")

    with pytest.raises(RemoteGenerationError) as excinfo:
        await _gateway(handler).complete("Plan a trip")
    assert excinfo.value.status_code == 429


async def test_timeout():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(RemoteGenerationError, match="timed out"):
        await _gateway(handler).complete("Plan a trip")


async def test_network_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(RemoteGenerationError, match="Network error"):
        await _gateway(handler).complete("Plan a trip")


@pytest.mark.parametrize("body", [{"choices": []}, {"unexpected": True}, _completion(None)])
async def test_unusable_payload(body):
    def handler(request):
        return httpx.Response(200, json=body)

    with pytest.raises(RemoteGenerationError):
        await _gateway(handler).complete("Plan a trip")


async def test_caller_supplied_client_is_used():
    def handler(request):
        return httpx.Response(200, json=_completion("ok"))

    gateway = ArkGateway("secret", ENDPOINT, "test-model")
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        assert await gateway.complete("Plan a trip", client=client) == "ok"
