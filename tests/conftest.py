import json

import httpx
import pytest
from fastapi.testclient import TestClient


# --- Canned API responses ---

ANALYSIS_RESULT = {
    "url": "https://example.com",
    "vertical": "E-commerce Retail",
    "gmv": "$1M - $5M",
    "products": "Sells home goods and kitchenware, prices $15-$120.",
    "desc": "An online store for modern home essentials aimed at young urban households.",
    "country": "US",
}


def chat_completion(content: str) -> dict:
    """Wrap model output the way the Perplexity chat completions API does."""
    return {
        "id": "cmpl-123",
        "model": "sonar-pro",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": content},
            }
        ],
    }


PERPLEXITY_API_RESPONSE = chat_completion(json.dumps(ANALYSIS_RESULT))


class FakeGenerator:
    """Stands in for PerplexityClient; records every call it receives."""

    def __init__(self, result=None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls = []

    async def generate_object(self, prompt, schema, *, model, temperature=0.2):
        self.calls.append({"prompt": prompt, "schema": schema, "model": model, "temperature": temperature})
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def perplexity_requests():
    """Requests captured by the mock transport."""
    return []


@pytest.fixture
def mock_transport(perplexity_requests):
    """httpx transport answering every request with PERPLEXITY_API_RESPONSE by default.

    Tests replace ``mock_transport.response`` with another Response, or with an
    exception to raise, to change the reply.
    """
    class _Transport(httpx.MockTransport):
        response = httpx.Response(200, json=PERPLEXITY_API_RESPONSE)

    def handler(request: httpx.Request) -> httpx.Response:
        perplexity_requests.append(request)
        if isinstance(transport.response, Exception):
            raise transport.response
        return transport.response

    transport = _Transport(handler)
    return transport


@pytest.fixture
def api_client():
    """FastAPI TestClient for router tests."""
    from sitescope.main import api
    return TestClient(api)
