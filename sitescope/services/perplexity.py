"""Structured generation against the Perplexity chat completions API."""

import json
import re
from typing import TypeVar

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from sitescope.exceptions import SchemaValidationError, UpstreamError

ModelT = TypeVar("ModelT", bound=BaseModel)

PERPLEXITY_API_BASE = "https://api.perplexity.ai"
_ERROR_BODY_LIMIT = 500

_THINK_BLOCK = re.compile(r"^\s*<think>.*?</think>", re.DOTALL)
_CODE_FENCE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL)


def _extract_json_text(content: str) -> str:
    """Strip a reasoning preamble and markdown fences around the JSON payload."""
    text = _THINK_BLOCK.sub("", content, count=1)
    fenced = _CODE_FENCE.match(text)
    if fenced:
        text = fenced.group(1)
    return text.strip()


def _message_content(data: dict) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise UpstreamError("Perplexity response has no message content", cause=e) from e
    if not isinstance(content, str):
        raise UpstreamError(f"Perplexity message content is {type(content).__name__}, expected a string")
    return content


class PerplexityClient:
    """Thin async client for one-shot structured generation.

    One call makes exactly one HTTP request. Nothing is retried.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = PERPLEXITY_API_BASE,
        timeout: float | None = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=self.timeout,
            transport=self._transport,
        )

    async def generate_object(
        self,
        prompt: str,
        schema: type[ModelT],
        *,
        model: str,
        temperature: float = 0.2,
    ) -> ModelT:
        payload = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            "response_format": {
                "type": "json_schema",
                "json_schema": {"schema": schema.model_json_schema()},
            },
        }
        try:
            async with self._client() as client:
                resp = await client.post("/chat/completions", json=payload)
        except httpx.HTTPError as e:
            raise UpstreamError(f"Perplexity request failed: {e}", cause=e) from e

        if resp.status_code >= 400:
            raise UpstreamError(
                f"Perplexity API error ({resp.status_code})",
                status_code=resp.status_code,
                body=resp.text[:_ERROR_BODY_LIMIT],
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamError(
                "Perplexity returned a non-JSON response",
                status_code=resp.status_code,
                body=resp.text[:_ERROR_BODY_LIMIT],
                cause=e,
            ) from e

        content = _message_content(data)
        logger.debug("Perplexity raw output: {}", content)
        try:
            parsed = json.loads(_extract_json_text(content))
        except json.JSONDecodeError as e:
            raise SchemaValidationError("Model output is not valid JSON", raw_text=content, cause=e) from e
        try:
            return schema.model_validate(parsed)
        except ValidationError as e:
            raise SchemaValidationError(
                f"Model output does not match {schema.__name__}: {e.error_count()} validation error(s)",
                raw_text=content,
                cause=e,
            ) from e
