from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Protocol

from botocore.exceptions import BotoCoreError, ClientError

from recipelens.shared.errors import UpstreamError

DEFAULT_ANTHROPIC_VERSION = "bedrock-2023-05-31"
DEFAULT_MAX_TOKENS = 2048


class LanguageModel(Protocol):
    def complete(self, prompt: str) -> str: ...


def build_request_body(
    prompt: str,
    *,
    anthropic_version: str = DEFAULT_ANTHROPIC_VERSION,
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> Dict[str, Any]:
    """
    Wrap a prompt in the Anthropic messages envelope Bedrock expects.
    """
    return {
        "anthropic_version": anthropic_version,
        "max_tokens": max_tokens,
        "messages": [{"role": "user", "content": prompt}],
    }


def first_text_block(result: Any) -> str:
    """
    Return content[0].text from a decoded model response.
    """
    content = result.get("content") if isinstance(result, dict) else None
    if isinstance(content, list) and content:
        block = content[0]
        if isinstance(block, dict) and isinstance(block.get("text"), str):
            return block["text"]
    raise UpstreamError("unexpected response format from Bedrock")


class BedrockClient:
    """Single-shot completions against an Anthropic model on Bedrock."""

    def __init__(
        self,
        client,
        model_id: str,
        *,
        anthropic_version: str = DEFAULT_ANTHROPIC_VERSION,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        logger: Optional[logging.Logger] = None,
    ):
        self.client = client
        self.model_id = model_id
        self.anthropic_version = anthropic_version
        self.max_tokens = max_tokens
        self.log = logger or logging.getLogger("recipelens.bedrock")

    def complete(self, prompt: str) -> str:
        body = build_request_body(
            prompt, anthropic_version=self.anthropic_version, max_tokens=self.max_tokens
        )
        payload = json.dumps(body)
        self.log.debug("Invoking Bedrock model %s (payload %d bytes)", self.model_id, len(payload))
        try:
            output = self.client.invoke_model(
                modelId=self.model_id,
                contentType="application/json",
                accept="application/json",
                body=payload,
            )
            raw = output["body"].read()
        except (BotoCoreError, ClientError) as e:
            self.log.error("Bedrock model invocation failed (model=%s): %s", self.model_id, e)
            raise UpstreamError(f"failed to invoke model: {e}") from e

        try:
            result = json.loads(raw)
        except ValueError as e:
            self.log.error("Failed to decode Bedrock response: %s", e)
            raise UpstreamError("failed to parse model response") from e

        text = first_text_block(result)
        self.log.debug("Bedrock returned %d characters", len(text))
        return text
