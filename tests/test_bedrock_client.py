import io
import json

import boto3
import pytest
from botocore.response import StreamingBody
from botocore.stub import ANY, Stubber

from recipelens.shared.errors import UpstreamError
from recipelens.shared.llm.bedrock_client import BedrockClient, build_request_body, first_text_block

MODEL_ID = "anthropic.claude-3-haiku-20240307-v1:0"


def _runtime():
    return boto3.client(
        "bedrock-runtime",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


def _body(payload) -> StreamingBody:
    raw = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
    return StreamingBody(io.BytesIO(raw), len(raw))


def _expected_params():
    return {"modelId": MODEL_ID, "contentType": "application/json", "accept": "application/json", "body": ANY}


def test_request_body_shape():
    body = build_request_body("hello", anthropic_version="bedrock-2023-05-31", max_tokens=512)
    assert body == {
        "anthropic_version": "bedrock-2023-05-31",
        "max_tokens": 512,
        "messages": [{"role": "user", "content": "hello"}],
    }


def test_complete_returns_first_text_block():
    client = _runtime()
    llm = BedrockClient(client, MODEL_ID)
    with Stubber(client) as stub:
        stub.add_response(
            "invoke_model",
            {"body": _body({"content": [{"type": "text", "text": "hi there"}]}), "contentType": "application/json"},
            _expected_params(),
        )
        assert llm.complete("say hi") == "hi there"
        stub.assert_no_pending_responses()


def test_client_error_is_upstream_error():
    client = _runtime()
    llm = BedrockClient(client, MODEL_ID)
    with Stubber(client) as stub:
        stub.add_client_error("invoke_model", service_error_code="ThrottlingException", http_status_code=429)
        with pytest.raises(UpstreamError):
            llm.complete("say hi")


def test_undecodable_body_is_upstream_error():
    client = _runtime()
    llm = BedrockClient(client, MODEL_ID)
    with Stubber(client) as stub:
        stub.add_response(
            "invoke_model",
            {"body": _body(b"not json"), "contentType": "application/json"},
            _expected_params(),
        )
        with pytest.raises(UpstreamError):
            llm.complete("say hi")


@pytest.mark.parametrize("result", [{}, {"content": []}, {"content": [{"type": "image"}]}, ["text"]])
def test_unexpected_format(result):
    with pytest.raises(UpstreamError, match="unexpected response format"):
        first_text_block(result)
