import boto3
import pytest
from botocore.stub import Stubber

from recipelens.shared.aws.s3 import ImageStore
from recipelens.shared.errors import UpstreamError


@pytest.fixture
def s3():
    return boto3.client("s3", region_name="us-east-1", aws_access_key_id="testing", aws_secret_access_key="testing")


def test_upload_image_returns_s3_url(s3):
    store = ImageStore(s3, "fridge-photos")
    with Stubber(s3) as stub:
        stub.add_response(
            "put_object",
            {"ETag": '"abc"'},
            {"Bucket": "fridge-photos", "Key": "uploads/u1/x.png", "Body": b"img", "ContentType": "image/png"},
        )
        assert store.upload_image("uploads/u1/x.png", b"img", "image/png") == "s3://fridge-photos/uploads/u1/x.png"


def test_upload_failure_is_upstream_error(s3):
    store = ImageStore(s3, "fridge-photos")
    with Stubber(s3) as stub:
        stub.add_client_error("put_object", service_error_code="AccessDenied", http_status_code=403)
        with pytest.raises(UpstreamError):
            store.upload_image("uploads/u1/x.png", b"img", "image/png")
