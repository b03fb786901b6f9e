from __future__ import annotations

import logging
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from recipelens.shared.errors import UpstreamError


class ImageStore:
    """Uploaded images in a single S3 bucket."""

    def __init__(self, client, bucket: str, logger: Optional[logging.Logger] = None):
        self.client = client
        self.bucket = bucket
        self.log = logger or logging.getLogger("recipelens.s3")

    def upload_image(self, key: str, data: bytes, content_type: str = "application/octet-stream") -> str:
        try:
            self.client.put_object(Bucket=self.bucket, Key=key, Body=data, ContentType=content_type)
        except (BotoCoreError, ClientError) as e:
            self.log.error("put_object failed for %s: %s", key, e)
            raise UpstreamError(f"failed to upload image to S3: {e}") from e
        return f"s3://{self.bucket}/{key}"

