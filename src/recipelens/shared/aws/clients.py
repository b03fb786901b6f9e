from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import boto3

from recipelens.shared.config.settings import Settings, settings


@dataclass
class AWSClients:
    rekognition: Any
    s3: Any
    bedrock_runtime: Any


def make_clients(cfg: Optional[Settings] = None, *, session: Optional[boto3.session.Session] = None) -> AWSClients:
    """
    Create the boto3 clients once per process; credentials come from the
    default provider chain.
    """
    cfg = cfg or settings
    session = session or boto3.session.Session(region_name=cfg.AWS_REGION)
    return AWSClients(
        rekognition=session.client("rekognition"),
        s3=session.client("s3"),
        bedrock_runtime=session.client("bedrock-runtime"),
    )
