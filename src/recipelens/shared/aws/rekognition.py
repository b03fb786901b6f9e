from __future__ import annotations

import logging
from typing import Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from recipelens.shared.errors import UpstreamError

STATUS_RUNNING = "RUNNING"
STATUS_STOPPED = "STOPPED"


def model_version_from_arn(model_arn: str) -> str:
    """
    arn:aws:rekognition:<region>:<acct>:project/<project>/version/<name>/<ts> -> <name>
    """
    parts = (model_arn or "").split("/")
    try:
        idx = parts.index("version")
        name = parts[idx + 1]
    except (ValueError, IndexError):
        raise ValueError(f"no model version in ARN: {model_arn!r}")
    if not name:
        raise ValueError(f"no model version in ARN: {model_arn!r}")
    return name


class RekognitionGateway:
    """Thin wrapper around the boto3 Rekognition client."""

    def __init__(self, client, *, max_labels: int = 100, min_confidence: float = 50.0,
                 logger: Optional[logging.Logger] = None):
        self.client = client
        self.max_labels = max_labels
        self.min_confidence = min_confidence
        self.log = logger or logging.getLogger("recipelens.rekognition")

    def detect_labels(self, image: bytes) -> List[str]:
        try:
            out = self.client.detect_labels(
                Image={"Bytes": image},
                MaxLabels=self.max_labels,
                MinConfidence=self.min_confidence,
            )
        except (BotoCoreError, ClientError) as e:
            self.log.error("detect_labels failed: %s", e)
            raise UpstreamError(f"failed to detect labels: {e}") from e
        return [label["Name"] for label in out.get("Labels", []) if label.get("Name")]

    def detect_custom_labels(self, image: bytes, model_arn: str, min_confidence: float) -> Dict[str, float]:
        try:
            out = self.client.detect_custom_labels(
                Image={"Bytes": image},
                ProjectVersionArn=model_arn,
                MinConfidence=min_confidence,
            )
        except (BotoCoreError, ClientError) as e:
            self.log.error("detect_custom_labels failed: %s", e)
            raise UpstreamError(f"failed to detect custom labels: {e}") from e
        labels: Dict[str, float] = {}
        for label in out.get("CustomLabels", []):
            name = label.get("Name")
            if name:
                labels[name] = float(label.get("Confidence", 0.0))
        return labels

    def ensure_model_running(self, project_arn: str, model_arn: str, version_name: str = "") -> bool:
        """
        True when the model version is RUNNING. A STOPPED version is started
        with one inference unit and reported as not ready.
        """
        try:
            version = version_name or model_version_from_arn(model_arn)
        except ValueError as e:
            raise UpstreamError(f"failed to parse model ARN: {e}") from e

        try:
            out = self.client.describe_project_versions(ProjectArn=project_arn, VersionNames=[version])
        except (BotoCoreError, ClientError) as e:
            self.log.error("describe_project_versions failed: %s", e)
            raise UpstreamError(f"rekognition service check failed: {e}") from e

        descriptions = out.get("ProjectVersionDescriptions") or []
        if not descriptions:
            raise UpstreamError("no project version descriptions found")

        status = descriptions[0].get("Status")
        if status == STATUS_STOPPED:
            self.log.info("Starting Custom Labels model %s", model_arn)
            try:
                self.client.start_project_version(ProjectVersionArn=model_arn, MinInferenceUnits=1)
            except (BotoCoreError, ClientError) as e:
                raise UpstreamError(f"failed to start rekognition project version: {e}") from e
            return False
        return status == STATUS_RUNNING
