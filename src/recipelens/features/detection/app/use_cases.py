from __future__ import annotations

import logging
import os
from typing import Optional

from recipelens.shared.aws.rekognition import RekognitionGateway
from recipelens.shared.aws.s3 import ImageStore
from recipelens.shared.config.settings import CustomLabelsConfig
from recipelens.shared.errors import InvalidInput, UpstreamError
from recipelens.shared.utils.id_utils import upload_key
from recipelens.features.detection.domain.classifier import (
    confidence_labels_to_ingredients,
    labels_to_ingredients,
)
from recipelens.features.detection.domain.models import IngredientList

ALLOWED_EXTENSIONS = {"png", "jpg", "jpeg"}
DEFAULT_MAX_UPLOAD_BYTES = 16 * 1024 * 1024


def _extension(filename: str) -> str:
    return os.path.splitext(filename or "")[1].lower().lstrip(".")


class DetectorService:
    """
    Detects ingredients in an uploaded photo.

    Uses the trained Custom Labels model when one is configured and the
    stock Rekognition labels otherwise.
    """

    def __init__(
        self,
        rekognition: RekognitionGateway,
        *,
        image_store: Optional[ImageStore] = None,
        custom_labels: Optional[CustomLabelsConfig] = None,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        logger: Optional[logging.Logger] = None,
    ):
        self.rekognition = rekognition
        self.image_store = image_store
        self.custom_labels = custom_labels
        self.max_upload_bytes = max_upload_bytes
        self.log = logger or logging.getLogger("recipelens.detector")

    def _check_upload(self, image: bytes, filename: str) -> str:
        ext = _extension(filename)
        if ext not in ALLOWED_EXTENSIONS:
            raise InvalidInput("Invalid image file: expected png, jpg or jpeg")
        if not image:
            raise InvalidInput("Invalid image file: empty upload")
        if len(image) > self.max_upload_bytes:
            raise InvalidInput(f"Invalid image file: larger than {self.max_upload_bytes} bytes")
        return ext

    def detect(self, image: bytes, filename: str, user_id: str, content_type: str = "") -> IngredientList:
        self.log.info("Starting ingredient detection | file=%s | bytes=%d", filename, len(image or b""))
        ext = self._check_upload(image, filename)

        image_url = None
        if self.image_store is not None:
            image_url = self.image_store.upload_image(
                upload_key(user_id, ext), image, content_type or f"image/{'jpeg' if ext == 'jpg' else ext}"
            )

        if self.custom_labels is None:
            labels = self.rekognition.detect_labels(image)
            ingredients = labels_to_ingredients(labels)
        else:
            cfg = self.custom_labels
            ready = self.rekognition.ensure_model_running(cfg.project_arn, cfg.model_arn, cfg.model_version)
            if not ready:
                self.log.info("Custom Labels model is not ready yet | model=%s", cfg.model_arn)
                raise UpstreamError("rekognition project version is not ready yet")
            labels = self.rekognition.detect_custom_labels(image, cfg.model_arn, cfg.min_confidence)
            ingredients = confidence_labels_to_ingredients(labels)

        self.log.info("Ingredient detection completed | file=%s | labels=%d | ingredients=%d",
                      filename, len(labels), len(ingredients))
        return IngredientList(ingredients=ingredients, image_url=image_url)
