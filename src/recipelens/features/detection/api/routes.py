from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile

from recipelens.shared.errors import InvalidInput
from recipelens.features.auth.api.deps import current_user
from recipelens.features.auth.domain.models import User
from recipelens.features.detection.app.use_cases import DetectorService

router = APIRouter(tags=["detection"])


def get_detector_service(request: Request) -> DetectorService:
    return request.app.state.detector_service


@router.post("/detect")
def detect_ingredients(
    image: Optional[UploadFile] = File(default=None),
    user: User = Depends(current_user),
    detector: DetectorService = Depends(get_detector_service),
):
    if image is None:
        raise InvalidInput("Invalid image file")
    # one byte past the limit is enough for the size check
    data = image.file.read(detector.max_upload_bytes + 1)
    result = detector.detect(data, image.filename or "", user.id, image.content_type or "")
    return result.model_dump(exclude_none=True)
