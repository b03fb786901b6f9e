import pytest

from conftest import FakeImageStore, FakeRekognition
from recipelens.shared.config.settings import CustomLabelsConfig
from recipelens.shared.errors import InvalidInput, UpstreamError
from recipelens.features.detection.app.use_cases import DetectorService

CUSTOM = CustomLabelsConfig(
    project_arn="arn:aws:rekognition:us-east-1:123456789012:project/fridge/1",
    model_arn="arn:aws:rekognition:us-east-1:123456789012:project/fridge/version/v1/2",
    min_confidence=60.0,
)


def test_stock_labels_are_filtered():
    rek = FakeRekognition(labels=["Red Apple", "Rock", "Bread"])
    result = DetectorService(rek).detect(b"\x89PNG", "fridge.png", "user-1")

    assert [i.name for i in result.ingredients] == ["Red Apple", "Bread"]
    assert all(i.unit == "unit" and i.quantity == 1.0 for i in result.ingredients)
    assert result.image_url is None
    assert rek.calls == ["detect_labels"]


def test_no_food_in_photo_is_empty_list():
    result = DetectorService(FakeRekognition(labels=["Rock", "Sky"])).detect(b"data", "a.jpg", "user-1")
    assert result.ingredients == []


@pytest.mark.parametrize("filename", ["photo.gif", "photo", "", "archive.png.zip"])
def test_rejects_unsupported_extension(filename):
    rek = FakeRekognition(labels=["Apple"])
    with pytest.raises(InvalidInput):
        DetectorService(rek).detect(b"data", filename, "user-1")
    assert rek.calls == []


def test_extension_is_case_insensitive():
    result = DetectorService(FakeRekognition(labels=["Apple"])).detect(b"data", "PHOTO.JPEG", "user-1")
    assert len(result.ingredients) == 1


def test_rejects_empty_upload():
    with pytest.raises(InvalidInput):
        DetectorService(FakeRekognition()).detect(b"", "a.png", "user-1")


def test_rejects_oversized_upload():
    service = DetectorService(FakeRekognition(), max_upload_bytes=4)
    with pytest.raises(InvalidInput):
        service.detect(b"12345", "a.png", "user-1")


def test_upload_is_archived_when_store_is_configured():
    store = FakeImageStore("bucket")
    result = DetectorService(FakeRekognition(labels=["Egg"]), image_store=store).detect(b"img", "eggs.jpg", "user-7")

    assert len(store.objects) == 1
    key = next(iter(store.objects))
    assert key.startswith("uploads/user-7/") and key.endswith(".jpg")
    assert result.image_url == f"s3://bucket/{key}"


def test_custom_labels_use_exact_match():
    rek = FakeRekognition(custom={"apple": 91.2, "Apple Pie": 80.0})
    result = DetectorService(rek, custom_labels=CUSTOM).detect(b"img", "a.png", "user-1")

    assert rek.calls == ["ensure_model_running", "detect_custom_labels"]
    assert len(result.ingredients) == 1
    assert result.ingredients[0].name == "apple"
    assert result.ingredients[0].quantity == 91.2
    assert result.ingredients[0].unit == "confidence"


def test_custom_model_not_ready():
    rek = FakeRekognition(custom={"apple": 91.2}, ready=False)
    with pytest.raises(UpstreamError, match="not ready"):
        DetectorService(rek, custom_labels=CUSTOM).detect(b"img", "a.png", "user-1")
    assert "detect_custom_labels" not in rek.calls
