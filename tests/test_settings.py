from recipelens.shared.config.settings import Settings


def test_stock_labels_by_default():
    assert Settings().custom_labels() is None


def test_custom_labels_need_both_arns():
    assert Settings(REKOGNITION_PROJECT_ARN="arn:project").custom_labels() is None


def test_custom_labels_config():
    cfg = Settings(
        REKOGNITION_PROJECT_ARN="arn:project",
        REKOGNITION_MODEL_ARN="arn:model",
        REKOGNITION_MIN_CONFIDENCE=70,
    ).custom_labels()
    assert cfg is not None
    assert cfg.model_arn == "arn:model"
    assert cfg.min_confidence == 70.0


def test_mongo_env_aliases(monkeypatch):
    monkeypatch.setenv("MONGO_URI", "mongodb://db:27017")
    monkeypatch.setenv("MONGO_DB", "kitchen")
    cfg = Settings()
    assert cfg.MONGODB_URI == "mongodb://db:27017"
    assert cfg.MONGODB_DB == "kitchen"
