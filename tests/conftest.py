from __future__ import annotations

import json
from datetime import timedelta
from typing import Dict, List, Optional

import mongomock
import pytest
from fastapi.testclient import TestClient

from recipelens.app import Services, create_app
from recipelens.shared.config.settings import Settings
from recipelens.features.auth.app.security import TokenIssuer
from recipelens.features.auth.app.use_cases import AuthService
from recipelens.features.auth.infra.user_repository import UserRepository
from recipelens.features.detection.app.use_cases import DetectorService
from recipelens.features.recipes.app.saved import SavedRecipeService
from recipelens.features.recipes.app.use_cases import RecipeService
from recipelens.features.recipes.infra.recipe_repository import RecipeRepository

TEST_SECRET = "test-secret-key-with-at-least-32-bytes!"

SAMPLE_RECIPES = {
    "recipes": [
        {
            "name": "Tomato Omelette",
            "cuisine": "French",
            "cooking_time": "15 minutes",
            "difficulty": "Easy",
            "ingredients": ["2 eggs", "1 tomato"],
            "instructions": ["Beat the eggs", "Cook with diced tomato"],
            "nutrition": "250 kcal",
            "tips": "Season at the end",
        },
        {
            "name": "Tomato Toast",
            "cuisine": "Spanish",
            "cooking_time": "5 minutes",
            "difficulty": "Easy",
            "ingredients": ["bread", "tomato"],
            "instructions": ["Toast the bread", "Rub with tomato"],
        },
    ]
}


class FakeLLM:
    def __init__(self, reply: str = "", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeRekognition:
    def __init__(self, labels: Optional[List[str]] = None, custom: Optional[Dict[str, float]] = None,
                 ready: bool = True):
        self.labels = labels or []
        self.custom = custom or {}
        self.ready = ready
        self.calls: List[str] = []

    def detect_labels(self, image: bytes) -> List[str]:
        self.calls.append("detect_labels")
        return list(self.labels)

    def detect_custom_labels(self, image: bytes, model_arn: str, min_confidence: float) -> Dict[str, float]:
        self.calls.append("detect_custom_labels")
        return dict(self.custom)

    def ensure_model_running(self, project_arn: str, model_arn: str, version_name: str = "") -> bool:
        self.calls.append("ensure_model_running")
        return self.ready


class FakeImageStore:
    def __init__(self, bucket: str = "uploads-bucket"):
        self.bucket = bucket
        self.objects: Dict[str, bytes] = {}

    def upload_image(self, key: str, data: bytes, content_type: str = "") -> str:
        self.objects[key] = data
        return f"s3://{self.bucket}/{key}"


@pytest.fixture
def cfg() -> Settings:
    return Settings(JWT_SECRET=TEST_SECRET, LOG_LEVEL="WARNING")


@pytest.fixture
def db():
    return mongomock.MongoClient()["recipelens_test"]


@pytest.fixture
def tokens() -> TokenIssuer:
    return TokenIssuer(TEST_SECRET, timedelta(hours=1))


@pytest.fixture
def recipe_repo(db) -> RecipeRepository:
    return RecipeRepository(db.recipes)


@pytest.fixture
def saved_service(recipe_repo) -> SavedRecipeService:
    return SavedRecipeService(recipe_repo)


@pytest.fixture
def auth_service(db, tokens, saved_service) -> AuthService:
    return AuthService(UserRepository(db.users), tokens, recipes=saved_service)


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM(reply=json.dumps(SAMPLE_RECIPES))


@pytest.fixture
def fake_rekognition() -> FakeRekognition:
    return FakeRekognition(labels=["Red Apple", "Rock", "Bread"])


@pytest.fixture
def client(cfg, auth_service, saved_service, fake_llm, fake_rekognition) -> TestClient:
    services = Services(
        auth=auth_service,
        detector=DetectorService(fake_rekognition),
        recipes=RecipeService(fake_llm),
        saved_recipes=saved_service,
    )
    return TestClient(create_app(cfg, services))


@pytest.fixture
def auth_headers(client) -> Dict[str, str]:
    r = client.post("/auth/register", json={"email": "cook@example.com", "password": "secret123", "name": "Cook"})
    assert r.status_code == 201
    return {"Authorization": f"Bearer {r.json()['token']}"}
