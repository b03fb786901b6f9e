from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.database import Database

from recipelens.shared.config.settings import Settings, settings as default_settings
from recipelens.shared.errors import register_exception_handlers
from recipelens.shared.logging.logger import RequestLoggingMiddleware, setup_logging
from recipelens.shared.persistence.mongo import ensure_indexes, get_db
from recipelens.shared.aws.clients import make_clients
from recipelens.shared.aws.rekognition import RekognitionGateway
from recipelens.shared.aws.s3 import ImageStore
from recipelens.shared.llm.bedrock_client import BedrockClient

from recipelens.features.auth.app.security import TokenIssuer
from recipelens.features.auth.app.use_cases import AuthService
from recipelens.features.auth.infra.user_repository import UserRepository
from recipelens.features.detection.app.use_cases import DetectorService
from recipelens.features.recipes.app.saved import SavedRecipeService
from recipelens.features.recipes.app.use_cases import RecipeService
from recipelens.features.recipes.infra.recipe_repository import RecipeRepository

from recipelens.shared.api.health import router as health_router
from recipelens.features.auth.api.routes import router as auth_router, me_router
from recipelens.features.detection.api.routes import router as detection_router
from recipelens.features.recipes.api.routes import router as recipes_router

log = logging.getLogger("recipelens.app")


@dataclass
class Services:
    auth: AuthService
    detector: DetectorService
    recipes: RecipeService
    saved_recipes: SavedRecipeService
    startup: Optional[Callable[[], None]] = None


def build_services(cfg: Settings, db: Optional[Database] = None) -> Services:
    """Wire every service from settings; each gets its own named logger."""
    db = db if db is not None else get_db(cfg)
    aws = make_clients(cfg)

    recipe_repo = RecipeRepository(
        db.get_collection(cfg.RECIPES_COLLECTION), logger=logging.getLogger("recipelens.recipes.repo")
    )
    saved = SavedRecipeService(recipe_repo, logger=logging.getLogger("recipelens.recipes.saved"))

    auth = AuthService(
        UserRepository(db.get_collection(cfg.USERS_COLLECTION), logger=logging.getLogger("recipelens.users")),
        TokenIssuer(cfg.JWT_SECRET, timedelta(hours=cfg.JWT_EXPIRY_HOURS), algorithm=cfg.JWT_ALGORITHM),
        recipes=saved,
        logger=logging.getLogger("recipelens.auth"),
    )

    custom_labels = cfg.custom_labels()
    if custom_labels is not None:
        log.info("Using Custom Labels model %s", custom_labels.model_arn)
    detector = DetectorService(
        RekognitionGateway(
            aws.rekognition,
            max_labels=cfg.REKOGNITION_MAX_LABELS,
            min_confidence=cfg.REKOGNITION_MIN_CONFIDENCE,
            logger=logging.getLogger("recipelens.rekognition"),
        ),
        image_store=ImageStore(aws.s3, cfg.S3_BUCKET, logger=logging.getLogger("recipelens.s3")) if cfg.S3_BUCKET else None,
        custom_labels=custom_labels,
        max_upload_bytes=cfg.MAX_UPLOAD_BYTES,
        logger=logging.getLogger("recipelens.detector"),
    )

    recipes = RecipeService(
        BedrockClient(
            aws.bedrock_runtime,
            cfg.BEDROCK_MODEL_ID,
            anthropic_version=cfg.BEDROCK_ANTHROPIC_VERSION,
            max_tokens=cfg.BEDROCK_MAX_TOKENS,
            logger=logging.getLogger("recipelens.bedrock"),
        ),
        logger=logging.getLogger("recipelens.recipes"),
    )

    return Services(
        auth=auth,
        detector=detector,
        recipes=recipes,
        saved_recipes=saved,
        startup=lambda: ensure_indexes(db, cfg, logger=logging.getLogger("recipelens.mongo")),
    )


def _split_or_all(value: Optional[str]):
    if value and value != "*":
        return [v.strip() for v in value.split(",")]
    return ["*"]


def create_app(cfg: Optional[Settings] = None, services: Optional[Services] = None) -> FastAPI:
    cfg = cfg or default_settings
    setup_logging(cfg)
    app = FastAPI(title="RecipeLens", version="1.0.0")

    services = services or build_services(cfg)
    app.state.auth_service = services.auth
    app.state.detector_service = services.detector
    app.state.recipe_service = services.recipes
    app.state.saved_recipe_service = services.saved_recipes

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_split_or_all(cfg.CORS_ALLOW_ORIGINS),
        allow_credentials=cfg.CORS_ALLOW_CREDENTIALS,
        allow_methods=_split_or_all(cfg.CORS_ALLOW_METHODS),
        allow_headers=_split_or_all(cfg.CORS_ALLOW_HEADERS),
    )
    app.add_middleware(RequestLoggingMiddleware, logger=logging.getLogger("recipelens.http"))
    register_exception_handlers(app)

    # Routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(me_router,        prefix="/api/v1")
    app.include_router(detection_router, prefix="/api/v1")
    app.include_router(recipes_router,   prefix="/api/v1")

    @app.on_event("startup")
    def _on_startup():
        if services.startup is None:
            return
        try:
            services.startup()
        except Exception:
            log.warning("ensure_indexes failed or is a no-op", exc_info=True)

    log.info("Application created")
    return app
