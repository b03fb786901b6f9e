from __future__ import annotations

import logging
from typing import Optional

from pymongo import MongoClient, ASCENDING, DESCENDING
from pymongo.database import Database
from pymongo.errors import OperationFailure

from recipelens.shared.config.settings import Settings, settings

_client: Optional[MongoClient] = None


def get_client(cfg: Optional[Settings] = None) -> MongoClient:
    global _client
    if _client is None:
        _client = MongoClient((cfg or settings).MONGODB_URI)
    return _client


def get_db(cfg: Optional[Settings] = None) -> Database:
    cfg = cfg or settings
    return get_client(cfg)[cfg.MONGODB_DB]


def ensure_indexes(db: Database, cfg: Optional[Settings] = None, logger: Optional[logging.Logger] = None) -> None:
    """Create indexes for collections if they do not exist."""
    cfg = cfg or settings
    log = logger or logging.getLogger("recipelens.mongo")
    users = db.get_collection(cfg.USERS_COLLECTION)
    recipes = db.get_collection(cfg.RECIPES_COLLECTION)
    try:
        if "user_id_unique" not in users.index_information():
            users.create_index([("id", ASCENDING)], name="user_id_unique", unique=True)
        if "email_unique" not in users.index_information():
            users.create_index([("email", ASCENDING)], name="email_unique", unique=True)
        if "recipe_id_created" not in recipes.index_information():
            recipes.create_index(
                [("id", ASCENDING), ("created_at", DESCENDING)],
                name="recipe_id_created",
                unique=True,
            )
        if "recipe_user_id" not in recipes.index_information():
            recipes.create_index([("user_id", ASCENDING)], name="recipe_user_id")
    except OperationFailure as e:
        log.warning("ensure_indexes failed: %s", e)
