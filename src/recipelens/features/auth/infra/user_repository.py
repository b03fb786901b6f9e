from __future__ import annotations

import logging
from typing import Optional

from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from recipelens.shared.errors import AlreadyExists
from recipelens.features.auth.domain.models import User


class UserRepository:
    """Users in a Mongo collection, keyed by `id`, with a unique `email` index."""

    def __init__(self, collection: Collection, logger: Optional[logging.Logger] = None):
        self.coll = collection
        self.log = logger or logging.getLogger("recipelens.users")

    def create(self, user: User) -> None:
        doc = user.model_dump(mode="json")
        try:
            self.coll.insert_one(doc)
        except DuplicateKeyError as e:
            raise AlreadyExists("User already exists") from e

    def get_by_email(self, email: str) -> Optional[User]:
        doc = self.coll.find_one({"email": email}, {"_id": 0})
        return User.model_validate(doc) if doc else None

    def get_by_id(self, user_id: str) -> Optional[User]:
        doc = self.coll.find_one({"id": user_id}, {"_id": 0})
        return User.model_validate(doc) if doc else None

    def delete(self, user_id: str) -> bool:
        return self.coll.delete_one({"id": user_id}).deleted_count > 0
