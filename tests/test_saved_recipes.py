from datetime import datetime, timedelta, timezone

import pytest

from recipelens.shared.errors import NotFound
from recipelens.features.recipes.app.saved import SavedRecipeService
from recipelens.features.recipes.domain.models import Recipe


def _clock(start):
    state = {"t": start}

    def now():
        state["t"] += timedelta(milliseconds=250)
        return state["t"]

    return now


@pytest.fixture
def service(recipe_repo):
    return SavedRecipeService(recipe_repo, now=_clock(datetime(2024, 1, 1, tzinfo=timezone.utc)))


def test_save_and_get(service):
    recipe = Recipe(name="Soup", cuisine="French", ingredients=["leek"], instructions=["Boil"])
    saved = service.save("user-1", recipe)

    assert saved.id
    assert saved.user_id == "user-1"
    assert saved.created_at == saved.updated_at

    fetched = service.get(saved.id, "user-1")
    assert fetched.name == "Soup"
    assert fetched.ingredients == ["leek"]
    assert fetched.created_at == saved.created_at
    assert fetched.nutrition is None


def test_list_is_newest_first_and_per_user(service):
    first = service.save("user-1", Recipe(name="First"))
    second = service.save("user-1", Recipe(name="Second"))
    service.save("user-2", Recipe(name="Elsewhere"))

    rows = service.list_for_user("user-1")
    assert [r.id for r in rows] == [second.id, first.id]
    assert service.list_for_user("nobody") == []


def test_unreadable_documents_are_skipped(service, db):
    service.save("user-1", Recipe(name="Good"))
    db.recipes.insert_one({"id": "broken", "user_id": "user-1", "created_at": "not a date"})

    rows = service.list_for_user("user-1")
    assert [r.name for r in rows] == ["Good"]


def test_other_users_recipe_is_not_found(service):
    saved = service.save("user-1", Recipe(name="Private"))
    with pytest.raises(NotFound):
        service.get(saved.id, "user-2")
    with pytest.raises(NotFound):
        service.delete(saved.id, "user-2")
    assert service.get(saved.id, "user-1").name == "Private"


def test_delete(service):
    saved = service.save("user-1", Recipe(name="Soup"))
    service.delete(saved.id, "user-1")
    with pytest.raises(NotFound):
        service.get(saved.id, "user-1")
    with pytest.raises(NotFound):
        service.delete(saved.id, "user-1")


def test_delete_all_for_user(service):
    service.save("user-1", Recipe(name="A"))
    service.save("user-1", Recipe(name="B"))
    assert service.delete_all_for_user("user-1") == 2
    assert service.list_for_user("user-1") == []
