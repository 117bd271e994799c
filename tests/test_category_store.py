import pytest

from money_manager.core.exceptions import ConflictError
from money_manager.crud import category as category_store
from money_manager.crud.category import (
    create_category_for_user,
    get_categories_for_user,
    seed_default_categories_for_user,
    update_category_for_user,
)
from money_manager.schemas.category import CategoryCreate, CategoryUpdate


async def _name_lookup_misses(name, user_id, db):
    return None


async def test_duplicate_that_slips_past_the_lookup_is_a_conflict(session, user, monkeypatch) -> None:
    await create_category_for_user(user.id, CategoryCreate(name="Pets"), session)
    monkeypatch.setattr(category_store, "get_category_by_name_for_user", _name_lookup_misses)

    with pytest.raises(ConflictError):
        await create_category_for_user(user.id, CategoryCreate(name="Pets"), session)

    assert [c.name for c in await get_categories_for_user(user.id, session)] == ["Pets"]


async def test_rename_that_slips_past_the_lookup_is_a_conflict(session, user, monkeypatch) -> None:
    await create_category_for_user(user.id, CategoryCreate(name="Pets"), session)
    gifts = await create_category_for_user(user.id, CategoryCreate(name="Gifts"), session)
    monkeypatch.setattr(category_store, "get_category_by_name_for_user", _name_lookup_misses)

    with pytest.raises(ConflictError):
        await update_category_for_user(gifts.id, user.id, CategoryUpdate(name="Pets"), session)

    names = sorted(c.name for c in await get_categories_for_user(user.id, session))
    assert names == ["Gifts", "Pets"]


async def test_seeding_is_idempotent(session, user) -> None:
    first = await seed_default_categories_for_user(user.id, session)
    second = await seed_default_categories_for_user(user.id, session)

    assert len(first) == 12
    assert second == []
