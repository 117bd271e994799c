# money_manager/crud/category.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from money_manager.core.exceptions import ConflictError, DefaultCategoryError, NotFoundError
from money_manager.models.category import Category, CategoryType
from typing import List, Optional
import logging
import uuid
from money_manager.schemas.category import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)

async def get_categories_for_user(
    user_id: uuid.UUID,
    db: AsyncSession,
    category_type: Optional[CategoryType] = None,
) -> List[Category]:
    """List a user's categories by name; a type filter also admits "both" categories."""
    query = select(Category).where(Category.user_id == user_id)
    if category_type is not None and category_type != CategoryType.both:
        query = query.where(or_(Category.type == category_type, Category.type == CategoryType.both))
    result = await db.execute(query.order_by(Category.name))
    return result.scalars().all()

async def get_category_by_id(category_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Category]:
    result = await db.execute(
        select(Category).where(Category.id == category_id, Category.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def get_owned_category(category_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Category:
    category = await get_category_by_id(category_id, user_id, db)
    if category is None:
        raise NotFoundError("Category not found")
    return category

async def get_category_by_name_for_user(name: str, user_id: uuid.UUID, db: AsyncSession) -> Optional[Category]:
    result = await db.execute(
        select(Category).where(Category.user_id == user_id, Category.name == name)
    )
    return result.scalar_one_or_none()

async def _commit_unique_name(category: Category, db: AsyncSession) -> Category:
    """Commit a new or renamed category; a name taken meanwhile is a conflict."""
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Category with this name already exists")
    await db.refresh(category)
    return category

async def create_category_for_user(user_id: uuid.UUID, cat_in: CategoryCreate, db: AsyncSession) -> Category:
    if await get_category_by_name_for_user(cat_in.name, user_id, db) is not None:
        raise ConflictError("Category with this name already exists")
    new_cat = Category(**cat_in.model_dump(), user_id=user_id, is_default=False)
    db.add(new_cat)
    return await _commit_unique_name(new_cat, db)

async def update_category_for_user(
    category_id: uuid.UUID,
    user_id: uuid.UUID,
    cat_in: CategoryUpdate,
    db: AsyncSession,
) -> Category:
    category = await get_owned_category(category_id, user_id, db)
    changes = cat_in.model_dump(exclude_unset=True, exclude_none=True)
    new_name = changes.get("name")
    if new_name and new_name != category.name:
        if await get_category_by_name_for_user(new_name, user_id, db) is not None:
            raise ConflictError("Category with this name already exists")
    for field, value in changes.items():
        setattr(category, field, value)
    db.add(category)
    return await _commit_unique_name(category, db)

async def delete_category_for_user(category_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> None:
    category = await get_owned_category(category_id, user_id, db)
    if category.is_default:
        raise DefaultCategoryError()
    await db.delete(category)
    await db.commit()
    logger.info(f"Category {category.name} deleted by user {user_id}")


# Default categories to be created for every new user
DEFAULT_CATEGORIES: List[dict] = [
    {"name": "Salary", "type": CategoryType.income, "icon": "💰", "color": "#10b981"},
    {"name": "Freelance", "type": CategoryType.income, "icon": "💼", "color": "#3b82f6"},
    {"name": "Investment", "type": CategoryType.income, "icon": "📈", "color": "#8b5cf6"},
    {"name": "Food", "type": CategoryType.expense, "icon": "🍔", "color": "#ef4444"},
    {"name": "Fuel", "type": CategoryType.expense, "icon": "⛽", "color": "#f59e0b"},
    {"name": "Movie", "type": CategoryType.expense, "icon": "🎬", "color": "#ec4899"},
    {"name": "Medical", "type": CategoryType.expense, "icon": "🏥", "color": "#06b6d4"},
    {"name": "Loan", "type": CategoryType.expense, "icon": "🏦", "color": "#6366f1"},
    {"name": "Shopping", "type": CategoryType.expense, "icon": "🛍️", "color": "#a855f7"},
    {"name": "Transport", "type": CategoryType.expense, "icon": "🚗", "color": "#14b8a6"},
    {"name": "Bills", "type": CategoryType.expense, "icon": "📄", "color": "#f97316"},
    {"name": "Entertainment", "type": CategoryType.expense, "icon": "🎮", "color": "#84cc16"},
]

async def seed_default_categories_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Category]:
    """Create the default categories the user does not have yet.

    Returns the list of categories that were created (empty if none were needed).
    """
    result = await db.execute(select(Category.name).where(Category.user_id == user_id))
    existing_names = {row[0] for row in result.all()}

    categories_to_create: List[Category] = [
        Category(user_id=user_id, is_default=True, **cat)
        for cat in DEFAULT_CATEGORIES
        if cat["name"] not in existing_names
    ]

    if categories_to_create:
        db.add_all(categories_to_create)
        await db.commit()
        for c in categories_to_create:
            await db.refresh(c)

    return categories_to_create
