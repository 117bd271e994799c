# money_manager/models/category.py
import uuid
import enum
from sqlalchemy import Column, String, ForeignKey, Boolean, DateTime, Enum, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
from money_manager.core.database import Base
from money_manager.utils.edit_window import utcnow

class CategoryType(str, enum.Enum):
    income = "income"
    expense = "expense"
    both = "both"

class Category(Base):
    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_categories_user_id_name"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(length=100), nullable=False)
    type = Column(Enum(CategoryType, name="category_type"), nullable=False, default=CategoryType.both)
    icon = Column(String(length=16), nullable=False, default="📁")
    color = Column(String(length=7), nullable=False, default="#6366f1")
    is_default = Column(Boolean(), nullable=False, default=False)  # True for the seeded categories, which cannot be deleted

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="categories")   # see core/auth.py

    def __repr__(self):
        return f"<Category name={self.name} type={self.type} user_id={self.user_id}>"
