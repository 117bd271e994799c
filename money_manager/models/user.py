# money_manager/models/user.py
import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Uuid
from sqlalchemy.orm import relationship
from money_manager.core.database import Base
from money_manager.utils.edit_window import utcnow

# Column names follow what fastapi-users' SQLAlchemyUserDatabase expects
class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(length=320), unique=True, index=True, nullable=False)
    hashed_password = Column(String(length=1024), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    is_superuser = Column(Boolean, default=False, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)

    name = Column(String(length=100), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    categories = relationship(
        "Category",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    transactions = relationship(
        "Transaction",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<User email={self.email}>"
