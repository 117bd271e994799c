# money_manager/models/transaction.py
import uuid
import enum
from sqlalchemy import Column, String, ForeignKey, Float, DateTime, Enum, Uuid, Index
from sqlalchemy.orm import relationship
from money_manager.core.database import Base
from money_manager.utils.edit_window import utcnow, can_mutate

class TransactionType(str, enum.Enum):
    income = "income"
    expense = "expense"

class Division(str, enum.Enum):
    office = "office"
    personal = "personal"

class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_user_id_date", "user_id", "date"),
        Index("ix_transactions_user_id_type", "user_id", "type"),
        Index("ix_transactions_user_id_category", "user_id", "category"),
        Index("ix_transactions_user_id_division", "user_id", "division"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    type = Column(Enum(TransactionType, name="transaction_type"), nullable=False)
    amount = Column(Float, nullable=False)
    # Plain category name, matched against Category.name by value only
    category = Column(String(length=100), nullable=False)
    division = Column(Enum(Division, name="division"), nullable=False)
    description = Column(String(length=200), nullable=False)
    # Business date chosen by the user, distinct from created_at
    date = Column(DateTime, nullable=False)
    account = Column(String(length=100), nullable=False, default="default")

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="transactions")

    @property
    def can_edit(self) -> bool:
        return can_mutate(self.created_at)

    def __repr__(self):
        return f"<Transaction type={self.type} amount={self.amount} date={self.date} user_id={self.user_id}>"
