from sqlalchemy import Column, Integer, String, ForeignKey, Date, DateTime, Text, Numeric, Enum, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from tripplanner.core.database import Base
from tripplanner.utils.dates import utcnow
import enum

class BudgetCategory(str, enum.Enum):
    TRANSPORT = "TRANSPORT"
    ACCOMMODATION = "ACCOMMODATION"
    FOOD = "FOOD"
    ACTIVITIES = "ACTIVITIES"
    SHOPPING = "SHOPPING"
    EMERGENCY = "EMERGENCY"
    OTHER = "OTHER"

class Budget(Base):
    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    category = Column(Enum(BudgetCategory), nullable=False)
    planned_amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    trip = relationship("Trip", back_populates="budgets")
    expenses = relationship(
        "Expense",
        back_populates="budget",
        passive_deletes=True,
        order_by="Expense.date.desc()"
    )

    __table_args__ = (
        UniqueConstraint("trip_id", "category", name="uq_budget_trip_category"),
        Index("ix_budgets_trip_id", "trip_id"),
    )

class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    budget_id = Column(Integer, ForeignKey("budgets.id", ondelete="SET NULL"), nullable=True)
    description = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    date = Column(Date, nullable=False)
    # Free text, unlike Budget.category
    category = Column(String, nullable=False)
    location = Column(String, nullable=True)
    receipt_url = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    trip = relationship("Trip", back_populates="expenses")
    budget = relationship("Budget", back_populates="expenses")

    __table_args__ = (
        Index("ix_expenses_trip_id", "trip_id"),
        Index("ix_expenses_budget_id", "budget_id"),
        Index("ix_expenses_category", "category"),
        Index("ix_expenses_date", "date"),
    )
