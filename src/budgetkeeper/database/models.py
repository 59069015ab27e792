"""SQLAlchemy models for budgetkeeper database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    type = Column(String, nullable=False)
    category = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(Date, nullable=False, index=True)
    description = Column(String, nullable=False, default="")
    # Soft reference: deleting a rule deletes its transactions explicitly
    recurring_id = Column(Integer, nullable=True, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    tags = relationship(
        "TransactionTag", back_populates="transaction", cascade="all, delete-orphan"
    )


class TransactionTag(Base):
    """Tag attached to a transaction."""

    __tablename__ = "transaction_tags"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False)
    tag = Column(String, nullable=False)

    __table_args__ = (UniqueConstraint("transaction_id", "tag", name="uq_transaction_tag"),)

    # Relationships
    transaction = relationship("Transaction", back_populates="tags")


class RecurringRule(Base):
    """Recurring transaction rule model."""

    __tablename__ = "recurring_rules"

    id = Column(Integer, primary_key=True)
    type = Column(String, nullable=False)
    category = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String, nullable=False, default="")
    frequency = Column(String, nullable=False)
    start_date = Column(Date, nullable=False)
    last_generated = Column(Date, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    tags = relationship(
        "RecurringRuleTag", back_populates="rule", cascade="all, delete-orphan"
    )


class RecurringRuleTag(Base):
    """Tag copied onto every transaction a rule generates."""

    __tablename__ = "recurring_rule_tags"

    id = Column(Integer, primary_key=True)
    rule_id = Column(Integer, ForeignKey("recurring_rules.id"), nullable=False)
    tag = Column(String, nullable=False)

    __table_args__ = (UniqueConstraint("rule_id", "tag", name="uq_rule_tag"),)

    # Relationships
    rule = relationship("RecurringRule", back_populates="tags")


class Budget(Base):
    """Monthly budget for one category."""

    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True)
    category = Column(String, unique=True, nullable=False)
    monthly_limit = Column(Numeric(12, 2), nullable=False)


class Goal(Base):
    """Financial goal model."""

    __tablename__ = "goals"

    id = Column(Integer, primary_key=True)
    type = Column(String, nullable=False)
    category = Column(String, nullable=True)
    target_amount = Column(Numeric(12, 2), nullable=False)
    start_date = Column(Date, nullable=False)
    target_date = Column(Date, nullable=False)
    description = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Category(Base):
    """Category name available for one transaction type."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    category_type = Column(String, nullable=False)

    __table_args__ = (UniqueConstraint("category_type", "name", name="uq_category_type_name"),)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
