# models/savings_goal.py
import datetime
from sqlalchemy import Column, Integer, Numeric, Date, DateTime, String, ForeignKey
from sqlalchemy.orm import relationship
from . import Base


class SavingsGoal(Base):
    __tablename__ = "savings_goals"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    target_amount = Column(Numeric(12, 2, asdecimal=True), nullable=False)
    current_amount = Column(Numeric(12, 2, asdecimal=True), nullable=False, default=0)
    deadline = Column(Date, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    user_id = Column(Integer, ForeignKey('users.id', ondelete="CASCADE"), nullable=False, index=True)

    user = relationship("User", back_populates="savings_goals")
