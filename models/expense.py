from sqlalchemy import Column, Integer, String, Numeric, Date, Text, DateTime, func
from .base import Base


class Expense(Base):
     __tablename__ = "expenses"

     id = Column(Integer, primary_key=True, autoincrement=True)
     date = Column(Date, nullable=False, index=True)
     amount = Column(Numeric(14, 2), nullable=False)
     category = Column(String(100), nullable=True, index=True)
     description = Column(Text, nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     def __repr__(self):
          return f"<Expense(id={self.id}, amount={self.amount}, category='{self.category}')>"
