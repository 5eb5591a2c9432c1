from sqlalchemy import Column, Integer, String, Text, DateTime, func
from sqlalchemy.orm import relationship
from .base import Base


class Client(Base):
     """
     Client model - a buyer, tenant or co-owner known to the sales team.
     """
     __tablename__ = "clients"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(200), nullable=False, index=True)
     email = Column(String(255), nullable=True)
     phone = Column(String(50), nullable=True)
     address = Column(String(500), nullable=True)
     notes = Column(Text, nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     deals = relationship("Deal", back_populates="client")
     co_ownerships = relationship("CoOwnership", back_populates="client", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<Client(id={self.id}, name='{self.name}')>"
