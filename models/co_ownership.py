# models/co_ownership.py
from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from .base import Base


class CoOwnership(Base):
     """
     Fractional share of a property held by a client (0 < share <= 1).
     """
     __tablename__ = "co_ownerships"
     __table_args__ = (
          UniqueConstraint("property_id", "client_id", name="uq_co_ownership_property_client"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
     client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
     share = Column(Float, nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     property = relationship("Property", back_populates="co_owners")
     client = relationship("Client", back_populates="co_ownerships")

     def __repr__(self):
          return f"<CoOwnership(property_id={self.property_id}, client_id={self.client_id}, share={self.share})>"
