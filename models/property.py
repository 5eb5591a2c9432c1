from sqlalchemy import Column, Integer, String, Numeric, Float, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class Property(Base):
     """
     Property model - a listed plot, house or apartment.

     `status` holds the normalized code (sale, rent, sold) or, when the
     submitted value was not recognized, the raw input.
     """
     __tablename__ = "properties"

     id = Column(Integer, primary_key=True, autoincrement=True)
     slug = Column(String(200), unique=True, nullable=False, index=True)
     title = Column(String(255), nullable=False)
     location = Column(String(255), nullable=True)
     price = Column(Numeric(14, 2), nullable=True)
     status = Column(String(50), nullable=True, index=True)
     category = Column(String(100), nullable=True, index=True)
     description = Column(Text, nullable=True)
     area = Column(Float, nullable=True)  # m²
     bedrooms = Column(Integer, nullable=True)
     bathrooms = Column(Integer, nullable=True)
     main_image = Column(String(500), nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     images = relationship(
          "PropertyImage",
          back_populates="property",
          cascade="all, delete-orphan",
          order_by="PropertyImage.order",
     )
     co_owners = relationship("CoOwnership", back_populates="property", cascade="all, delete-orphan")
     deals = relationship("Deal", back_populates="property", passive_deletes=True)

     def __repr__(self):
          return f"<Property(id={self.id}, slug='{self.slug}', status='{self.status}')>"


class PropertyImage(Base):
     """Gallery image of a property, displayed by ascending `order`."""
     __tablename__ = "property_images"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
     url = Column(String(500), nullable=False)
     alt = Column(String(255), nullable=True)
     order = Column(Integer, default=0, nullable=False)

     property = relationship("Property", back_populates="images")

     def __repr__(self):
          return f"<PropertyImage(id={self.id}, property_id={self.property_id}, order={self.order})>"
