from sqlalchemy import Column, Integer, String, Float, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class Project(Base):
     """
     Project model - a land-development or construction programme.
     `status` holds the phase code (planned, ongoing, delivered) or the raw input.
     """
     __tablename__ = "projects"

     id = Column(Integer, primary_key=True, autoincrement=True)
     slug = Column(String(200), unique=True, nullable=False, index=True)
     title = Column(String(255), nullable=False)
     description = Column(Text, nullable=True)
     cover_image = Column(String(500), nullable=True)
     status = Column(String(50), nullable=True, index=True)
     category = Column(String(100), nullable=True, index=True)
     location = Column(String(255), nullable=True)
     surface = Column(Float, nullable=True)
     units = Column(Integer, nullable=True)
     started_at = Column(DateTime, nullable=True)
     delivered_at = Column(DateTime, nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     medias = relationship(
          "ProjectMedia",
          back_populates="project",
          cascade="all, delete-orphan",
          order_by="ProjectMedia.order",
     )

     def __repr__(self):
          return f"<Project(id={self.id}, slug='{self.slug}', status='{self.status}')>"


class ProjectMedia(Base):
     __tablename__ = "project_medias"

     id = Column(Integer, primary_key=True, autoincrement=True)
     project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
     kind = Column(String(20), default="image", nullable=False)  # image, video
     url = Column(String(500), nullable=False)
     alt = Column(String(255), nullable=True)
     order = Column(Integer, default=0, nullable=False)

     project = relationship("Project", back_populates="medias")

     def __repr__(self):
          return f"<ProjectMedia(id={self.id}, project_id={self.project_id}, kind='{self.kind}')>"
