"""
Per-user variable sets layered on top of a project's own variables
"""
from sqlalchemy import Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime
from app.db.base import Base


class UserProjectEnvironmentVariableSet(Base):
    __tablename__ = "user_project_environment_variable_sets"

    # The (user_id, project_id) pair is the upsert conflict target
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    project_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True
    )
    environment_set_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("environment_variable_sets.id"), unique=True, nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="project_environment_variable_sets")
    project = relationship("Project", back_populates="user_environment_variable_sets")
    environment_set = relationship("EnvironmentVariableSet", back_populates="user_project_binding")
