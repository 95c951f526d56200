from sqlalchemy import Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime
from app.db.base import Base, generate_external_id


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    external_id: Mapped[str] = mapped_column(
        String(64), unique=True, index=True, nullable=False, default=generate_external_id
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    root_directory_path: Mapped[str] = mapped_column(String(1024), nullable=False)

    git_repository_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("git_repositories.id"), index=True, nullable=False
    )
    # Project-level variables; each project owns exactly one set
    environment_variable_set_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("environment_variable_sets.id"), unique=True, nullable=False
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    git_repository = relationship("GitRepository", back_populates="projects")
    environment_variable_set = relationship("EnvironmentVariableSet", back_populates="project")
    user_environment_variable_sets = relationship(
        "UserProjectEnvironmentVariableSet", back_populates="project", cascade="all, delete-orphan"
    )
