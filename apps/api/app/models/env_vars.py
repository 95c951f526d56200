from sqlalchemy import Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime
from app.core.crypto import secret_box
from app.db.base import Base, generate_external_id


class EnvironmentVariableSet(Base):
    """Container of variables, owned by a project or by a user-project binding"""
    __tablename__ = "environment_variable_sets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    environment_variables = relationship(
        "EnvironmentVariable",
        back_populates="environment_variable_set",
        cascade="all, delete-orphan",
        order_by="EnvironmentVariable.id",
    )
    project = relationship("Project", back_populates="environment_variable_set", uselist=False)
    user_project_binding = relationship(
        "UserProjectEnvironmentVariableSet", back_populates="environment_set", uselist=False
    )


class EnvironmentVariable(Base):
    __tablename__ = "environment_variables"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    external_id: Mapped[str] = mapped_column(
        String(64), unique=True, index=True, nullable=False, default=generate_external_id
    )
    environment_variable_set_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("environment_variable_sets.id", ondelete="CASCADE"), index=True, nullable=False
    )

    # Variable Info
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    value_encrypted: Mapped[str] = mapped_column(Text, nullable=False)  # Always encrypted

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    environment_variable_set = relationship("EnvironmentVariableSet", back_populates="environment_variables")

    @property
    def value(self) -> str:
        return secret_box.decrypt(self.value_encrypted)

    @value.setter
    def value(self, plaintext: str) -> None:
        self.value_encrypted = secret_box.encrypt(plaintext)
