"""
Shared pytest fixtures for project environment tests.

Fixtures provided:
- db: Session on a fresh in-memory SQLite database (foreign keys enforced)
- user / other_user: Users for user-scoped variable sets
- git_repository: Repository that projects point at
- project: Project created through ProjectService
- reconcile: Helper that builds UpdateEnvVarsArgs and applies them
- row_count: Row count for a model
"""

import os

# Keep the application engine off the on-disk default database
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from sqlalchemy import create_engine, event, func, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401 ensures models are registered with the metadata
from app.db.base import Base
from app.db.session import enable_sqlite_foreign_keys
from app.models import GitRepository, User
from app.services.project import (
    ProjectCreateArgs,
    UpdateEnvVarsArgs,
    UpdateEnvVarsTarget,
    project_service,
)


@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db(engine):
    """
    Session for one test.

    Work is flushed but never committed, and rolled back afterwards.
    """
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def user(db):
    user = User(email="alice@example.com")
    db.add(user)
    db.flush()
    return user


@pytest.fixture
def other_user(db):
    user = User(email="bob@example.com")
    db.add(user)
    db.flush()
    return user


@pytest.fixture
def git_repository(db):
    repo = GitRepository(url="https://github.com/example/webapp.git")
    db.add(repo)
    db.flush()
    return repo


@pytest.fixture
def project(db, git_repository, tmp_path):
    return project_service.create_project(db, ProjectCreateArgs(
        git_repository_id=git_repository.id,
        root_directory_path=str(tmp_path / "webapp"),
        name="webapp",
    ))


@pytest.fixture
def reconcile(db, user, project):
    """Apply a change-set; defaults to the project scope of the `project` fixture"""
    def _reconcile(
        delete=None,
        create=None,
        update=None,
        target=UpdateEnvVarsTarget.PROJECT,
        user_id=None,
        project_external_id=None,
    ):
        project_service.update_environment_variables(db, UpdateEnvVarsArgs(
            user_id=user_id if user_id is not None else user.id,
            project_external_id=project_external_id or project.external_id,
            delete=delete or [],
            create=create or [],
            update=update or [],
            target=target,
        ))
    return _reconcile


@pytest.fixture
def row_count(db):
    """Number of rows currently visible for a model"""
    def _row_count(model) -> int:
        return db.scalar(select(func.count()).select_from(model))
    return _row_count
