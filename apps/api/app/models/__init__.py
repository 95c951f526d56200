# Import all models to ensure they are registered with the metadata
from app.models.users import User
from app.models.git_repositories import GitRepository
from app.models.projects import Project
from app.models.env_vars import EnvironmentVariableSet, EnvironmentVariable
from app.models.user_env_sets import UserProjectEnvironmentVariableSet


__all__ = [
    "User",
    "GitRepository",
    "Project",
    "EnvironmentVariableSet",
    "EnvironmentVariable",
    "UserProjectEnvironmentVariableSet",
]
