"""
Input shapes and naming rules for environment variable edits
"""
import re
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

# Conventional POSIX environment variable identifier
ENV_VAR_NAME_REGEX = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class UpdateEnvVarsTarget(str, Enum):
    USER = "user"
    PROJECT = "project"


class EnvVarCreate(BaseModel):
    name: str
    value: str


class EnvVarUpdate(BaseModel):
    external_id: str
    name: Optional[str] = None
    value: Optional[str] = None


class UpdateEnvVarsArgs(BaseModel):
    user_id: int
    project_external_id: str
    delete: List[str] = Field(default_factory=list)
    create: List[EnvVarCreate] = Field(default_factory=list)
    update: List[EnvVarUpdate] = Field(default_factory=list)
    target: UpdateEnvVarsTarget


class ProjectCreateArgs(BaseModel):
    git_repository_id: int
    root_directory_path: str
    name: str


def validate_env_var_name(name: str) -> bool:
    return ENV_VAR_NAME_REGEX.fullmatch(name) is not None
