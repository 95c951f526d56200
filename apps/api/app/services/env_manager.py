"""
Environment Variables Manager

Read-side access to project and user variable sets, and rendering them as .env files.
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, assert_never
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.terminal_ui import ui
from app.services.project.env_form import UpdateEnvVarsTarget
from app.services.project.service import find_user_environment_set, get_project_or_404

logger = logging.getLogger(__name__)

# Newlines would let a value inject extra lines into a .env file
ENV_VAR_VALUE_FORBIDDEN = re.compile(r'[\r\n]')
QUOTE_CHARS = ['#', '$', '`', '"', "'"]


def list_environment_variables(
    db: Session,
    project_external_id: str,
    target: UpdateEnvVarsTarget,
    user_id: Optional[int] = None,
) -> List[Dict[str, str]]:
    """List the variables of one scope, sorted by name. Never creates a user set."""
    project = get_project_or_404(db, project_external_id)

    match target:
        case UpdateEnvVarsTarget.USER:
            if user_id is None:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="user_id is required for the user scope",
                )
            binding = find_user_environment_set(db, user_id, project.id)
            env_vars = binding.environment_set.environment_variables if binding else []
        case UpdateEnvVarsTarget.PROJECT:
            env_vars = project.environment_variable_set.environment_variables
        case _:
            assert_never(target)

    return sorted(
        (
            {"external_id": env_var.external_id, "name": env_var.name, "value": env_var.value}
            for env_var in env_vars
        ),
        key=lambda v: (v["name"], v["external_id"]),
    )


def resolve_environment(db: Session, project_external_id: str, user_id: Optional[int] = None) -> Dict[str, str]:
    """
    Effective environment for a user working on a project.
    User-level variables override project-level variables with the same name.
    """
    env_vars = {
        v["name"]: v["value"]
        for v in list_environment_variables(db, project_external_id, UpdateEnvVarsTarget.PROJECT)
    }
    if user_id is not None:
        user_vars = list_environment_variables(db, project_external_id, UpdateEnvVarsTarget.USER, user_id)
        overridden = [v["name"] for v in user_vars if v["name"] in env_vars]
        if overridden:
            logger.debug(f"User {user_id} overrides {', '.join(overridden)} in project {project_external_id}")
        env_vars.update({v["name"]: v["value"] for v in user_vars})
    return env_vars


def render_env_file(env_vars: Dict[str, str]) -> str:
    """Serialize variables as .env content"""
    lines = [
        "# Environment Variables",
        "# This file is generated from Project Settings",
        "",
    ]

    # Sort keys for consistent output
    for key in sorted(env_vars.keys()):
        value = env_vars[key]
        if ENV_VAR_VALUE_FORBIDDEN.search(value):
            raise ValueError(f"Value of {key} contains a newline")

        # Quote values that contain spaces or special characters
        if ' ' in value or any(c in value for c in QUOTE_CHARS):
            escaped = value.replace('\\', '\\\\').replace('"', '\\"')
            value = f'"{escaped}"'

        lines.append(f"{key}={value}")

    return "\n".join(lines) + "\n"


def write_env_file(env_path: Path, env_vars: Dict[str, str]) -> None:
    """Write environment variables to a .env file"""
    content = render_env_file(env_vars)
    env_path.parent.mkdir(parents=True, exist_ok=True)
    env_path.write_text(content, encoding='utf-8')
    ui.success(f"Wrote {len(env_vars)} variables to {env_path}", "EnvManager")


def sync_env_file(db: Session, project_external_id: str, user_id: Optional[int] = None) -> Path:
    """Write the effective environment to .env in the project's root directory"""
    project = get_project_or_404(db, project_external_id)
    env_path = Path(project.root_directory_path) / ".env"
    write_env_file(env_path, resolve_environment(db, project_external_id, user_id))
    return env_path
