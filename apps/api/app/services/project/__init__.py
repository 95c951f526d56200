"""
Project services
Project creation and environment variable management
"""
from .service import ProjectService, project_service, get_project_or_404
from .env_form import (
    ENV_VAR_NAME_REGEX,
    EnvVarCreate,
    EnvVarUpdate,
    ProjectCreateArgs,
    UpdateEnvVarsArgs,
    UpdateEnvVarsTarget,
    validate_env_var_name,
)
