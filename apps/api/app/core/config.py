from pydantic import BaseModel
import os
from pathlib import Path
from typing import Optional


def find_project_root() -> Path:
    """
    Find the project root directory by looking for specific marker files.
    This keeps the default database location stable regardless of the working directory.
    """
    current_path = Path(__file__).resolve()

    for parent in [current_path] + list(current_path.parents):
        if (parent / 'apps').is_dir() and (parent / 'pyproject.toml').exists():
            return parent

    # Current path is likely: /project-root/apps/api/app/core/config.py
    api_dir = current_path.parent.parent.parent
    if api_dir.name == 'api' and api_dir.parent.name == 'apps':
        return api_dir.parent.parent

    return Path.cwd()


PROJECT_ROOT = find_project_root()


class Settings(BaseModel):
    database_url: str = os.getenv(
        "DATABASE_URL",
        f"sqlite:///{PROJECT_ROOT / 'data' / 'projects.db'}",
    )

    # Fernet key (urlsafe base64) used to encrypt variable values at rest
    encryption_key: Optional[str] = os.getenv("ENCRYPTION_KEY")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"


settings = Settings()
