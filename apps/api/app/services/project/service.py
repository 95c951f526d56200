"""
Project Service
Creates projects and applies batched edits to their environment variables
"""
import logging
from typing import Dict, List, assert_never

from fastapi import HTTPException, status
from sqlalchemy import delete, select, update
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session, selectinload

from app.core.crypto import secret_box
from app.models.env_vars import EnvironmentVariable, EnvironmentVariableSet
from app.models.projects import Project
from app.models.user_env_sets import UserProjectEnvironmentVariableSet
from app.services.project.env_form import (
    ENV_VAR_NAME_REGEX,
    ProjectCreateArgs,
    UpdateEnvVarsArgs,
    UpdateEnvVarsTarget,
    validate_env_var_name,
)

logger = logging.getLogger(__name__)

# Dialects that support INSERT ... ON CONFLICT DO NOTHING
UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


def get_project_or_404(db: Session, project_external_id: str) -> Project:
    """Load a project by public id together with its project-level variables"""
    project = db.scalars(
        select(Project)
        .where(Project.external_id == project_external_id)
        .options(
            selectinload(Project.environment_variable_set)
            .selectinload(EnvironmentVariableSet.environment_variables)
        )
    ).one_or_none()
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


def find_user_environment_set(db: Session, user_id: int, project_id: int) -> UserProjectEnvironmentVariableSet | None:
    return db.scalars(
        select(UserProjectEnvironmentVariableSet)
        .where(
            UserProjectEnvironmentVariableSet.user_id == user_id,
            UserProjectEnvironmentVariableSet.project_id == project_id,
        )
        .options(
            selectinload(UserProjectEnvironmentVariableSet.environment_set)
            .selectinload(EnvironmentVariableSet.environment_variables)
        )
    ).one_or_none()


class ProjectService:

    def create_project(self, db: Session, args: ProjectCreateArgs) -> Project:
        """
        Create a project together with its empty project-level variable set.

        Both rows are only flushed; the caller's transaction decides whether
        they are committed together.
        """
        environment_variable_set = EnvironmentVariableSet()
        db.add(environment_variable_set)
        db.flush()

        project = Project(
            git_repository_id=args.git_repository_id,
            root_directory_path=args.root_directory_path,
            environment_variable_set_id=environment_variable_set.id,
            name=args.name,
        )
        db.add(project)
        db.flush()

        logger.info(f"Created project {project.external_id} ({project.name})")
        return project

    def get_or_create_user_environment_set(self, db: Session, user_id: int, project_id: int) -> EnvironmentVariableSet:
        """
        Return the user's variable set for a project, creating it on first use.

        The binding row is written with INSERT ... ON CONFLICT DO NOTHING on the
        (user_id, project_id) pair, so concurrent first accesses end up sharing
        one set instead of failing on the unique key.
        """
        dialect = db.get_bind().dialect.name
        if dialect not in UPSERT_INSERTS:
            raise NotImplementedError(
                f"Upsert is not supported for dialect {dialect!r} (supported: {', '.join(sorted(UPSERT_INSERTS))})"
            )

        # Fast path only; correctness under concurrency rests on the upsert below
        binding = find_user_environment_set(db, user_id, project_id)
        if binding is not None:
            return binding.environment_set

        environment_set = EnvironmentVariableSet()
        db.add(environment_set)
        db.flush()

        table = UserProjectEnvironmentVariableSet.__table__
        result = db.execute(
            UPSERT_INSERTS[dialect](table)
            .values(user_id=user_id, project_id=project_id, environment_set_id=environment_set.id)
            .on_conflict_do_nothing(index_elements=[table.c.user_id, table.c.project_id])
        )
        if result.rowcount == 0:
            # Another transaction bound a set first; drop ours
            logger.debug(f"User {user_id} already has a variable set for project {project_id}")
            db.delete(environment_set)
            db.flush()
        else:
            logger.debug(f"Created variable set {environment_set.id} for user {user_id} in project {project_id}")

        return find_user_environment_set(db, user_id, project_id).environment_set

    def update_environment_variables(self, db: Session, args: UpdateEnvVarsArgs) -> None:
        """
        Apply a delete/create/update change-set to one variable set.

        Every referenced variable and every new name is checked before the
        first write, so a rejected call leaves the set untouched.
        """
        project = get_project_or_404(db, args.project_external_id)

        match args.target:
            case UpdateEnvVarsTarget.USER:
                env_var_set = self.get_or_create_user_environment_set(db, args.user_id, project.id)
            case UpdateEnvVarsTarget.PROJECT:
                env_var_set = project.environment_variable_set
            case _:
                assert_never(args.target)

        variables: Dict[str, EnvironmentVariable] = {
            v.external_id: v for v in env_var_set.environment_variables
        }

        def get_var(external_id: str) -> EnvironmentVariable:
            v = variables.get(external_id)
            if v is None:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f'Variable with id "{external_id}" not found',
                )
            return v

        vars_to_delete = [get_var(external_id) for external_id in args.delete]
        vars_to_update = [get_var(v.external_id) for v in args.update]

        overlap = {v.external_id for v in vars_to_delete} & {v.external_id for v in vars_to_update}
        if overlap:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f'Variable with id "{sorted(overlap)[0]}" cannot be both deleted and updated',
            )

        # Entries with neither name nor value fall out of both lists
        vars_to_update_name: List[dict] = [
            {"id": env_var.id, "name": v.name}
            for env_var, v in zip(vars_to_update, args.update)
            if v.name is not None
        ]
        vars_to_update_value: List[dict] = [
            {"id": env_var.id, "value_encrypted": secret_box.encrypt(v.value)}
            for env_var, v in zip(vars_to_update, args.update)
            if v.value is not None
        ]
        vars_to_create = args.create

        for name in [v["name"] for v in vars_to_update_name] + [v.name for v in vars_to_create]:
            if not validate_env_var_name(name):
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f'Invalid variable name "{name}" (must match "{ENV_VAR_NAME_REGEX.pattern}")',
                )

        if vars_to_delete:
            db.execute(
                delete(EnvironmentVariable).where(
                    EnvironmentVariable.id.in_([v.id for v in vars_to_delete])
                )
            )
        if vars_to_update_name:
            db.execute(update(EnvironmentVariable), vars_to_update_name)
        if vars_to_update_value:
            db.execute(update(EnvironmentVariable), vars_to_update_value)
        db.add_all([
            EnvironmentVariable(
                environment_variable_set_id=env_var_set.id,
                name=v.name,
                value=v.value,
            )
            for v in vars_to_create
        ])
        db.flush()

        # Bulk statements bypass the loaded objects; reload them on next access
        for env_var in vars_to_update:
            db.expire(env_var)
        db.expire(env_var_set, ["environment_variables"])

        logger.info(
            f"Updated variables of set {env_var_set.id} ({args.target.value}) in project {project.external_id}: "
            f"{len(vars_to_delete)} deleted, {len(vars_to_update_name)} renamed, "
            f"{len(vars_to_update_value)} revalued, {len(vars_to_create)} created"
        )


project_service = ProjectService()
