"""
Tests for variable name rules and change-set input models
"""

import pytest
from pydantic import ValidationError

from app.services.project import (
    EnvVarUpdate,
    UpdateEnvVarsArgs,
    UpdateEnvVarsTarget,
    validate_env_var_name,
)


@pytest.mark.parametrize("name", [
    "FOO",
    "foo",
    "_",
    "_PRIVATE",
    "DATABASE_URL",
    "a1",
    "NEXT_PUBLIC_API_BASE_2",
])
def test_valid_names(name):
    assert validate_env_var_name(name)


@pytest.mark.parametrize("name", [
    "",
    "1BAD",
    "9",
    "BAD-NAME",
    "HAS SPACE",
    "DOT.NAME",
    "CAFÉ",
    "FOO=BAR",
    "FOO\n",
])
def test_invalid_names(name):
    assert not validate_env_var_name(name)


def test_change_set_lists_default_to_empty():
    args = UpdateEnvVarsArgs(user_id=1, project_external_id="abc", target=UpdateEnvVarsTarget.PROJECT)

    assert args.delete == []
    assert args.create == []
    assert args.update == []


def test_target_accepts_enum_values():
    args = UpdateEnvVarsArgs(user_id=1, project_external_id="abc", target="user")
    assert args.target is UpdateEnvVarsTarget.USER


def test_unknown_target_rejected():
    with pytest.raises(ValidationError):
        UpdateEnvVarsArgs(user_id=1, project_external_id="abc", target="organization")


def test_update_fields_are_optional():
    entry = EnvVarUpdate(external_id="abc")
    assert entry.name is None
    assert entry.value is None
