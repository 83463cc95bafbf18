"""
tests/conftest.py
Shared fixtures for the jdlcheck test suite.

All fixtures are session-scoped or function-scoped as appropriate.
No external mocking libraries are used; warnings are captured with the
package's own WarningCollector and files live in pytest's tmp_path.
"""

from __future__ import annotations

import copy
import pathlib
from typing import Any, Dict, List

import pytest
import yaml

from jdlcheck.models import (
    ApplicationDefinition,
    ApplicationSettings,
    EntityDefinition,
    FieldDefinition,
    JDLObject,
    RelationshipDefinition,
)
from jdlcheck.validators import WarningCollector


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

ROOT_DIR: pathlib.Path = pathlib.Path(__file__).resolve().parent.parent
JDL_EXAMPLE_PATH: pathlib.Path = ROOT_DIR / "jdl_example.yaml"


# ---------------------------------------------------------------------------
# Raw model data fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def raw_jdl_dict() -> Dict[str, Any]:
    """Load the reference jdl_example.yaml once per session and return as dict."""
    assert JDL_EXAMPLE_PATH.exists(), (
        f"Reference model not found at {JDL_EXAMPLE_PATH}. "
        "Make sure jdl_example.yaml is in the project root."
    )
    with open(JDL_EXAMPLE_PATH, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    assert isinstance(data, dict), "Top-level YAML must be a mapping."
    return data


@pytest.fixture()
def jdl_dict(raw_jdl_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Return a deep copy so each test can mutate freely."""
    return copy.deepcopy(raw_jdl_dict)


@pytest.fixture()
def jdl_yaml_path(jdl_dict: Dict[str, Any], tmp_path: pathlib.Path) -> pathlib.Path:
    """Write the model dict to a temporary YAML file and return its path."""
    path = tmp_path / "model.yaml"
    with open(path, "w", encoding="utf-8") as fh:
        yaml.dump(jdl_dict, fh, default_flow_style=False, allow_unicode=True)
    return path


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def jdl_object(jdl_dict: Dict[str, Any]) -> JDLObject:
    """The reference bookstore model."""
    return JDLObject.model_validate(jdl_dict["jdl"])


@pytest.fixture()
def sql_settings() -> ApplicationSettings:
    return ApplicationSettings(database_type="sql")


@pytest.fixture()
def warnings() -> WarningCollector:
    return WarningCollector()


@pytest.fixture()
def empty_jdl() -> JDLObject:
    return JDLObject()


def make_entity(name: str, *fields: FieldDefinition, **kwargs: Any) -> EntityDefinition:
    """Build an entity from field definitions (helper shared by test modules)."""
    return EntityDefinition(name=name, fields=list(fields), **kwargs)


def make_jdl(
    entities: List[EntityDefinition],
    relationships: List[RelationshipDefinition] = (),
    applications: List[ApplicationDefinition] = (),
) -> JDLObject:
    jdl = JDLObject()
    for entity in entities:
        jdl.add_entity(entity)
    for relationship in relationships:
        jdl.add_relationship(relationship)
    for application in applications:
        jdl.add_application(application)
    return jdl


@pytest.fixture()
def three_applications_jdl() -> JDLObject:
    """
    A, B and C spread over three applications:
    app1 = {A, B}, app2 = {A, B, C}, app3 = {B, C}.
    """
    entities = [make_entity(name) for name in ("A", "B", "C")]
    applications = [
        ApplicationDefinition(base_name="app1", entity_names=["A", "B"]),
        ApplicationDefinition(base_name="app2", entity_names=["A", "B", "C"]),
        ApplicationDefinition(base_name="app3", entity_names=["B", "C"]),
    ]
    return make_jdl(entities, applications=applications)
