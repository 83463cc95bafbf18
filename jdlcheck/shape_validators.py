# File: jdlcheck/shape_validators.py
"""
JDLCheck - Shape Validators
============================
One validator per node kind (entity, field, validation, relationship, enum,
deployment, unary/binary option).  Each checks a single node's internal
well-formedness in isolation: required attributes present, values inside
their vocabulary, names shaped like identifiers.  None of them looks at
other nodes; cross-node rules live in ``jdlcheck.validators``.

Every ``validate()`` returns ``None`` on success and raises
``JDLValidationError`` on the first problem.  Validators hold no state, so
one instance can be reused for any number of nodes.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Sequence, Tuple

from pydantic import BaseModel

from jdlcheck.exceptions import JDLValidationError
from jdlcheck.field_types import (
    GKE_INGRESS_TYPE,
    NUMERIC_VALIDATIONS,
    RELATIONSHIP_TYPES,
    VALIDATION_NAMES,
    VALUED_VALIDATIONS,
    DeploymentType,
    RelationshipType,
    enum_value,
    is_binary_option,
    is_binary_option_value,
    is_unary_option,
)
from jdlcheck.reserved_keywords import is_reserved_class_name

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("jdlcheck.shape_validators")

# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

_IDENTIFIER_RE: re.Pattern[str] = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

# Relationship option enabling @MapsId
JPA_DERIVED_IDENTIFIER: str = "jpaDerivedIdentifier"


def _is_absent(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, set, dict)):
        return len(value) == 0
    return False


def _is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        try:
            float(value)
        except ValueError:
            return False
        return True
    return False


# ---------------------------------------------------------------------------
# Base validator
# ---------------------------------------------------------------------------


class Validator:
    """
    Base class: a node kind name plus the attributes every node of that
    kind must carry.

    Attribute names in messages use the JDL spelling (the pydantic alias
    when the model declares one), e.g. ``appsFolders`` rather than
    ``apps_folders``.
    """

    object_type: str = "object"
    required_attributes: Tuple[str, ...] = ()

    def validate(self, node: Any) -> None:
        if node is None:
            raise JDLValidationError(f"No {self.object_type}.")
        self.check_for_absent_attributes(node, self.required_attributes)

    def check_for_absent_attributes(
        self, node: Any, attributes: Sequence[str]
    ) -> None:
        absent: List[str] = [
            _display_name(node, attribute)
            for attribute in attributes
            if _is_absent(getattr(node, attribute, None))
        ]
        if not absent:
            return
        if len(absent) == 1:
            raise JDLValidationError(
                f"The {self.object_type} attribute {absent[0]} was not found."
            )
        raise JDLValidationError(
            f"The {self.object_type} attributes {', '.join(absent)} were not found."
        )


def _display_name(node: Any, attribute: str) -> str:
    if isinstance(node, BaseModel):
        field_info = type(node).model_fields.get(attribute)
        if field_info is not None and field_info.alias:
            return field_info.alias
    return attribute


# ---------------------------------------------------------------------------
# Entities, fields & validations
# ---------------------------------------------------------------------------


class EntityValidator(Validator):
    object_type = "entity"
    required_attributes = ("name",)

    def validate(self, node: Any) -> None:
        super().validate(node)
        if not _IDENTIFIER_RE.match(node.name):
            raise JDLValidationError(
                f"The entity name '{node.name}' is not a valid identifier."
            )
        if is_reserved_class_name(node.name):
            raise JDLValidationError(
                f"The name '{node.name}' is a reserved keyword and can not be "
                f"used as an entity class name."
            )


class FieldValidator(Validator):
    object_type = "field"
    required_attributes = ("name", "type")

    def validate(self, node: Any) -> None:
        super().validate(node)
        if not _IDENTIFIER_RE.match(node.name):
            raise JDLValidationError(
                f"The field name '{node.name}' is not a valid identifier."
            )


class ValidationValidator(Validator):
    """Checks one validation rule attached to a field (not the field type)."""

    object_type = "validation"
    required_attributes = ("name",)

    def validate(self, node: Any) -> None:
        super().validate(node)
        name: str = enum_value(node.name)
        if name not in VALIDATION_NAMES:
            raise JDLValidationError(f"The validation '{name}' doesn't exist.")
        if name in VALUED_VALIDATIONS and _is_absent(node.value):
            raise JDLValidationError(f"The validation '{name}' requires a value.")
        if name in NUMERIC_VALIDATIONS and not _is_numeric(node.value):
            raise JDLValidationError(
                f"The validation '{name}' requires a numeric value, "
                f"got '{node.value}'."
            )


# ---------------------------------------------------------------------------
# Relationships
# ---------------------------------------------------------------------------


class RelationshipValidator(Validator):
    object_type = "relationship"
    required_attributes = ("from_entity", "to_entity", "type")

    def validate(self, node: Any, skipped_user_management: bool = False) -> None:
        super().validate(node)
        self._check_type(node)
        self._check_injected_fields(node)
        self._check_derived_identifier(node)
        self._check_required_reflexive_relationship(node)
        self._check_user_as_source(node, skipped_user_management)

    @staticmethod
    def _check_type(node: Any) -> None:
        if enum_value(node.type) not in RELATIONSHIP_TYPES:
            raise JDLValidationError(
                f"The relationship type '{node.type}' doesn't exist."
            )

    @staticmethod
    def _check_injected_fields(node: Any) -> None:
        if _is_absent(node.injected_field_in_from) and _is_absent(
            node.injected_field_in_to
        ):
            raise JDLValidationError(
                f"In the relationship between {node.from_entity} and "
                f"{node.to_entity}, at least one injected field is required."
            )

    @staticmethod
    def _check_derived_identifier(node: Any) -> None:
        options: dict = getattr(node, "options", None) or {}
        if (
            options.get(JPA_DERIVED_IDENTIFIER)
            and enum_value(node.type) != RelationshipType.ONE_TO_ONE.value
        ):
            raise JDLValidationError(
                "Only a OneToOne relationship can have the @MapsId option."
            )

    @staticmethod
    def _check_required_reflexive_relationship(node: Any) -> None:
        is_reflexive: bool = node.from_entity.lower() == node.to_entity.lower()
        if is_reflexive and getattr(node, "is_required", False):
            raise JDLValidationError(
                f"Required relationships to the same entity are not supported, "
                f"for relationship from '{node.from_entity}' to '{node.to_entity}'."
            )

    @staticmethod
    def _check_user_as_source(node: Any, skipped_user_management: bool) -> None:
        # User is generated outside the model unless user management is skipped
        if not skipped_user_management and node.from_entity.lower() == "user":
            raise JDLValidationError(
                f"Relationships from the User entity is not supported in the "
                f"declaration between '{node.from_entity}' and '{node.to_entity}'. "
                f"You can have this by using the 'skipUserManagement' option."
            )


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class EnumValidator(Validator):
    object_type = "enum"
    required_attributes = ("name",)

    def validate(self, node: Any) -> None:
        super().validate(node)
        if is_reserved_class_name(node.name):
            raise JDLValidationError(
                f"The enum name '{node.name}' is a reserved keyword and can not "
                f"be used as an enum class name."
            )
        seen: set = set()
        duplicates: List[str] = []
        for value in node.values:
            if value in seen and value not in duplicates:
                duplicates.append(value)
            seen.add(value)
        if duplicates:
            raise JDLValidationError(
                f"The enum '{node.name}' has duplicated values: "
                f"{', '.join(duplicates)}."
            )


# ---------------------------------------------------------------------------
# Deployments
# ---------------------------------------------------------------------------


class DeploymentValidator(Validator):
    """Required attributes depend on the deployment type."""

    object_type = "deployment"
    required_attributes = ("deployment_type",)

    _DOCKER_COMPOSE_ATTRIBUTES: Tuple[str, ...] = (
        "apps_folders",
        "directory_path",
    )
    _KUBERNETES_ATTRIBUTES: Tuple[str, ...] = (
        "apps_folders",
        "directory_path",
        "docker_repository_name",
        "kubernetes_namespace",
        "kubernetes_service_type",
    )
    _OPENSHIFT_ATTRIBUTES: Tuple[str, ...] = (
        "apps_folders",
        "directory_path",
        "docker_repository_name",
        "openshift_namespace",
        "storage_type",
    )

    def validate(self, node: Any) -> None:
        super().validate(node)
        deployment_type: str = enum_value(node.deployment_type)
        if deployment_type == DeploymentType.DOCKER_COMPOSE.value:
            self.check_for_absent_attributes(node, self._DOCKER_COMPOSE_ATTRIBUTES)
        elif deployment_type == DeploymentType.KUBERNETES.value:
            self.check_for_absent_attributes(node, self._KUBERNETES_ATTRIBUTES)
            self._check_ingress(node)
        elif deployment_type == DeploymentType.OPENSHIFT.value:
            self.check_for_absent_attributes(node, self._OPENSHIFT_ATTRIBUTES)
        else:
            raise JDLValidationError(
                f"The deployment type '{deployment_type}' isn't supported."
            )

    @staticmethod
    def _check_ingress(node: Any) -> None:
        if node.ingress_type == GKE_INGRESS_TYPE and _is_absent(node.ingress_domain):
            raise JDLValidationError(
                "An ingress domain must be set in order to use GKE's ingress type."
            )
        if node.istio and _is_absent(node.ingress_domain):
            raise JDLValidationError(
                "An ingress domain must be set in order to use Istio."
            )


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


class UnaryOptionValidator(Validator):
    object_type = "unary option"
    required_attributes = ("name",)

    def validate(self, node: Any) -> None:
        super().validate(node)
        if not is_unary_option(node.name):
            raise JDLValidationError(
                f"The unary option '{node.name}' isn't supported."
            )


class BinaryOptionValidator(Validator):
    object_type = "binary option"
    required_attributes = ("name", "value")

    def validate(self, node: Any) -> None:
        super().validate(node)
        if not is_binary_option(node.name):
            raise JDLValidationError(
                f"The binary option '{node.name}' isn't supported."
            )
        if not is_binary_option_value(node.name, node.value):
            raise JDLValidationError(
                f"The '{node.name}' option is not valid for value '{node.value}'."
            )


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "Validator",
    "EntityValidator",
    "FieldValidator",
    "ValidationValidator",
    "RelationshipValidator",
    "EnumValidator",
    "DeploymentValidator",
    "UnaryOptionValidator",
    "BinaryOptionValidator",
]

logger.debug("jdlcheck.shape_validators loaded (%d public symbols).", len(__all__))
