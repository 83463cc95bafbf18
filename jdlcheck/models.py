# File: jdlcheck/models.py
"""
JDLCheck - Core Data Models
============================
Pydantic V2 models representing the JDL Object Model: entities, fields,
validations, relationships, enumerations, options, deployments and
application descriptors, plus the ``JDLObject`` aggregate that holds them.

The parser (not part of this package) builds these nodes; the validators in
``jdlcheck.validators`` only inspect them.  Pydantic enforces value *types*;
business attributes (names, types, endpoints) are deliberately optional here
because reporting their absence is the shape validators' job.

Every model accepts both the Python attribute names and the JDL camelCase
spelling (``tableName``, ``entityNames``, ...), so a parsed JSON/YAML
document can be loaded with ``JDLObject.model_validate(data)``.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from jdlcheck.field_types import (
    ApplicationType,
    DatabaseType,
    RelationshipType,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("jdlcheck.models")

# ---------------------------------------------------------------------------
# Mixin: shared model configuration
# ---------------------------------------------------------------------------

_SHARED_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    populate_by_name=True,
    validate_assignment=True,
    use_enum_values=True,
    frozen=False,
    extra="forbid",
)

# Wildcard accepted in option entity lists
ALL_ENTITIES: str = "*"


def _keyed_by_name(value: Any, keys: Tuple[str, ...] = ("name",)) -> Any:
    """Turn a list of node mappings into a name-keyed dict (YAML convenience)."""
    if not isinstance(value, list):
        return value
    keyed: Dict[str, Any] = {}
    for item in value:
        name: Any = None
        for key in keys:
            if isinstance(item, dict):
                name = item.get(key)
            else:
                name = getattr(item, key, None)
            if name is not None:
                break
        keyed[name] = item
    return keyed


# ---------------------------------------------------------------------------
# Fields & validations
# ---------------------------------------------------------------------------


class ValidationRule(BaseModel):
    """A validation attached to a field, e.g. ``min(42)`` or ``required``."""

    model_config = _SHARED_CONFIG

    name: Optional[str] = Field(default=None, description="Validation name.")
    value: Any = Field(default=None, description="Validation argument, if any.")

    def __repr__(self) -> str:
        if self.value is None:
            return f"<ValidationRule {self.name}>"
        return f"<ValidationRule {self.name}({self.value!r})>"


class FieldDefinition(BaseModel):
    """An entity field: a name, a type tag (or enum name) and its validations."""

    model_config = _SHARED_CONFIG

    name: Optional[str] = Field(default=None, description="Field name.")
    type: Optional[str] = Field(
        default=None, description="Field type, or the name of a declared enum."
    )
    validations: List[ValidationRule] = Field(
        default_factory=list, description="Validations, in declaration order."
    )
    comment: Optional[str] = Field(default=None, description="Field comment / doc.")

    def add_validation(self, validation: ValidationRule) -> None:
        if validation is None:
            raise ValueError("Can't add a nil validation.")
        self.validations.append(validation)

    def __repr__(self) -> str:
        return f"<Field {self.name}: {self.type} ({len(self.validations)} validations)>"


class EntityDefinition(BaseModel):
    """
    A single entity of the model.

    ``fields`` keeps declaration order; it is keyed by field name.
    """

    model_config = _SHARED_CONFIG

    name: Optional[str] = Field(default=None, description="Entity (class) name.")
    table_name: Optional[str] = Field(
        default=None,
        alias="tableName",
        description="Explicit table name; defaults to the entity name.",
    )
    fields: Dict[str, FieldDefinition] = Field(
        default_factory=dict, description="Fields keyed by name."
    )
    comment: Optional[str] = Field(default=None, description="Entity comment / doc.")

    @field_validator("fields", mode="before")
    @classmethod
    def _fields_from_list(cls, v: Any) -> Any:
        return _keyed_by_name(v)

    @property
    def resolved_table_name(self) -> Optional[str]:
        """Table name used by the generator: explicit one or the entity name."""
        return self.table_name or self.name

    @property
    def field_quantity(self) -> int:
        return len(self.fields)

    def add_field(self, field: FieldDefinition) -> None:
        if field is None:
            raise ValueError("Can't add a nil field.")
        self.fields[field.name] = field

    def __repr__(self) -> str:
        return f"<Entity {self.name} ({self.field_quantity} fields)>"


# ---------------------------------------------------------------------------
# Relationships
# ---------------------------------------------------------------------------


class RelationshipDefinition(BaseModel):
    """
    Directional edge between two entities.

    When neither injected field is given, the source side gets the
    lower-first destination name, like a hand-written JDL relationship
    without a ``{field}`` part.
    """

    model_config = _SHARED_CONFIG

    from_entity: Optional[str] = Field(
        default=None, alias="from", description="Source entity name."
    )
    to_entity: Optional[str] = Field(
        default=None, alias="to", description="Destination entity name."
    )
    type: Optional[str] = Field(
        default=None, description="Cardinality, e.g. 'ManyToMany'."
    )
    injected_field_in_from: Optional[str] = Field(
        default=None, alias="injectedFieldInFrom"
    )
    injected_field_in_to: Optional[str] = Field(
        default=None, alias="injectedFieldInTo"
    )
    is_injected_field_in_from_required: bool = Field(
        default=False, alias="isInjectedFieldInFromRequired"
    )
    is_injected_field_in_to_required: bool = Field(
        default=False, alias="isInjectedFieldInToRequired"
    )
    options: Dict[str, Any] = Field(
        default_factory=dict,
        description="Relationship options, e.g. {'jpaDerivedIdentifier': True}.",
    )
    comment: Optional[str] = Field(default=None)

    @model_validator(mode="before")
    @classmethod
    def _default_injected_field(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        injected_keys = (
            "injected_field_in_from",
            "injectedFieldInFrom",
            "injected_field_in_to",
            "injectedFieldInTo",
        )
        if any(key in data for key in injected_keys):
            return data
        destination: Any = data.get("to_entity", data.get("to"))
        if isinstance(destination, str) and destination:
            data = dict(data)
            data["injectedFieldInFrom"] = destination[0].lower() + destination[1:]
        return data

    @property
    def is_many_to_many(self) -> bool:
        return self.type == RelationshipType.MANY_TO_MANY.value

    @property
    def is_required(self) -> bool:
        return self.is_injected_field_in_from_required or self.is_injected_field_in_to_required

    def __repr__(self) -> str:
        return f"<Relationship {self.type} {self.from_entity} → {self.to_entity}>"


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class EnumDefinition(BaseModel):
    """A JDL enum: a name and an ordered set of value labels."""

    model_config = _SHARED_CONFIG

    name: Optional[str] = Field(default=None, description="Enum type name.")
    values: List[str] = Field(
        default_factory=list, description="Value labels, in declaration order."
    )
    comment: Optional[str] = Field(default=None)

    def __repr__(self) -> str:
        return f"<Enum {self.name} {self.values}>"


# ---------------------------------------------------------------------------
# Options: tagged variant on ``kind``
# ---------------------------------------------------------------------------


class _OptionBase(BaseModel):
    model_config = _SHARED_CONFIG

    name: Optional[str] = Field(default=None, description="Option name.")
    entity_names: List[str] = Field(
        default_factory=list,
        alias="entityNames",
        description="Entities the option applies to ('*' or empty = all).",
    )
    excluded_names: List[str] = Field(
        default_factory=list,
        alias="excludedNames",
        description="Entities excluded when no explicit list is given.",
    )

    @property
    def applies_to_all(self) -> bool:
        return not self.entity_names or ALL_ENTITIES in self.entity_names

    def covers(self, entity_name: str) -> bool:
        """True when the option applies to ``entity_name``."""
        if not self.applies_to_all:
            return entity_name in self.entity_names
        return entity_name not in self.excluded_names


class UnaryOption(_OptionBase):
    """A flag option such as ``skipClient``."""

    kind: Literal["unary"] = "unary"

    def __repr__(self) -> str:
        return f"<UnaryOption {self.name}>"


class BinaryOption(_OptionBase):
    """A name/value option such as ``dto mapstruct``."""

    kind: Literal["binary"] = "binary"
    value: Any = Field(default=None, description="Option value.")

    def __repr__(self) -> str:
        return f"<BinaryOption {self.name}={self.value}>"


JDLOption = Annotated[Union[UnaryOption, BinaryOption], Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Deployments
# ---------------------------------------------------------------------------


class DeploymentDefinition(BaseModel):
    """A deployment topology descriptor (docker-compose, kubernetes, openshift)."""

    model_config = _SHARED_CONFIG

    deployment_type: Optional[str] = Field(default=None, alias="deploymentType")
    apps_folders: List[str] = Field(default_factory=list, alias="appsFolders")
    directory_path: Optional[str] = Field(default="../", alias="directoryPath")
    docker_repository_name: Optional[str] = Field(
        default=None, alias="dockerRepositoryName"
    )
    docker_push_command: Optional[str] = Field(
        default="docker push", alias="dockerPushCommand"
    )
    clustered_db_apps: List[str] = Field(default_factory=list, alias="clusteredDbApps")
    gateway_type: Optional[str] = Field(default=None, alias="gatewayType")
    monitoring: Optional[str] = Field(default="no")
    service_discovery_type: Optional[str] = Field(
        default=None, alias="serviceDiscoveryType"
    )
    kubernetes_namespace: Optional[str] = Field(
        default="default", alias="kubernetesNamespace"
    )
    kubernetes_service_type: Optional[str] = Field(
        default="LoadBalancer", alias="kubernetesServiceType"
    )
    ingress_type: Optional[str] = Field(default=None, alias="ingressType")
    ingress_domain: Optional[str] = Field(default=None, alias="ingressDomain")
    istio: bool = Field(default=False)
    openshift_namespace: Optional[str] = Field(
        default="default", alias="openshiftNamespace"
    )
    storage_type: Optional[str] = Field(default="ephemeral", alias="storageType")

    def __repr__(self) -> str:
        return f"<Deployment {self.deployment_type} {self.apps_folders}>"


# ---------------------------------------------------------------------------
# Application settings & descriptors
# ---------------------------------------------------------------------------


class ApplicationSettings(BaseModel):
    """
    Settings governing one validation context.

    Used directly by the single-context validator, and as the base of
    ``ApplicationDefinition`` in multi-application models.
    """

    model_config = _SHARED_CONFIG

    base_name: Optional[str] = Field(default=None, alias="baseName")
    application_type: Optional[ApplicationType] = Field(
        default=None, alias="applicationType"
    )
    database_type: Optional[DatabaseType] = Field(default=None, alias="databaseType")
    skipped_user_management: bool = Field(
        default=False,
        alias="skippedUserManagement",
        validation_alias=AliasChoices(
            "skippedUserManagement", "skipUserManagement", "skipped_user_management"
        ),
    )
    blueprints: List[str] = Field(
        default_factory=list, description="Blueprint names, in order."
    )

    @field_validator("blueprints", mode="before")
    @classmethod
    def _none_blueprints(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def uses_blueprints(self) -> bool:
        return len(self.blueprints) > 0

    @property
    def is_gateway(self) -> bool:
        return self.application_type == ApplicationType.GATEWAY.value


class ApplicationDefinition(ApplicationSettings):
    """An application declared in the model, owning a subset of entities."""

    application_type: Optional[ApplicationType] = Field(
        default=ApplicationType.MONOLITH.value, alias="applicationType"
    )
    database_type: Optional[DatabaseType] = Field(
        default=DatabaseType.SQL.value, alias="databaseType"
    )
    entity_names: List[str] = Field(default_factory=list, alias="entityNames")

    def add_entity_name(self, entity_name: str) -> None:
        if entity_name not in self.entity_names:
            self.entity_names.append(entity_name)

    def add_entity_names(self, entity_names: List[str]) -> None:
        for entity_name in entity_names:
            self.add_entity_name(entity_name)

    def has_entity_name(self, entity_name: Optional[str]) -> bool:
        return entity_name in self.entity_names

    def __repr__(self) -> str:
        return (
            f"<Application {self.base_name} ({self.application_type}, "
            f"{self.database_type}, {len(self.entity_names)} entities)>"
        )


# ---------------------------------------------------------------------------
# JDL Object: top-level container
# ---------------------------------------------------------------------------


class JDLObject(BaseModel):
    """
    The aggregate graph validated by ``jdlcheck.validators``.

    Entities and enums are keyed by their unique name, applications by
    their base name; relationships, options and deployments keep list order.
    """

    model_config = _SHARED_CONFIG

    applications: Dict[str, ApplicationDefinition] = Field(default_factory=dict)
    entities: Dict[str, EntityDefinition] = Field(default_factory=dict)
    relationships: List[RelationshipDefinition] = Field(default_factory=list)
    enums: Dict[str, EnumDefinition] = Field(default_factory=dict)
    options: List[JDLOption] = Field(default_factory=list)
    deployments: List[DeploymentDefinition] = Field(default_factory=list)

    @field_validator("entities", "enums", mode="before")
    @classmethod
    def _nodes_from_list(cls, v: Any) -> Any:
        return _keyed_by_name(v)

    @field_validator("applications", mode="before")
    @classmethod
    def _applications_from_list(cls, v: Any) -> Any:
        return _keyed_by_name(v, ("base_name", "baseName"))

    # -- Applications -------------------------------------------------------

    def add_application(self, application: ApplicationDefinition) -> None:
        if application is None:
            raise ValueError("Can't add a nil application.")
        self.applications[application.base_name] = application

    def get_application(self, base_name: str) -> Optional[ApplicationDefinition]:
        return self.applications.get(base_name)

    @property
    def application_quantity(self) -> int:
        return len(self.applications)

    def get_applications_per_entity_name(self) -> Dict[str, List[ApplicationDefinition]]:
        """Map each claimed entity name to the applications claiming it."""
        per_entity: Dict[str, List[ApplicationDefinition]] = {}
        for application in self.applications.values():
            for entity_name in application.entity_names:
                per_entity.setdefault(entity_name, []).append(application)
        return per_entity

    # -- Entities -----------------------------------------------------------

    def add_entity(self, entity: EntityDefinition) -> None:
        if entity is None:
            raise ValueError("Can't add a nil entity.")
        self.entities[entity.name] = entity

    def get_entity(self, name: Optional[str]) -> Optional[EntityDefinition]:
        """O(1) entity lookup."""
        return self.entities.get(name)

    def has_entity(self, name: Optional[str]) -> bool:
        return name in self.entities

    @property
    def entity_quantity(self) -> int:
        return len(self.entities)

    @property
    def entity_names(self) -> List[str]:
        return list(self.entities)

    # -- Relationships ------------------------------------------------------

    def add_relationship(self, relationship: RelationshipDefinition) -> None:
        if relationship is None:
            raise ValueError("Can't add a nil relationship.")
        self.relationships.append(relationship)

    @property
    def relationship_quantity(self) -> int:
        return len(self.relationships)

    # -- Enums --------------------------------------------------------------

    def add_enum(self, enum: EnumDefinition) -> None:
        if enum is None:
            raise ValueError("Can't add a nil enum.")
        self.enums[enum.name] = enum

    def get_enum(self, name: Optional[str]) -> Optional[EnumDefinition]:
        return self.enums.get(name)

    def has_enum(self, name: Optional[str]) -> bool:
        return name in self.enums

    @property
    def enum_quantity(self) -> int:
        return len(self.enums)

    # -- Options ------------------------------------------------------------

    def add_option(self, option: Union[UnaryOption, BinaryOption]) -> None:
        if option is None:
            raise ValueError("Can't add a nil option.")
        self.options.append(option)

    def get_options_for_name(self, name: str) -> List[Union[UnaryOption, BinaryOption]]:
        return [option for option in self.options if option.name == name]

    @property
    def option_quantity(self) -> int:
        return len(self.options)

    # -- Deployments --------------------------------------------------------

    def add_deployment(self, deployment: DeploymentDefinition) -> None:
        if deployment is None:
            raise ValueError("Can't add a nil deployment.")
        self.deployments.append(deployment)

    @property
    def deployment_quantity(self) -> int:
        return len(self.deployments)

    def __repr__(self) -> str:
        return (
            f"<JDLObject {self.application_quantity} applications, "
            f"{self.entity_quantity} entities, "
            f"{self.relationship_quantity} relationships, "
            f"{self.enum_quantity} enums, "
            f"{self.option_quantity} options, "
            f"{self.deployment_quantity} deployments>"
        )


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "ALL_ENTITIES",
    "ValidationRule",
    "FieldDefinition",
    "EntityDefinition",
    "RelationshipDefinition",
    "EnumDefinition",
    "UnaryOption",
    "BinaryOption",
    "JDLOption",
    "DeploymentDefinition",
    "ApplicationSettings",
    "ApplicationDefinition",
    "JDLObject",
]

logger.debug("jdlcheck.models loaded (%d public symbols).", len(__all__))
