# File: jdlcheck/validators.py
"""
JDLCheck - Business Validators
===============================
The semantic validation pass run over a fully-built ``JDLObject`` before any
code is generated.

Shape checks of single nodes live in ``jdlcheck.shape_validators``.  This
module adds the **cross-node rules**: relationship endpoints must resolve,
many-to-many endpoints must share an application, field types must belong to
the storage family, reserved words are flagged, pagination is refused under
Cassandra.

Two orchestrators run the same five ordered phases
(``entities -> relationships -> enums -> deployments -> options``):

- ``JDLValidator``: one validation context, governed by a single
  ``ApplicationSettings`` (models without application descriptors);
- ``JDLWithApplicationsValidator``: one context per declared application.

The first fatal finding raises ``JDLValidationError``; advisory findings go
through the ``warn(message)`` collaborator and never abort.

Usage by downstream modules:
    from jdlcheck.validators import create_validator
    create_validator(jdl_object, {"databaseType": "sql"}).check_for_errors()
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from jdlcheck.exceptions import JDLValidationError
from jdlcheck.field_types import (
    BinaryOptionName,
    DatabaseType,
    NO_VALUE,
    UnaryOptionName,
    get_type_checking_function,
    has_validation,
)
from jdlcheck.models import (
    ApplicationDefinition,
    ApplicationSettings,
    BinaryOption,
    DeploymentDefinition,
    EntityDefinition,
    EnumDefinition,
    FieldDefinition,
    JDLObject,
    RelationshipDefinition,
    UnaryOption,
)
from jdlcheck.reserved_keywords import (
    is_reserved_field_name,
    is_reserved_pagination_word,
    is_reserved_table_name,
)
from jdlcheck.shape_validators import (
    BinaryOptionValidator,
    DeploymentValidator,
    EntityValidator,
    EnumValidator,
    FieldValidator,
    RelationshipValidator,
    UnaryOptionValidator,
    ValidationValidator,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("jdlcheck.validators")

# Names of the implicit user-management entities, compared case-insensitively
USER_MANAGEMENT_ENTITY_NAMES = frozenset({"user", "authority"})

BLUEPRINTS_WARNING: str = (
    "Blueprints are being used, the JDL validation phase is skipped."
)

SettingsLike = Union[ApplicationSettings, Mapping[str, Any], None]


# ---------------------------------------------------------------------------
# Warning sinks
# ---------------------------------------------------------------------------


class WarningCollector:
    """
    In-memory ``warn`` collaborator.  Keeps every advisory message in
    emission order, which makes it the natural sink for tests and for
    callers that want to render warnings themselves.
    """

    __slots__ = ("_messages",)

    def __init__(self) -> None:
        self._messages: List[str] = []

    def warn(self, message: str) -> None:
        logger.debug("Collected warning: %s", message)
        self._messages.append(message)

    @property
    def warnings(self) -> List[str]:
        return list(self._messages)

    @property
    def warning_count(self) -> int:
        return len(self._messages)

    @property
    def has_warnings(self) -> bool:
        return bool(self._messages)

    def clear(self) -> None:
        self._messages.clear()

    def summary(self) -> str:
        return f"Validation: {self.warning_count} warning(s)."

    def __iter__(self):
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return f"<WarningCollector {self.summary()}>"


class _LoggingWarnSink:
    """Adapts a ``logging.Logger`` to the ``warn(message)`` protocol."""

    __slots__ = ("_target",)

    def __init__(self, target: logging.Logger) -> None:
        self._target: logging.Logger = target

    def warn(self, message: str) -> None:
        self._target.warning("%s", message)


def _as_warn_sink(collaborator: Any) -> Any:
    if collaborator is None:
        return _LoggingWarnSink(logging.getLogger("jdlcheck"))
    if isinstance(collaborator, logging.Logger):
        return _LoggingWarnSink(collaborator)
    if callable(getattr(collaborator, "warn", None)):
        return collaborator
    raise TypeError(
        f"The logger must expose a 'warn(message)' method, got "
        f"{type(collaborator).__name__}."
    )


def _as_settings(settings: SettingsLike) -> ApplicationSettings:
    if settings is None:
        return ApplicationSettings()
    if isinstance(settings, ApplicationSettings):
        return settings
    if isinstance(settings, Mapping):
        return ApplicationSettings.model_validate(dict(settings))
    raise TypeError(
        f"Application settings must be a mapping or ApplicationSettings, got "
        f"{type(settings).__name__}."
    )


# ---------------------------------------------------------------------------
# Cross-reference rules (pure functions)
# ---------------------------------------------------------------------------


def is_user_management_entity(entity_name: Optional[str]) -> bool:
    return bool(entity_name) and entity_name.lower() in USER_MANAGEMENT_ENTITY_NAMES


def check_for_absent_entities(
    relationship: RelationshipDefinition,
    does_entity_exist: Callable[[Optional[str]], bool],
    skipped_user_management: bool = False,
) -> None:
    """
    Fail when an endpoint of ``relationship`` is not declared.

    User and Authority may be missing when user management is skipped:
    they are then supplied outside of the model.
    """
    absent: List[str] = []
    for entity_name in (relationship.from_entity, relationship.to_entity):
        if does_entity_exist(entity_name):
            continue
        if skipped_user_management and is_user_management_entity(entity_name):
            continue
        absent.append(entity_name)
    if not absent:
        return
    verb: str = "is" if len(absent) == 1 else "are"
    raise JDLValidationError(
        f"In the relationship between {relationship.from_entity} and "
        f"{relationship.to_entity}, {' and '.join(absent)} {verb} not declared."
    )


def check_if_relationship_is_between_applications(
    relationship: RelationshipDefinition,
    applications_per_entity_name: Dict[str, List[ApplicationDefinition]],
) -> None:
    """
    Many-to-many relationships may not cross application boundaries: every
    application holding the source entity must also hold the destination.

    Relationships whose source is held by no application are left alone.
    """
    if not relationship.is_many_to_many:
        return
    source_applications = applications_per_entity_name.get(relationship.from_entity, [])
    if not source_applications:
        return
    destination_names = {
        application.base_name
        for application in applications_per_entity_name.get(relationship.to_entity, [])
    }
    if all(application.base_name in destination_names for application in source_applications):
        return
    raise JDLValidationError(
        f"Entities for the {relationship.type} relationship from "
        f"'{relationship.from_entity}' to '{relationship.to_entity}' do not "
        f"belong to the same application."
    )


def check_for_pagination_in_app_with_cassandra(
    option: Union[UnaryOption, BinaryOption], settings: ApplicationSettings
) -> None:
    if (
        option.name == BinaryOptionName.PAGINATION.value
        and settings.database_type == DatabaseType.CASSANDRA.value
    ):
        raise JDLValidationError(
            "Pagination isn't allowed when the application uses Cassandra."
        )


def find_entities_with_dto_but_no_service(
    options: Iterable[Union[UnaryOption, BinaryOption]],
    entity_names: Iterable[str],
) -> List[str]:
    """
    Entities covered by an active ``dto`` option but by no active
    ``service`` option.  Informational only: the generator adds a service
    for them on its own.
    """
    dto_options: List[BinaryOption] = []
    service_options: List[BinaryOption] = []
    for option in options:
        if option.kind != "binary" or option.value == NO_VALUE:
            continue
        if option.name == BinaryOptionName.DTO.value:
            dto_options.append(option)
        elif option.name == BinaryOptionName.SERVICE.value:
            service_options.append(option)
    return [
        entity_name
        for entity_name in entity_names
        if any(option.covers(entity_name) for option in dto_options)
        and not any(option.covers(entity_name) for option in service_options)
    ]


# ---------------------------------------------------------------------------
# Orchestrators
# ---------------------------------------------------------------------------


class _BusinessErrorChecker(ABC):
    """
    Phase implementations shared by both orchestrators.  Every phase takes
    the settings governing it, so the multi-application orchestrator can
    run them once per application.
    """

    def __init__(self, jdl_object: Optional[JDLObject], logger: Any = None) -> None:
        if jdl_object is None:
            raise JDLValidationError(
                "A JDL object must be passed to check for business errors."
            )
        self.jdl_object: JDLObject = jdl_object
        self.logger: Any = _as_warn_sink(logger)
        self._entity_validator = EntityValidator()
        self._field_validator = FieldValidator()
        self._validation_validator = ValidationValidator()
        self._relationship_validator = RelationshipValidator()
        self._enum_validator = EnumValidator()
        self._deployment_validator = DeploymentValidator()
        self._unary_option_validator = UnaryOptionValidator()
        self._binary_option_validator = BinaryOptionValidator()

    @abstractmethod
    def check_for_errors(self) -> None:
        """Run every phase, raising ``JDLValidationError`` on the first fatal finding."""

    # -- Entities & fields ---------------------------------------------------

    def _check_for_entity_errors(
        self, entities: Iterable[EntityDefinition], settings: ApplicationSettings
    ) -> None:
        entities = list(entities)
        if not entities:
            return
        if not settings.database_type:
            raise JDLValidationError("Database type is required to validate entities.")
        logger.debug("Checking %d entities (%s).", len(entities), settings.database_type)
        for entity in entities:
            self._entity_validator.validate(entity)
            table_name: Optional[str] = entity.resolved_table_name
            if is_reserved_table_name(table_name, settings.database_type):
                self.logger.warn(
                    f"The table name '{table_name}' is a reserved keyword, so it "
                    f"will be prefixed with the value of 'jhiPrefix'."
                )
            self._check_for_field_errors(entity, settings)

    def _check_for_field_errors(
        self, entity: EntityDefinition, settings: ApplicationSettings
    ) -> None:
        is_type = get_type_checking_function(entity.name, settings)
        uses_sql = settings.database_type == DatabaseType.SQL.value
        for field in entity.fields.values():
            self._field_validator.validate(field)
            if is_reserved_field_name(field.name):
                self.logger.warn(
                    f"The name '{field.name}' is a reserved keyword, so it will "
                    f"be prefixed with the value of 'jhiPrefix'."
                )
            if uses_sql and is_reserved_pagination_word(field.name):
                raise JDLValidationError(
                    f"Field name '{field.name}' found in {entity.name} is a reserved "
                    f"keyword, as it is used by Spring for pagination in the URL."
                )
            is_an_enum: bool = self.jdl_object.has_enum(field.type)
            if not is_an_enum and not is_type(field.type):
                raise JDLValidationError(
                    f"The type '{field.type}' is an unknown field type for field "
                    f"'{field.name}' of entity '{entity.name}'."
                )
            self._check_for_validation_errors(field, is_an_enum)

    def _check_for_validation_errors(
        self, field: FieldDefinition, is_an_enum: bool
    ) -> None:
        for validation in field.validations:
            self._validation_validator.validate(validation)
            if not has_validation(field.type, validation.name, is_an_enum):
                raise JDLValidationError(
                    f"The validation '{validation.name}' isn't supported for the "
                    f"type '{field.type}'."
                )

    # -- Relationships ---------------------------------------------------------

    def _check_for_relationship_errors(
        self,
        relationships: Iterable[RelationshipDefinition],
        settings: ApplicationSettings,
    ) -> None:
        skipped_user_management: bool = self._skips_user_management(settings)
        for relationship in relationships:
            self._relationship_validator.validate(relationship, skipped_user_management)
            check_for_absent_entities(
                relationship,
                self.jdl_object.has_entity,
                skipped_user_management,
            )

    def _skips_user_management(self, settings: ApplicationSettings) -> bool:
        """The settings flag, or a ``skipUserManagement`` option anywhere in the model."""
        return settings.skipped_user_management or bool(
            self.jdl_object.get_options_for_name(UnaryOptionName.SKIP_USER_MANAGEMENT.value)
        )

    # -- Enums & deployments ---------------------------------------------------

    def _check_for_enum_errors(self, enums: Iterable[EnumDefinition]) -> None:
        for enum in enums:
            self._enum_validator.validate(enum)

    def _check_for_deployment_errors(
        self, deployments: Iterable[DeploymentDefinition]
    ) -> None:
        for deployment in deployments:
            self._deployment_validator.validate(deployment)

    # -- Options -----------------------------------------------------------------

    def _check_for_option_errors(
        self,
        options: Iterable[Union[UnaryOption, BinaryOption]],
        settings: ApplicationSettings,
        entity_names: Iterable[str],
    ) -> None:
        options = list(options)
        for option in options:
            if option.kind == "unary":
                self._unary_option_validator.validate(option)
            else:
                self._binary_option_validator.validate(option)
            check_for_pagination_in_app_with_cassandra(option, settings)
        without_service = find_entities_with_dto_but_no_service(options, entity_names)
        if without_service:
            logger.debug(
                "DTO without service for %s; a service will be generated.",
                ", ".join(without_service),
            )


class JDLValidator(_BusinessErrorChecker):
    """Validates a model in a single context governed by one settings object."""

    def __init__(
        self,
        jdl_object: Optional[JDLObject],
        application_settings: SettingsLike = None,
        logger: Any = None,
    ) -> None:
        super().__init__(jdl_object, logger)
        self.application_settings: ApplicationSettings = _as_settings(
            application_settings
        )

    def check_for_errors(self) -> None:
        settings = self.application_settings
        if settings.uses_blueprints:
            self.logger.warn(BLUEPRINTS_WARNING)
            return
        jdl_object = self.jdl_object
        if jdl_object.entity_quantity:
            self._check_for_entity_errors(jdl_object.entities.values(), settings)
        if jdl_object.relationship_quantity:
            self._check_for_relationship_errors(jdl_object.relationships, settings)
        if jdl_object.enum_quantity:
            self._check_for_enum_errors(jdl_object.enums.values())
        if jdl_object.deployment_quantity:
            self._check_for_deployment_errors(jdl_object.deployments)
        if jdl_object.option_quantity:
            self._check_for_option_errors(
                jdl_object.options, settings, jdl_object.entity_names
            )
        logger.debug("No business error found in %r.", jdl_object)


class JDLWithApplicationsValidator(_BusinessErrorChecker):
    """
    Validates a model carrying application descriptors, one application at
    a time, in declaration order.  Each application brings its own database
    and application types, its skip-user-management flag and blueprints.
    """

    def check_for_errors(self) -> None:
        applications_per_entity_name = self.jdl_object.get_applications_per_entity_name()
        for application in self.jdl_object.applications.values():
            logger.debug("Checking application '%s'.", application.base_name)
            if application.uses_blueprints:
                self.logger.warn(BLUEPRINTS_WARNING)
                continue
            self._check_application(application, applications_per_entity_name)

    def _check_application(
        self,
        application: ApplicationDefinition,
        applications_per_entity_name: Dict[str, List[ApplicationDefinition]],
    ) -> None:
        jdl_object = self.jdl_object
        if jdl_object.entity_quantity:
            self._check_for_entity_errors(
                (
                    entity
                    for name, entity in jdl_object.entities.items()
                    if application.has_entity_name(name)
                ),
                application,
            )
        if jdl_object.relationship_quantity:
            relationships = self._relationships_of(application, applications_per_entity_name)
            self._check_for_relationship_errors(relationships, application)
            for relationship in relationships:
                check_if_relationship_is_between_applications(
                    relationship, applications_per_entity_name
                )
        if jdl_object.enum_quantity:
            self._check_for_enum_errors(jdl_object.enums.values())
        if jdl_object.deployment_quantity:
            self._check_for_deployment_errors(jdl_object.deployments)
        if jdl_object.option_quantity:
            self._check_for_option_errors(
                (
                    option
                    for option in jdl_object.options
                    if option.applies_to_all
                    or any(option.covers(name) for name in application.entity_names)
                ),
                application,
                application.entity_names,
            )

    def _relationships_of(
        self,
        application: ApplicationDefinition,
        applications_per_entity_name: Dict[str, List[ApplicationDefinition]],
    ) -> List[RelationshipDefinition]:
        """
        Relationships touching an entity of ``application``, plus those
        touching no application at all (checked by every application).
        """
        relationships: List[RelationshipDefinition] = []
        for relationship in self.jdl_object.relationships:
            endpoints = (relationship.from_entity, relationship.to_entity)
            if any(application.has_entity_name(name) for name in endpoints) or not any(
                name in applications_per_entity_name for name in endpoints
            ):
                relationships.append(relationship)
        return relationships


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def create_validator(
    jdl_object: Optional[JDLObject],
    application_settings: SettingsLike = None,
    logger: Any = None,
) -> JDLValidator:
    """Single-context validator (the model has no application descriptors)."""
    return JDLValidator(jdl_object, application_settings, logger)


def create_with_application_validator(
    jdl_object: Optional[JDLObject], logger: Any = None
) -> JDLWithApplicationsValidator:
    """Multi-application validator: one validation context per application."""
    return JDLWithApplicationsValidator(jdl_object, logger)


def validate_jdl_object(
    jdl_object: Optional[JDLObject],
    application_settings: SettingsLike = None,
    logger: Any = None,
) -> None:
    """
    **Master validation entry point.**

    Picks the multi-application orchestrator when the model declares
    applications, the single-context one otherwise, and runs it.

    Raises:
        JDLValidationError: on the first fatal business-rule violation.
    """
    if jdl_object is not None and jdl_object.application_quantity:
        validator: _BusinessErrorChecker = create_with_application_validator(
            jdl_object, logger
        )
    else:
        validator = create_validator(jdl_object, application_settings, logger)
    validator.check_for_errors()


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "BLUEPRINTS_WARNING",
    "USER_MANAGEMENT_ENTITY_NAMES",
    "WarningCollector",
    "is_user_management_entity",
    "check_for_absent_entities",
    "check_if_relationship_is_between_applications",
    "check_for_pagination_in_app_with_cassandra",
    "find_entities_with_dto_but_no_service",
    "JDLValidator",
    "JDLWithApplicationsValidator",
    "create_validator",
    "create_with_application_validator",
    "validate_jdl_object",
]

logger.debug("jdlcheck.validators loaded (%d public symbols).", len(__all__))
