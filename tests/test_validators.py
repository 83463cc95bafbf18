"""
tests/test_validators.py
Unit tests for the single-context business validator (jdlcheck.validators).

Tests cover:
- Empty models and blueprint short-circuiting
- Entity, field and validation rules
- Relationship endpoint resolution (User / Authority included)
- Option rules (pagination under Cassandra, DTO without service)
- Warning routing through the logger collaborator
- Phase ordering and idempotence
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict

import pytest

from conftest import make_entity, make_jdl
from jdlcheck.exceptions import JDLValidationError
from jdlcheck.models import (
    ApplicationSettings,
    BinaryOption,
    EnumDefinition,
    FieldDefinition,
    JDLObject,
    RelationshipDefinition,
    UnaryOption,
    ValidationRule,
)
from jdlcheck.validators import (
    JDLValidator,
    WarningCollector,
    _BusinessErrorChecker,
    check_for_absent_entities,
    create_validator,
    find_entities_with_dto_but_no_service,
    validate_jdl_object,
)


def _fails_with(message: str):
    return pytest.raises(JDLValidationError, match=f"^{re.escape(message)}$")


def _check(jdl: JDLObject, settings: Any = None, logger: Any = None) -> None:
    create_validator(jdl, settings, logger).check_for_errors()


SQL: Dict[str, Any] = {"databaseType": "sql"}


# ===========================================================================
# Construction & short-circuits
# ===========================================================================


class TestConstruction:
    """Tests for the validator factory."""

    def test_missing_model(self) -> None:
        with _fails_with("A JDL object must be passed to check for business errors."):
            create_validator(None)

    def test_returns_single_context_validator(self, empty_jdl: JDLObject) -> None:
        assert isinstance(create_validator(empty_jdl), JDLValidator)

    def test_settings_from_mapping(self, empty_jdl: JDLObject) -> None:
        validator = create_validator(empty_jdl, {"databaseType": "mongodb", "skipUserManagement": True})
        assert validator.application_settings.database_type == "mongodb"
        assert validator.application_settings.skipped_user_management

    def test_rejects_logger_without_warn(self, empty_jdl: JDLObject) -> None:
        with pytest.raises(TypeError):
            create_validator(empty_jdl, SQL, object())

    def test_shared_base_is_abstract(self, empty_jdl: JDLObject) -> None:
        with pytest.raises(TypeError):
            _BusinessErrorChecker(empty_jdl)


class TestEmptyModel:
    """Models without nodes pass whatever the settings."""

    @pytest.mark.parametrize(
        "settings",
        [None, {}, SQL, {"databaseType": "cassandra"}, {"applicationType": "gateway"}],
    )
    def test_empty_model_passes(
        self, empty_jdl: JDLObject, settings: Any, warnings: WarningCollector
    ) -> None:
        _check(empty_jdl, settings, warnings)
        assert warnings.warnings == []

    def test_database_type_only_required_with_entities(self, warnings: WarningCollector) -> None:
        jdl = JDLObject()
        jdl.add_enum(EnumDefinition(name="Genre", values=["NOVEL"]))
        _check(jdl, None, warnings)

    def test_database_type_required_for_entities(self, jdl_object: JDLObject) -> None:
        with _fails_with("Database type is required to validate entities."):
            _check(jdl_object)


class TestBlueprints:
    """Blueprint-governed models are not validated."""

    def test_blueprints_skip_validation(self, warnings: WarningCollector) -> None:
        jdl = make_jdl([make_entity("Continue")])
        _check(jdl, {"blueprints": ["vuejs"]}, warnings)
        assert warnings.warnings == [
            "Blueprints are being used, the JDL validation phase is skipped."
        ]

    def test_empty_blueprint_list_validates(self, jdl_object: JDLObject, warnings: WarningCollector) -> None:
        _check(jdl_object, {"databaseType": "sql", "blueprints": []}, warnings)
        assert warnings.warnings == []


# ===========================================================================
# Entities, fields & validations
# ===========================================================================


class TestEntityRules:
    """Tests for the entity phase."""

    def test_reference_model_passes(
        self, jdl_object: JDLObject, sql_settings: ApplicationSettings, warnings: WarningCollector
    ) -> None:
        _check(jdl_object, sql_settings, warnings)
        assert warnings.warnings == []

    def test_reserved_entity_name(self) -> None:
        jdl = make_jdl([make_entity("Continue")])
        with _fails_with(
            "The name 'Continue' is a reserved keyword and can not be used as an entity class name."
        ):
            _check(jdl, SQL)

    def test_reserved_table_name_warns(self, warnings: WarningCollector) -> None:
        jdl = make_jdl([make_entity("Purchase", tableName="order")])
        _check(jdl, SQL, warnings)
        assert warnings.warnings == [
            "The table name 'order' is a reserved keyword, so it will be prefixed "
            "with the value of 'jhiPrefix'."
        ]

    def test_table_name_depends_on_database(self, warnings: WarningCollector) -> None:
        jdl = make_jdl([make_entity("Keyspace")])
        _check(jdl, {"databaseType": "postgresql"}, warnings)
        assert warnings.warnings == []
        _check(jdl, {"databaseType": "cassandra"}, warnings)
        assert len(warnings) == 1


class TestFieldRules:
    """Tests for fields and their validations."""

    def test_reserved_field_name_warns(self, warnings: WarningCollector) -> None:
        jdl = make_jdl([make_entity("Book", FieldDefinition(name="class", type="String"))])
        _check(jdl, SQL, warnings)
        assert warnings.warnings == [
            "The name 'class' is a reserved keyword, so it will be prefixed with the "
            "value of 'jhiPrefix'."
        ]

    def test_pagination_word_fatal_under_sql(self) -> None:
        jdl = make_jdl([make_entity("Book", FieldDefinition(name="page", type="Integer"))])
        with _fails_with(
            "Field name 'page' found in Book is a reserved keyword, as it is used by "
            "Spring for pagination in the URL."
        ):
            _check(jdl, SQL)

    def test_pagination_word_allowed_elsewhere(self, warnings: WarningCollector) -> None:
        jdl = make_jdl([make_entity("Book", FieldDefinition(name="size", type="Integer"))])
        _check(jdl, {"databaseType": "mongodb"}, warnings)
        assert warnings.warnings == []

    def test_unknown_type_on_monolith(self) -> None:
        jdl = make_jdl([make_entity("Book", FieldDefinition(name="title", type="Text"))])
        with _fails_with("The type 'Text' is an unknown field type for field 'title' of entity 'Book'."):
            _check(jdl, {"databaseType": "sql", "applicationType": "monolith"})

    def test_unknown_type_on_gateway(self) -> None:
        jdl = make_jdl([make_entity("Book", FieldDefinition(name="title", type="Text"))])
        _check(jdl, {"databaseType": "sql", "applicationType": "gateway"})

    def test_type_outside_cassandra_universe(self) -> None:
        jdl = make_jdl([make_entity("Book", FieldDefinition(name="readingTime", type="Duration"))])
        with _fails_with(
            "The type 'Duration' is an unknown field type for field 'readingTime' of entity 'Book'."
        ):
            _check(jdl, {"databaseType": "cassandra"})

    def test_enum_type_accepted(self) -> None:
        jdl = make_jdl([make_entity("Book", FieldDefinition(name="genre", type="Genre"))])
        jdl.add_enum(EnumDefinition(name="Genre", values=["NOVEL"]))
        _check(jdl, SQL)

    def test_unsupported_validation(self) -> None:
        field = FieldDefinition(name="title", type="String", validations=[ValidationRule(name="min", value=1)])
        jdl = make_jdl([make_entity("Book", field)])
        with _fails_with("The validation 'min' isn't supported for the type 'String'."):
            _check(jdl, SQL)

    def test_unsupported_validation_on_enum(self) -> None:
        field = FieldDefinition(
            name="genre", type="Genre", validations=[ValidationRule(name="maxlength", value=3)]
        )
        jdl = make_jdl([make_entity("Book", field)])
        jdl.add_enum(EnumDefinition(name="Genre", values=["NOVEL"]))
        with _fails_with("The validation 'maxlength' isn't supported for the type 'Genre'."):
            _check(jdl, SQL)

    def test_malformed_validation(self) -> None:
        field = FieldDefinition(name="title", type="String", validations=[ValidationRule(name="maxlength")])
        jdl = make_jdl([make_entity("Book", field)])
        with _fails_with("The validation 'maxlength' requires a value."):
            _check(jdl, SQL)


# ===========================================================================
# Relationships
# ===========================================================================


class TestRelationshipRules:
    """Tests for relationship endpoint resolution."""

    def _relationship(self, source: str, destination: str, kind: str = "ManyToOne") -> RelationshipDefinition:
        return RelationshipDefinition(from_entity=source, to_entity=destination, type=kind)

    def test_undeclared_source(self) -> None:
        jdl = make_jdl([make_entity("Book")], [self._relationship("Ghost", "Book")])
        with _fails_with("In the relationship between Ghost and Book, Ghost is not declared."):
            _check(jdl, SQL)

    def test_undeclared_destination(self) -> None:
        jdl = make_jdl([make_entity("Book")], [self._relationship("Book", "Ghost")])
        with _fails_with("In the relationship between Book and Ghost, Ghost is not declared."):
            _check(jdl, SQL)

    def test_both_undeclared(self) -> None:
        jdl = make_jdl([], [self._relationship("Ghost", "Phantom")])
        with _fails_with(
            "In the relationship between Ghost and Phantom, Ghost and Phantom are not declared."
        ):
            _check(jdl)

    def test_user_without_skip_is_undeclared(self) -> None:
        jdl = make_jdl([make_entity("Book")], [self._relationship("Book", "User")])
        with _fails_with("In the relationship between Book and User, User is not declared."):
            _check(jdl, SQL)

    def test_user_with_skip_passes(self) -> None:
        jdl = make_jdl([make_entity("Book")], [self._relationship("Book", "User")])
        _check(jdl, {"databaseType": "sql", "skippedUserManagement": True})

    def test_authority_is_case_insensitive(self) -> None:
        jdl = make_jdl(
            [make_entity("Role")],
            [self._relationship("authority", "Role", "OneToMany")],
        )
        _check(jdl, {"databaseType": "sql", "skippedUserManagement": True})

    def test_skip_only_covers_user_management_entities(self) -> None:
        jdl = make_jdl([make_entity("Book")], [self._relationship("Book", "Ghost")])
        with _fails_with("In the relationship between Book and Ghost, Ghost is not declared."):
            _check(jdl, {"databaseType": "sql", "skippedUserManagement": True})

    def test_relationship_from_user_without_skip(self) -> None:
        jdl = make_jdl([make_entity("Destination")], [self._relationship("User", "Destination", "OneToOne")])
        with _fails_with(
            "Relationships from the User entity is not supported in the declaration between "
            "'User' and 'Destination'. You can have this by using the 'skipUserManagement' option."
        ):
            _check(jdl, SQL)

    def test_relationship_from_user_with_skip(self) -> None:
        jdl = make_jdl([make_entity("Destination")], [self._relationship("User", "Destination", "OneToOne")])
        _check(jdl, {"databaseType": "sql", "skippedUserManagement": True})

    def test_skip_user_management_option(self) -> None:
        jdl = make_jdl([make_entity("Destination")], [self._relationship("User", "Destination", "OneToOne")])
        jdl.add_option(UnaryOption(name="skipUserManagement"))
        _check(jdl, SQL)

    def test_check_for_absent_entities_directly(self) -> None:
        relationship = self._relationship("User", "Authority")
        check_for_absent_entities(relationship, lambda name: False, skipped_user_management=True)
        with _fails_with(
            "In the relationship between User and Authority, User and Authority are not declared."
        ):
            check_for_absent_entities(relationship, lambda name: False)

    def test_malformed_relationship(self) -> None:
        relationship = RelationshipDefinition(from_entity="Book", to_entity="Book", type="SomeToSome")
        jdl = make_jdl([make_entity("Book")], [relationship])
        with _fails_with("The relationship type 'SomeToSome' doesn't exist."):
            _check(jdl, SQL)


# ===========================================================================
# Options
# ===========================================================================


class TestOptionRules:
    """Tests for the option phase."""

    def test_pagination_under_cassandra(self, jdl_object: JDLObject) -> None:
        with _fails_with("Pagination isn't allowed when the application uses Cassandra."):
            _check(jdl_object, {"databaseType": "cassandra"})

    def test_pagination_elsewhere(self, jdl_object: JDLObject, warnings: WarningCollector) -> None:
        _check(jdl_object, {"databaseType": "mongodb"}, warnings)
        assert warnings.warnings == []

    def test_options_without_entities_still_checked(self) -> None:
        jdl = JDLObject()
        jdl.add_option(BinaryOption(name="paginate", value="pagination"))
        with _fails_with("Pagination isn't allowed when the application uses Cassandra."):
            _check(jdl, {"databaseType": "cassandra"})

    def test_unary_and_binary_dispatch(self) -> None:
        jdl = JDLObject()
        jdl.add_option(UnaryOption(name="skipClient"))
        jdl.add_option(BinaryOption(name="skipClient", value="yes"))
        with _fails_with("The binary option 'skipClient' isn't supported."):
            _check(jdl, SQL)

    def test_dto_without_service_is_permitted(
        self,
        jdl_object: JDLObject,
        warnings: WarningCollector,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="jdlcheck.validators"):
            _check(jdl_object, SQL, warnings)
        assert warnings.warnings == []
        assert "DTO without service for Author" in caplog.text

    def test_find_entities_with_dto_but_no_service(self) -> None:
        options = [
            BinaryOption(name="dto", value="mapstruct", entity_names=["*"], excluded_names=["Tag"]),
            BinaryOption(name="service", value="serviceImpl", entity_names=["Book"]),
            BinaryOption(name="service", value="no", entity_names=["Author"]),
        ]
        names = ["Author", "Book", "Tag"]
        assert find_entities_with_dto_but_no_service(options, names) == ["Author"]

    def test_disabled_dto_is_ignored(self) -> None:
        options = [BinaryOption(name="dto", value="no")]
        assert find_entities_with_dto_but_no_service(options, ["Book"]) == []


# ===========================================================================
# Logger collaborator
# ===========================================================================


class TestLoggerCollaborator:
    """Advisory findings go through the injected collaborator only."""

    def test_default_logger_is_package_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        jdl = make_jdl([make_entity("Purchase", tableName="order")])
        with caplog.at_level(logging.WARNING, logger="jdlcheck"):
            _check(jdl, SQL)
        assert "The table name 'order' is a reserved keyword" in caplog.text

    def test_stdlib_logger_accepted(self, caplog: pytest.LogCaptureFixture) -> None:
        jdl = make_jdl([make_entity("Purchase", tableName="order")])
        with caplog.at_level(logging.WARNING, logger="my.app"):
            _check(jdl, SQL, logging.getLogger("my.app"))
        assert [r.name for r in caplog.records] == ["my.app"]

    def test_fatal_findings_are_not_logged(self, warnings: WarningCollector) -> None:
        jdl = make_jdl([make_entity("Continue")])
        with pytest.raises(JDLValidationError):
            _check(jdl, SQL, warnings)
        assert warnings.warnings == []


# ===========================================================================
# Ordering & determinism
# ===========================================================================


class TestPipeline:
    """Phase ordering, warning ordering and idempotence."""

    def test_entities_checked_before_options(self, jdl_object: JDLObject) -> None:
        jdl_object.add_entity(make_entity("Continue"))
        with _fails_with(
            "The name 'Continue' is a reserved keyword and can not be used as an entity class name."
        ):
            _check(jdl_object, {"databaseType": "cassandra"})

    def test_warnings_in_declaration_order(self, warnings: WarningCollector) -> None:
        jdl = make_jdl(
            [
                make_entity("Purchase", FieldDefinition(name="new", type="Boolean"), tableName="order"),
                make_entity("Item", FieldDefinition(name="delete", type="Boolean")),
            ]
        )
        _check(jdl, SQL, warnings)
        assert [message.split("'")[1] for message in warnings] == ["order", "new", "delete"]

    def test_idempotent_success(self, warnings: WarningCollector) -> None:
        jdl = make_jdl([make_entity("Purchase", FieldDefinition(name="class", type="String"), tableName="order")])
        validator = create_validator(jdl, SQL, warnings)
        validator.check_for_errors()
        first = warnings.warnings
        warnings.clear()
        validator.check_for_errors()
        assert warnings.warnings == first
        assert len(first) == 2

    def test_idempotent_failure(self, jdl_object: JDLObject) -> None:
        validator = create_validator(jdl_object, {"databaseType": "cassandra"})
        messages = []
        for _ in range(2):
            with pytest.raises(JDLValidationError) as exc_info:
                validator.check_for_errors()
            messages.append(str(exc_info.value))
        assert messages[0] == messages[1]

    def test_validate_jdl_object_single_context(self, jdl_object: JDLObject, warnings: WarningCollector) -> None:
        validate_jdl_object(jdl_object, SQL, warnings)
        with _fails_with("Database type is required to validate entities."):
            validate_jdl_object(jdl_object)
