# File: jdlcheck/field_types.py
"""
JDLCheck - Field Types, Storage Families & Option Vocabulary
=============================================================
Fixed vocabularies shared by the models and the validators:

- storage families (``DatabaseType``) and application types;
- relationship cardinalities;
- validation (constraint) names and which of them carry a value;
- unary / binary option names and their accepted values;
- the per-storage-family field-type universe and the
  (field type, validation) support matrix.

Everything in this module is read-only after import, so concurrent
validation passes can share it freely.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, List, Optional

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("jdlcheck.field_types")

# ---------------------------------------------------------------------------
# Enums: fixed sets used across the entire project
# ---------------------------------------------------------------------------


class DatabaseType(str, Enum):
    """Storage families an application can be generated for."""

    SQL = "sql"
    MYSQL = "mysql"
    MARIADB = "mariadb"
    POSTGRESQL = "postgresql"
    MSSQL = "mssql"
    ORACLE = "oracle"
    H2_DISK = "h2Disk"
    H2_MEMORY = "h2Memory"
    MONGODB = "mongodb"
    CASSANDRA = "cassandra"
    COUCHBASE = "couchbase"
    NEO4J = "neo4j"
    NO = "no"


class ApplicationType(str, Enum):
    """Deployable unit kinds."""

    MONOLITH = "monolith"
    GATEWAY = "gateway"
    MICROSERVICE = "microservice"


class RelationshipType(str, Enum):
    """Relationship cardinalities, spelled as in JDL."""

    ONE_TO_ONE = "OneToOne"
    ONE_TO_MANY = "OneToMany"
    MANY_TO_ONE = "ManyToOne"
    MANY_TO_MANY = "ManyToMany"


class Validation(str, Enum):
    """Validation rules that can be attached to a field."""

    REQUIRED = "required"
    UNIQUE = "unique"
    MINLENGTH = "minlength"
    MAXLENGTH = "maxlength"
    PATTERN = "pattern"
    MIN = "min"
    MAX = "max"
    MINBYTES = "minbytes"
    MAXBYTES = "maxbytes"


class FieldType(str, Enum):
    """Field types known to the generator."""

    STRING = "String"
    INTEGER = "Integer"
    LONG = "Long"
    BIG_DECIMAL = "BigDecimal"
    FLOAT = "Float"
    DOUBLE = "Double"
    ENUM = "Enum"
    BOOLEAN = "Boolean"
    LOCAL_DATE = "LocalDate"
    ZONED_DATE_TIME = "ZonedDateTime"
    INSTANT = "Instant"
    DURATION = "Duration"
    UUID = "UUID"
    BLOB = "Blob"
    ANY_BLOB = "AnyBlob"
    IMAGE_BLOB = "ImageBlob"
    TEXT_BLOB = "TextBlob"


def enum_value(value: Any) -> Any:
    """Unwrap an ``Enum`` member to its raw value; pass anything else through."""
    return value.value if isinstance(value, Enum) else value


RELATIONSHIP_TYPES: FrozenSet[str] = frozenset(t.value for t in RelationshipType)
VALIDATION_NAMES: FrozenSet[str] = frozenset(v.value for v in Validation)

# Validations that are meaningless without a value
VALUED_VALIDATIONS: FrozenSet[str] = frozenset(
    {
        Validation.MINLENGTH.value,
        Validation.MAXLENGTH.value,
        Validation.PATTERN.value,
        Validation.MIN.value,
        Validation.MAX.value,
        Validation.MINBYTES.value,
        Validation.MAXBYTES.value,
    }
)

# Valued validations whose value is a bound
NUMERIC_VALIDATIONS: FrozenSet[str] = VALUED_VALIDATIONS - {Validation.PATTERN.value}

# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


class UnaryOptionName(str, Enum):
    SKIP_CLIENT = "skipClient"
    SKIP_SERVER = "skipServer"
    NO_FLUENT_METHOD = "noFluentMethod"
    FILTER = "filter"
    READ_ONLY = "readOnly"
    EMBEDDED = "embedded"
    SKIP_USER_MANAGEMENT = "skipUserManagement"


class BinaryOptionName(str, Enum):
    DTO = "dto"
    SERVICE = "service"
    PAGINATION = "paginate"
    MICROSERVICE = "microservice"
    SEARCH = "search"
    ANGULAR_SUFFIX = "angularSuffix"
    CLIENT_ROOT_FOLDER = "clientRootFolder"


UNARY_OPTION_NAMES: FrozenSet[str] = frozenset(o.value for o in UnaryOptionName)
BINARY_OPTION_NAMES: FrozenSet[str] = frozenset(o.value for o in BinaryOptionName)

# Closed value sets; binary options absent from this map take any value.
BINARY_OPTION_VALUES: Dict[str, FrozenSet[str]] = {
    BinaryOptionName.DTO.value: frozenset({"mapstruct", "no"}),
    BinaryOptionName.SERVICE.value: frozenset({"serviceClass", "serviceImpl", "no"}),
    BinaryOptionName.PAGINATION.value: frozenset({"pagination", "infinite-scroll", "no"}),
    BinaryOptionName.SEARCH.value: frozenset({"elasticsearch", "couchbase", "no"}),
}

# The value meaning "option turned off"
NO_VALUE: str = "no"


def is_unary_option(name: Optional[str]) -> bool:
    return enum_value(name) in UNARY_OPTION_NAMES


def is_binary_option(name: Optional[str]) -> bool:
    return enum_value(name) in BINARY_OPTION_NAMES


def is_binary_option_value(name: str, value: object) -> bool:
    """True when ``value`` is acceptable for the binary option ``name``."""
    allowed: Optional[FrozenSet[str]] = BINARY_OPTION_VALUES.get(enum_value(name))
    if allowed is None:
        return True
    return enum_value(value) in allowed


# ---------------------------------------------------------------------------
# Deployments
# ---------------------------------------------------------------------------


class DeploymentType(str, Enum):
    DOCKER_COMPOSE = "docker-compose"
    KUBERNETES = "kubernetes"
    OPENSHIFT = "openshift"


GKE_INGRESS_TYPE: str = "gke"

# ---------------------------------------------------------------------------
# Type universes per storage family
# ---------------------------------------------------------------------------

COMMON_DB_TYPES: FrozenSet[str] = frozenset(t.value for t in FieldType)

CASSANDRA_TYPES: FrozenSet[str] = frozenset(
    {
        FieldType.STRING.value,
        FieldType.INTEGER.value,
        FieldType.LONG.value,
        FieldType.BIG_DECIMAL.value,
        FieldType.FLOAT.value,
        FieldType.DOUBLE.value,
        FieldType.ENUM.value,
        FieldType.BOOLEAN.value,
        FieldType.LOCAL_DATE.value,
        FieldType.ZONED_DATE_TIME.value,
        FieldType.INSTANT.value,
        FieldType.UUID.value,
        FieldType.BLOB.value,
        FieldType.ANY_BLOB.value,
        FieldType.IMAGE_BLOB.value,
        FieldType.TEXT_BLOB.value,
    }
)

_TYPES_BY_DATABASE: Dict[str, FrozenSet[str]] = {
    DatabaseType.SQL.value: COMMON_DB_TYPES,
    DatabaseType.MYSQL.value: COMMON_DB_TYPES,
    DatabaseType.MARIADB.value: COMMON_DB_TYPES,
    DatabaseType.POSTGRESQL.value: COMMON_DB_TYPES,
    DatabaseType.MSSQL.value: COMMON_DB_TYPES,
    DatabaseType.ORACLE.value: COMMON_DB_TYPES,
    DatabaseType.H2_DISK.value: COMMON_DB_TYPES,
    DatabaseType.H2_MEMORY.value: COMMON_DB_TYPES,
    DatabaseType.MONGODB.value: COMMON_DB_TYPES,
    DatabaseType.COUCHBASE.value: COMMON_DB_TYPES,
    DatabaseType.NEO4J.value: COMMON_DB_TYPES,
    DatabaseType.NO.value: COMMON_DB_TYPES,
    DatabaseType.CASSANDRA.value: CASSANDRA_TYPES,
}

# ---------------------------------------------------------------------------
# (field type, validation) support matrix
# ---------------------------------------------------------------------------

_BASE_VALIDATIONS: FrozenSet[str] = frozenset(
    {Validation.REQUIRED.value, Validation.UNIQUE.value}
)
_STRING_VALIDATIONS: FrozenSet[str] = _BASE_VALIDATIONS | {
    Validation.MINLENGTH.value,
    Validation.MAXLENGTH.value,
    Validation.PATTERN.value,
}
_NUMERIC_VALIDATIONS: FrozenSet[str] = _BASE_VALIDATIONS | {
    Validation.MIN.value,
    Validation.MAX.value,
}
_BINARY_VALIDATIONS: FrozenSet[str] = _BASE_VALIDATIONS | {
    Validation.MINBYTES.value,
    Validation.MAXBYTES.value,
}

SUPPORTED_VALIDATIONS: Dict[str, FrozenSet[str]] = {
    FieldType.STRING.value: _STRING_VALIDATIONS,
    FieldType.INTEGER.value: _NUMERIC_VALIDATIONS,
    FieldType.LONG.value: _NUMERIC_VALIDATIONS,
    FieldType.BIG_DECIMAL.value: _NUMERIC_VALIDATIONS,
    FieldType.FLOAT.value: _NUMERIC_VALIDATIONS,
    FieldType.DOUBLE.value: _NUMERIC_VALIDATIONS,
    FieldType.ENUM.value: _BASE_VALIDATIONS,
    FieldType.BOOLEAN.value: _BASE_VALIDATIONS,
    FieldType.LOCAL_DATE.value: _BASE_VALIDATIONS,
    FieldType.ZONED_DATE_TIME.value: _BASE_VALIDATIONS,
    FieldType.INSTANT.value: _BASE_VALIDATIONS,
    FieldType.DURATION.value: _BASE_VALIDATIONS,
    FieldType.UUID.value: _BASE_VALIDATIONS,
    FieldType.BLOB.value: _BINARY_VALIDATIONS,
    FieldType.ANY_BLOB.value: _BINARY_VALIDATIONS,
    FieldType.IMAGE_BLOB.value: _BINARY_VALIDATIONS,
    FieldType.TEXT_BLOB.value: _BASE_VALIDATIONS,
}

TypePredicate = Callable[[Optional[str]], bool]


def get_is_type(database_type: Optional[str]) -> TypePredicate:
    """
    Return the predicate telling whether a type belongs to the universe of
    ``database_type``.

    Raises:
        ValueError: when ``database_type`` is not a known storage family.
    """
    universe: Optional[FrozenSet[str]] = _TYPES_BY_DATABASE.get(
        enum_value(database_type) or ""
    )
    if universe is None:
        raise ValueError(
            f"The passed database type '{database_type}' isn't supported."
        )

    def is_type(field_type: Optional[str]) -> bool:
        return enum_value(field_type) in universe

    return is_type


def _accepts_any_type(field_type: Optional[str]) -> bool:
    return True


def get_type_checking_function(entity_name: Optional[str], settings: Any) -> TypePredicate:
    """
    Type predicate for the fields of ``entity_name`` under ``settings``.

    Gateways pass entities through without owning their storage, so any
    type name is accepted there.
    """
    if enum_value(getattr(settings, "application_type", None)) == ApplicationType.GATEWAY.value:
        logger.debug("Skipping field type checks for '%s' (gateway).", entity_name)
        return _accepts_any_type
    return get_is_type(getattr(settings, "database_type", None))


def has_validation(
    field_type: Optional[str], validation: Optional[str], is_an_enum: bool = False
) -> bool:
    """
    Check the support matrix.  Enum-typed fields use the ``Enum`` row
    whatever their declared type name is.
    """
    validation = enum_value(validation)
    if is_an_enum:
        return validation in SUPPORTED_VALIDATIONS[FieldType.ENUM.value]
    return validation in SUPPORTED_VALIDATIONS.get(
        enum_value(field_type) or "", frozenset()
    )


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "DatabaseType",
    "ApplicationType",
    "RelationshipType",
    "Validation",
    "FieldType",
    "UnaryOptionName",
    "BinaryOptionName",
    "DeploymentType",
    "RELATIONSHIP_TYPES",
    "VALIDATION_NAMES",
    "VALUED_VALIDATIONS",
    "NUMERIC_VALIDATIONS",
    "UNARY_OPTION_NAMES",
    "BINARY_OPTION_NAMES",
    "BINARY_OPTION_VALUES",
    "NO_VALUE",
    "GKE_INGRESS_TYPE",
    "COMMON_DB_TYPES",
    "CASSANDRA_TYPES",
    "SUPPORTED_VALIDATIONS",
    "enum_value",
    "get_is_type",
    "get_type_checking_function",
    "has_validation",
    "is_unary_option",
    "is_binary_option",
    "is_binary_option_value",
]

logger.debug("jdlcheck.field_types loaded (%d public symbols).", len(__all__))
