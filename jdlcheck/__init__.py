# File: jdlcheck/__init__.py
"""
JDLCheck: Business-Rule Validation for JDL Object Models
=========================================================

Checks a fully-parsed JDL Object Model (entities, fields, relationships,
enums, options, deployments and applications) for business-rule
consistency before any code is generated from it.

Architecture overview::

    ┌──────────────┐     ┌──────────────────┐     ┌────────────────────┐
    │   loaders    │────▶│    validators    │────▶│  shape_validators  │
    │ (JSON/YAML)  │     │ (orchestrators)  │     │ (one node at once) │
    └──────────────┘     └────────┬─────────┘     └────────────────────┘
                                  │
                    ┌─────────────┼──────────────┐
                    ▼             ▼              ▼
             ┌──────────┐ ┌─────────────┐ ┌───────────────────┐
             │  models  │ │ field_types │ │ reserved_keywords │
             └──────────┘ └─────────────┘ └───────────────────┘

Usage::

    from jdlcheck import JDLObject, WarningCollector, create_validator

    warnings = WarningCollector()
    create_validator(jdl_object, {"databaseType": "sql"}, warnings).check_for_errors()
    print(warnings.warnings)

Public API:
    - create_validator                   Single-context validator factory
    - create_with_application_validator  Multi-application validator factory
    - validate_jdl_object                Picks the right validator and runs it
    - JDLValidationError                 Raised on the first fatal finding
    - WarningCollector                   In-memory warning sink
"""

from __future__ import annotations

__version__: str = "0.1.0"
__license__: str = "MIT"

from jdlcheck.exceptions import JDLValidationError
from jdlcheck.field_types import ApplicationType, DatabaseType, RelationshipType
from jdlcheck.loaders import load_jdl_file, parse_raw_model
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
    ValidationRule,
)
from jdlcheck.validators import (
    JDLValidator,
    JDLWithApplicationsValidator,
    WarningCollector,
    create_validator,
    create_with_application_validator,
    validate_jdl_object,
)

# ---------------------------------------------------------------------------
# Public API surface
# ---------------------------------------------------------------------------

__all__: list[str] = [
    # Version info
    "__version__",
    "__license__",
    # Errors
    "JDLValidationError",
    # Vocabulary
    "ApplicationType",
    "DatabaseType",
    "RelationshipType",
    # Models
    "ApplicationDefinition",
    "ApplicationSettings",
    "BinaryOption",
    "DeploymentDefinition",
    "EntityDefinition",
    "EnumDefinition",
    "FieldDefinition",
    "JDLObject",
    "RelationshipDefinition",
    "UnaryOption",
    "ValidationRule",
    # Validation
    "JDLValidator",
    "JDLWithApplicationsValidator",
    "WarningCollector",
    "create_validator",
    "create_with_application_validator",
    "validate_jdl_object",
    # Loading
    "load_jdl_file",
    "parse_raw_model",
]
