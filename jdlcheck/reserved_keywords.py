# File: jdlcheck/reserved_keywords.py
"""
JDLCheck - Reserved Keyword Tables
===================================
Static classification of identifiers that the generated stack reserves.

Four independent tables are exposed:

- class names: entity / enum names that would collide with generated or
  language-level classes (fatal when matched);
- field names: identifiers reserved by the generated server and client
  code (advisory: the generator prefixes them automatically);
- table names: per storage family (advisory, same prefixing rule);
- pagination: query-parameter names used by generated list endpoints.

All lookups are case-insensitive: every table is stored upper-cased and the
keyword is upper-cased before the O(1) membership test.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, List, Optional

from jdlcheck.field_types import DatabaseType, enum_value

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("jdlcheck.reserved_keywords")

# ---------------------------------------------------------------------------
# Language keywords
# ---------------------------------------------------------------------------

_JAVA_KEYWORDS: FrozenSet[str] = frozenset(
    {
        "ABSTRACT", "ASSERT", "BOOLEAN", "BREAK", "BYTE", "CASE", "CATCH",
        "CHAR", "CLASS", "CONST", "CONTINUE", "DEFAULT", "DO", "DOUBLE",
        "ELSE", "ENUM", "EXTENDS", "FALSE", "FINAL", "FINALLY", "FLOAT",
        "FOR", "GOTO", "IF", "IMPLEMENTS", "IMPORT", "INSTANCEOF", "INT",
        "INTERFACE", "LONG", "NATIVE", "NEW", "NULL", "PACKAGE", "PRIVATE",
        "PROTECTED", "PUBLIC", "RECORD", "RETURN", "SHORT", "STATIC",
        "STRICTFP", "SUPER", "SWITCH", "SYNCHRONIZED", "THIS", "THROW",
        "THROWS", "TRANSIENT", "TRUE", "TRY", "VAR", "VOID", "VOLATILE",
        "WHILE", "YIELD",
    }
)

_TYPESCRIPT_KEYWORDS: FrozenSet[str] = frozenset(
    {
        "AWAIT", "BREAK", "CASE", "CATCH", "CLASS", "CONST", "CONTINUE",
        "DEBUGGER", "DEFAULT", "DELETE", "DO", "ELSE", "ENUM", "EXPORT",
        "EXTENDS", "FALSE", "FINALLY", "FOR", "FUNCTION", "IF", "IMPLEMENTS",
        "IMPORT", "IN", "INSTANCEOF", "INTERFACE", "LET", "NEW", "NULL",
        "PACKAGE", "PRIVATE", "PROTECTED", "PUBLIC", "RETURN", "STATIC",
        "SUPER", "SWITCH", "THIS", "THROW", "TRUE", "TRY", "TYPEOF", "VAR",
        "VOID", "WHILE", "WITH", "YIELD",
    }
)

# Classes emitted by the generator itself; an entity with one of these
# names would overwrite generated infrastructure code.
_GENERATED_CLASS_NAMES: FrozenSet[str] = frozenset(
    {
        "ABSTRACTAUDITINGENTITY", "ACCOUNTRESOURCE", "ASYNCCONFIGURATION",
        "BADREQUESTALERTEXCEPTION", "CACHECONFIGURATION",
        "DATABASECONFIGURATION", "DOMAINUSERDETAILSSERVICE",
        "ENTITYAUDITEVENT", "ERRORCONSTANTS", "EXCEPTIONTRANSLATOR",
        "HEADERUTIL", "JACKSONCONFIGURATION", "LOGGINGCONFIGURATION",
        "MAILSERVICE", "PAGINATIONUTIL", "PERSISTENTAUDITEVENT",
        "RESPONSEUTIL", "SECURITYCONFIGURATION", "SECURITYUTILS",
        "USERRESOURCE", "USERSERVICE", "WEBCONFIGURER",
    }
)

RESERVED_CLASS_NAMES: FrozenSet[str] = _JAVA_KEYWORDS | _GENERATED_CLASS_NAMES
RESERVED_FIELD_NAMES: FrozenSet[str] = _JAVA_KEYWORDS | _TYPESCRIPT_KEYWORDS
RESERVED_PAGINATION_WORDS: FrozenSet[str] = frozenset({"PAGE", "SIZE", "SORT"})

# ---------------------------------------------------------------------------
# Storage family keywords (table names)
# ---------------------------------------------------------------------------

# Shared core of the relational dialects
_ANSI_SQL_KEYWORDS: FrozenSet[str] = frozenset(
    {
        "ALL", "ALTER", "AND", "AS", "BETWEEN", "BY", "CASE", "CHECK",
        "COLUMN", "CONSTRAINT", "CREATE", "CROSS", "CURRENT_DATE",
        "CURRENT_TIME", "CURRENT_TIMESTAMP", "CURRENT_USER", "DEFAULT",
        "DELETE", "DISTINCT", "DROP", "ELSE", "END", "EXISTS", "FALSE",
        "FETCH", "FOR", "FOREIGN", "FROM", "GRANT", "GROUP", "HAVING", "IN",
        "INNER", "INSERT", "INTERSECT", "INTO", "IS", "JOIN", "LEFT", "LIKE",
        "NOT", "NULL", "ON", "OR", "ORDER", "OUTER", "PRIMARY", "REFERENCES",
        "RIGHT", "SELECT", "SET", "TABLE", "THEN", "TRUE", "UNION", "UNIQUE",
        "UPDATE", "USER", "USING", "VALUES", "WHEN", "WHERE", "WITH",
    }
)

_MYSQL_KEYWORDS: FrozenSet[str] = _ANSI_SQL_KEYWORDS | frozenset(
    {
        "ACCESSIBLE", "ADD", "ANALYZE", "ASC", "BEFORE", "BIGINT", "BINARY",
        "BLOB", "BOTH", "CALL", "CASCADE", "CHANGE", "CHAR", "CHARACTER",
        "CONDITION", "CONTINUE", "CONVERT", "CURSOR", "DATABASE",
        "DATABASES", "DEC", "DECIMAL", "DECLARE", "DELAYED", "DESC",
        "DESCRIBE", "DETERMINISTIC", "DIV", "DOUBLE", "DUAL", "EACH",
        "ELSEIF", "ENCLOSED", "ESCAPED", "EXIT", "EXPLAIN", "FLOAT", "FORCE",
        "FULLTEXT", "GROUPS", "HIGH_PRIORITY", "IF", "IGNORE", "INDEX",
        "INFILE", "INOUT", "INT", "INTEGER", "INTERVAL", "ITERATE", "KEY",
        "KEYS", "KILL", "LEADING", "LEAVE", "LIMIT", "LINES", "LOAD", "LOCK",
        "LONG", "LOOP", "MATCH", "MOD", "NATURAL", "NUMERIC", "OPTIMIZE",
        "OPTION", "OUT", "OUTFILE", "PARTITION", "PRECISION", "PROCEDURE",
        "PURGE", "RANGE", "READ", "REAL", "REGEXP", "RELEASE", "RENAME",
        "REPEAT", "REPLACE", "REQUIRE", "RESTRICT", "RETURN", "REVOKE",
        "RLIKE", "SCHEMA", "SCHEMAS", "SENSITIVE", "SEPARATOR", "SHOW",
        "SIGNAL", "SMALLINT", "SPATIAL", "SQL", "STARTING", "TERMINATED",
        "TINYINT", "TO", "TRAILING", "TRIGGER", "UNDO", "UNLOCK", "UNSIGNED",
        "USAGE", "USE", "VARCHAR", "VARYING", "WHILE", "WRITE", "XOR",
        "ZEROFILL",
    }
)

_POSTGRESQL_KEYWORDS: FrozenSet[str] = _ANSI_SQL_KEYWORDS | frozenset(
    {
        "ANALYSE", "ANALYZE", "ANY", "ARRAY", "ASC", "ASYMMETRIC",
        "AUTHORIZATION", "BINARY", "BOTH", "CAST", "COLLATE", "COLLATION",
        "CONCURRENTLY", "CURRENT_CATALOG", "CURRENT_ROLE", "CURRENT_SCHEMA",
        "DEFERRABLE", "DESC", "DO", "EXCEPT", "FREEZE", "FULL", "ILIKE",
        "INITIALLY", "ISNULL", "LATERAL", "LEADING", "LIMIT", "LOCALTIME",
        "LOCALTIMESTAMP", "NOTNULL", "OFFSET", "ONLY", "OVERLAPS", "PLACING",
        "RETURNING", "SESSION_USER", "SIMILAR", "SOME", "SYMMETRIC",
        "TABLESAMPLE", "TO", "TRAILING", "VARIADIC", "VERBOSE", "WINDOW",
    }
)

_ORACLE_KEYWORDS: FrozenSet[str] = _ANSI_SQL_KEYWORDS | frozenset(
    {
        "ACCESS", "ADD", "ASC", "AUDIT", "CHAR", "CLUSTER", "COMMENT",
        "COMPRESS", "CONNECT", "CURRENT", "DATE", "DECIMAL", "DESC", "FILE",
        "FLOAT", "IDENTIFIED", "IMMEDIATE", "INCREMENT", "INDEX", "INITIAL",
        "INTEGER", "LEVEL", "LOCK", "LONG", "MAXEXTENTS", "MINUS", "MLSLABEL",
        "MODE", "MODIFY", "NOAUDIT", "NOCOMPRESS", "NOWAIT", "NUMBER", "OF",
        "OFFLINE", "ONLINE", "OPTION", "PCTFREE", "PRIOR", "PUBLIC", "RAW",
        "RENAME", "RESOURCE", "REVOKE", "ROW", "ROWID", "ROWNUM", "ROWS",
        "SESSION", "SHARE", "SIZE", "SMALLINT", "START", "SUCCESSFUL",
        "SYNONYM", "SYSDATE", "TO", "TRIGGER", "UID", "VALIDATE", "VARCHAR",
        "VARCHAR2", "VIEW", "WHENEVER",
    }
)

_MSSQL_KEYWORDS: FrozenSet[str] = _ANSI_SQL_KEYWORDS | frozenset(
    {
        "ADD", "ASC", "AUTHORIZATION", "BACKUP", "BEGIN", "BREAK", "BROWSE",
        "BULK", "CASCADE", "CHECKPOINT", "CLOSE", "CLUSTERED", "COALESCE",
        "COMMIT", "COMPUTE", "CONTAINS", "CONTINUE", "CONVERT", "CURSOR",
        "DATABASE", "DBCC", "DEALLOCATE", "DECLARE", "DENY", "DESC", "DISK",
        "DISTRIBUTED", "DOUBLE", "DUMP", "ERRLVL", "ESCAPE", "EXCEPT", "EXEC",
        "EXECUTE", "EXIT", "FILE", "FILLFACTOR", "FREETEXT", "FULL",
        "FUNCTION", "GOTO", "HOLDLOCK", "IDENTITY", "IF", "INDEX", "KEY",
        "KILL", "LINENO", "LOAD", "MERGE", "NATIONAL", "NOCHECK",
        "NONCLUSTERED", "OF", "OFF", "OFFSETS", "OPEN", "OPTION", "OVER",
        "PERCENT", "PIVOT", "PLAN", "PRECISION", "PRINT", "PROC", "PROCEDURE",
        "PUBLIC", "RAISERROR", "READ", "RECONFIGURE", "REPLICATION",
        "RESTORE", "RESTRICT", "RETURN", "REVERT", "REVOKE", "ROLLBACK",
        "ROWCOUNT", "RULE", "SAVE", "SCHEMA", "SHUTDOWN", "SOME",
        "STATISTICS", "TEXTSIZE", "TO", "TOP", "TRAN", "TRANSACTION",
        "TRIGGER", "TRUNCATE", "UNPIVOT", "USE", "VIEW", "WAITFOR", "WHILE",
        "WRITETEXT",
    }
)

_CASSANDRA_KEYWORDS: FrozenSet[str] = frozenset(
    {
        "ADD", "ALLOW", "ALTER", "AND", "APPLY", "ASC", "AUTHORIZE", "BATCH",
        "BEGIN", "BY", "COLUMNFAMILY", "CREATE", "DELETE", "DESC", "DESCRIBE",
        "DROP", "ENTRIES", "EXECUTE", "FROM", "FULL", "GRANT", "IF", "IN",
        "INDEX", "INFINITY", "INSERT", "INTO", "KEYSPACE", "LIMIT", "MODIFY",
        "NAN", "NORECURSIVE", "NOT", "NULL", "OF", "ON", "OR", "ORDER",
        "PRIMARY", "RENAME", "REPLACE", "REVOKE", "SCHEMA", "SELECT", "SET",
        "TABLE", "TO", "TOKEN", "TRUNCATE", "UNLOGGED", "UPDATE", "USE",
        "USING", "VIEW", "WHERE", "WITH",
    }
)

_MONGODB_KEYWORDS: FrozenSet[str] = frozenset(
    {"ADMIN", "CONFIG", "LOCAL", "SYSTEM"}
)

_COUCHBASE_KEYWORDS: FrozenSet[str] = frozenset(
    {
        "ALL", "ALTER", "AND", "ANY", "ARRAY", "AS", "ASC", "BUCKET", "BY",
        "CASE", "COLLECTION", "CREATE", "DATASET", "DELETE", "DESC",
        "DISTINCT", "DROP", "ELSE", "END", "EVERY", "EXCEPT", "EXISTS",
        "FROM", "GROUP", "HAVING", "IN", "INDEX", "INSERT", "INTO", "IS",
        "JOIN", "KEYSPACE", "LET", "LIKE", "LIMIT", "MERGE", "MISSING",
        "NEST", "NOT", "NULL", "OFFSET", "ON", "OR", "ORDER", "SATISFIES",
        "SELECT", "SET", "THEN", "UNION", "UNNEST", "UPDATE", "UPSERT",
        "USE", "VALUE", "VALUED", "VALUES", "WHEN", "WHERE", "WITHIN",
    }
)

_NEO4J_KEYWORDS: FrozenSet[str] = frozenset(
    {
        "CALL", "CASE", "CONSTRAINT", "CREATE", "DELETE", "DETACH",
        "DISTINCT", "DROP", "ELSE", "END", "EXISTS", "FOREACH", "INDEX",
        "LIMIT", "MATCH", "MERGE", "NODE", "OPTIONAL", "ORDER",
        "RELATIONSHIP", "REMOVE", "RETURN", "SET", "SKIP", "THEN", "UNION",
        "UNWIND", "WHERE", "WITH", "YIELD",
    }
)

_RELATIONAL_KEYWORDS: FrozenSet[str] = (
    _MYSQL_KEYWORDS | _POSTGRESQL_KEYWORDS | _ORACLE_KEYWORDS | _MSSQL_KEYWORDS
)

_TABLE_KEYWORDS_BY_DATABASE: Dict[str, FrozenSet[str]] = {
    DatabaseType.SQL.value: _RELATIONAL_KEYWORDS,
    DatabaseType.MYSQL.value: _MYSQL_KEYWORDS,
    DatabaseType.MARIADB.value: _MYSQL_KEYWORDS,
    DatabaseType.POSTGRESQL.value: _POSTGRESQL_KEYWORDS,
    DatabaseType.ORACLE.value: _ORACLE_KEYWORDS,
    DatabaseType.MSSQL.value: _MSSQL_KEYWORDS,
    DatabaseType.H2_DISK.value: _ANSI_SQL_KEYWORDS,
    DatabaseType.H2_MEMORY.value: _ANSI_SQL_KEYWORDS,
    DatabaseType.CASSANDRA.value: _CASSANDRA_KEYWORDS,
    DatabaseType.MONGODB.value: _MONGODB_KEYWORDS,
    DatabaseType.COUCHBASE.value: _COUCHBASE_KEYWORDS,
    DatabaseType.NEO4J.value: _NEO4J_KEYWORDS,
    DatabaseType.NO.value: frozenset(),
}


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def _normalize(keyword: Optional[str]) -> str:
    return keyword.upper() if keyword else ""


def is_reserved_class_name(keyword: Optional[str]) -> bool:
    """True when ``keyword`` can't be used as a generated class name."""
    return _normalize(keyword) in RESERVED_CLASS_NAMES


def is_reserved_field_name(keyword: Optional[str]) -> bool:
    return _normalize(keyword) in RESERVED_FIELD_NAMES


def is_reserved_pagination_word(keyword: Optional[str]) -> bool:
    return _normalize(keyword) in RESERVED_PAGINATION_WORDS


def is_reserved_table_name(
    keyword: Optional[str], database_type: Optional[str]
) -> bool:
    """
    Check a table name against the keywords of one storage family.

    ``sql`` stands for "any relational dialect", so it is checked against
    the union of the dialect tables.  Unknown families reserve nothing.
    """
    if not keyword or not database_type:
        return False
    keywords: FrozenSet[str] = _TABLE_KEYWORDS_BY_DATABASE.get(
        enum_value(database_type), frozenset()
    )
    return keyword.upper() in keywords


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "RESERVED_CLASS_NAMES",
    "RESERVED_FIELD_NAMES",
    "RESERVED_PAGINATION_WORDS",
    "is_reserved_class_name",
    "is_reserved_field_name",
    "is_reserved_pagination_word",
    "is_reserved_table_name",
]

logger.debug("jdlcheck.reserved_keywords loaded (%d public symbols).", len(__all__))
