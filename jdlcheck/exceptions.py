# File: jdlcheck/exceptions.py
"""
JDLCheck - Exceptions
======================
A single fatal error type.  Its message is the exact, user-facing
description of the first business rule violation found; callers and tests
match on it literally.
"""

from __future__ import annotations

from typing import List


class JDLValidationError(ValueError):
    """Raised for a fatal business-rule violation in a JDL object."""


__all__: List[str] = ["JDLValidationError"]
