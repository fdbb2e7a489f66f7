"""Centralized validation constants for the employee API.

This module provides a single source of truth for allowed values,
length limits and pagination defaults used by validators and routers.
"""

import re
from typing import Final

# =============================================================================
# Employee Constants
# =============================================================================

ALLOWED_DEPARTMENTS: Final[tuple[str, ...]] = (
    "Engineering",
    "Marketing",
    "Sales",
    "HR",
    "Finance",
    "Operations",
)

ALLOWED_EMPLOYEE_STATUSES: Final[tuple[str, ...]] = (
    "active",
    "inactive",
    "terminated",
)

DEFAULT_EMPLOYEE_STATUS: Final[str] = "active"

# =============================================================================
# Text Length Constants
# =============================================================================

MIN_NAME_LENGTH: Final[int] = 2
MAX_NAME_LENGTH: Final[int] = 50
MIN_POSITION_LENGTH: Final[int] = 2
MAX_POSITION_LENGTH: Final[int] = 100

# =============================================================================
# Format Constants
# =============================================================================

# Optional leading +, no leading zero, at most 16 digits
PHONE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\+?[1-9]\d{0,15}$", re.ASCII)

ISO_DATE_PREFIX_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\d{4}-\d{2}-\d{2}", re.ASCII)

# Decimal or exponent notation; no whitespace, underscores or special values
NUMERIC_STRING_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$", re.ASCII
)

# =============================================================================
# Pagination Constants
# =============================================================================

DEFAULT_PAGE: Final[int] = 1
DEFAULT_PAGE_SIZE: Final[int] = 10
