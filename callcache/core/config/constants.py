"""
System Constants and Enumerations

Architectural Decision: Centralized constants for maintainability
- Single source of truth for magic strings
- Type-safe enums for stage identifiers in logs

Author: System Architect
Date: 2026-10-17
"""

from enum import Enum

# ============================================================================
# Stage Identifiers (for structured logging)
# ============================================================================


class Stage(str, Enum):
    """
    Call processing stages, attached to log entries as ``stage=``.

    Format: {SEQUENCE}_{DESCRIPTIVE_NAME}
    - SEQUENCE: Numeric order for the call path, alphabetic prefix for the
      registry and store concerns
    """

    # Call path (sequential 1.0 - 4.0)
    POLICY_CHECK = "1.0_POLICY_CHECK"
    KEY_GENERATION = "2.0_KEY_GENERATION"
    STORE_LOOKUP = "3.0_STORE_LOOKUP"
    TARGET_INVOCATION = "4.0_TARGET_INVOCATION"
    STORE_WRITE = "4.1_STORE_WRITE"

    # Cross-cutting concerns
    CONFIGURATION = "C_CONFIGURATION"
    PLUGIN_RESOLUTION = "P_PLUGIN_RESOLUTION"
    STORE_EVENT = "S_STORE_EVENT"


# ============================================================================
# Key Generation
# ============================================================================

# Separates the target name from the method name in callable identities
CALLABLE_SEPARATOR = "::"


# ============================================================================
# Stores
# ============================================================================

DEFAULT_STORE_ADAPTER = "memory"

REDIS_KEY_PREFIX = "callcache"

# Truncation length for keys written to logs
LOG_KEY_LENGTH = 20
