"""Worker runtime environment types.

Used by Settings to pick environment-specific behavior (log rendering,
schema bootstrap).

Environments:
- DEVELOPMENT: Local runs, human-readable logs
- TESTING: Automated test execution
- CI: Continuous integration
- PRODUCTION: Deployed worker, JSON logs
"""

from enum import Enum


class Environment(str, Enum):
    """Worker environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
