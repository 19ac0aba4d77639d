"""schema_audit: semantic schema rules for Swagger 2 / OpenAPI 3 documents."""

__all__ = [
    "__version__",
    "validate",
    "validate_file",
    "ConfigurationError",
    "DocumentLoadError",
    "Finding",
    "Severity",
    "ValidationResult",
]
__version__ = "0.1.0"

from schema_audit.api import validate, validate_file  # noqa: E402, F401
from schema_audit.core.config import ConfigurationError  # noqa: E402, F401
from schema_audit.core.loader import DocumentLoadError  # noqa: E402, F401
from schema_audit.model import Severity  # noqa: E402, F401
from schema_audit.model.finding import Finding, ValidationResult  # noqa: E402, F401
