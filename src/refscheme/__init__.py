"""refscheme - validation of reference scheme tokens.

A reference scheme is the short identifier in front of a reference
(``file``, ``https``, ``tx``...) that selects how the rest of it is resolved.
This package decides whether a string is a valid scheme and provides an
immutable value type for the ones that are.
"""

__version__ = "0.1.0"

from refscheme.configuration import SchemeConfiguration, SchemeField
from refscheme.errors import (
    SCHEME_ERROR_PREFIX,
    InvalidSchemeError,
    RefSchemeError,
    SchemeConfigError,
    SchemeErrorCode,
)
from refscheme.scheme import (
    FILE,
    HTTP,
    HTTPS,
    SCHEME_DELIMITER,
    TX,
    ReferenceScheme,
    SchemeValidation,
    is_valid_scheme,
    validate,
)

__all__ = [
    # Version
    "__version__",
    # Validation
    "ReferenceScheme",
    "SchemeValidation",
    "is_valid_scheme",
    "validate",
    # Well-known schemes
    "FILE",
    "HTTP",
    "HTTPS",
    "TX",
    "SCHEME_DELIMITER",
    # Configuration
    "SchemeConfiguration",
    "SchemeField",
    # Errors
    "SCHEME_ERROR_PREFIX",
    "InvalidSchemeError",
    "RefSchemeError",
    "SchemeConfigError",
    "SchemeErrorCode",
]
