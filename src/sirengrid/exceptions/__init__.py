"""
Custom exception hierarchy for sirengrid.

## Exception Hierarchy

```
SirenGridError (base)
├── ConfigurationError
│   ├── ConfigFileInvalidError
│   └── ConfigValidationError
└── DescriptorError
    ├── DescriptorNotFoundError
    └── UnsupportedCellAttributeError
```

All custom exceptions inherit from `SirenGridError`, which pairs a user
message and recovery hint with the file (`source`) and siren setting
(`siren_id`) the error concerns. See `sirengrid.exceptions.base`.

The descriptor parser does not raise: malformed input becomes a `None`
result, skipped items or defaulted fields. These exceptions are for the
edges that want a hard failure (CLI, strict export, config loading).

See `sirengrid.exceptions.handlers` for utilities to handle these exceptions systematically.
"""

from .base import SirenGridError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .descriptor import DescriptorError, DescriptorNotFoundError, UnsupportedCellAttributeError
from .handlers import (
    ErrorCollector,
    collect_errors,
    format_error_for_display,
    wrap_pydantic_error,
)

__all__ = [
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Descriptor
    "DescriptorError",
    "DescriptorNotFoundError",
    "UnsupportedCellAttributeError",
    # Handlers
    "ErrorCollector",
    "collect_errors",
    "format_error_for_display",
    "wrap_pydantic_error",
    # Base
    "SirenGridError",
]
