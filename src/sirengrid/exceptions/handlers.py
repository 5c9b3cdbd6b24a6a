"""
Centralized error handling utilities.

## Quick Reference

| Scenario | Use This |
|----------|----------|
| Config file syntax error | `ConfigFileInvalidError` |
| Config value invalid | `ConfigValidationError` |
| Descriptor has no siren container | `DescriptorNotFoundError` |
| Strict export would drop cell attributes | `UnsupportedCellAttributeError` |

### Handling Patterns

| Pattern | Code |
|---------|------|
| Try multiple items, keep going | `collector = collect_errors("parse sirens"); with collector.try_operation(...): ...` |
| Convert pydantic failures | `raise wrap_pydantic_error(e, str(path)) from e` |
| Show an error in the CLI | `message, hint = format_error_for_display(e)` |

## Example: Batch Parsing

```python
from sirengrid.exceptions import collect_errors

collector = collect_errors("parse siren settings")
for index, item in enumerate(items):
    with collector.try_operation(f"siren setting #{index}"):
        settings.append(parse_item(item))

if collector.has_errors:
    logger.warning(collector.get_summary())
```

One bad item never aborts the surrounding batch; every failure is kept
for the summary.
"""

import logging
from typing import Optional

from .base import SirenGridError
from .config import ConfigFileInvalidError, ConfigValidationError


logger = logging.getLogger(__name__)


def wrap_pydantic_error(error: Exception, file_path: str) -> SirenGridError:
    """
    Convert Pydantic validation errors to sirengrid exceptions.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the config file that failed validation

    Returns:
        A ConfigurationError with appropriate type and message
    """
    from pydantic import ValidationError

    error_msg = str(error)

    # Format: "Invalid JSON: <actual error> [type=json_invalid, ..."
    if "Invalid JSON" in error_msg or "json_invalid" in error_msg:
        if "Invalid JSON:" in error_msg:
            parse_error = error_msg.split("Invalid JSON:")[1].split("[type=")[0].strip()
        else:
            parse_error = error_msg

        return ConfigFileInvalidError(file_path, parse_error)

    if isinstance(error, ValidationError):
        errors = error.errors()
        if len(errors) == 1:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get('loc', ('unknown',)))
            return ConfigValidationError(
                field=field or "unknown",
                value=first_error.get('input', None),
                error_msg=first_error.get('msg', 'validation failed'),
                file_path=file_path
            )
        if errors:
            error_lines = []
            for err in errors:
                field = ".".join(str(loc) for loc in err.get('loc', ('unknown',)))
                error_lines.append(f"  - {field}: {err.get('msg', 'validation failed')}")

            combined_msg = f"{len(errors)} validation errors:\n" + "\n".join(error_lines)
            return ConfigValidationError(
                field="multiple fields",
                value=None,
                error_msg=combined_msg,
                file_path=file_path
            )

    return ConfigValidationError(
        field="unknown",
        value=None,
        error_msg=error_msg,
        file_path=file_path
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Args:
        error: The exception to format

    Returns:
        Tuple of (message with location, recovery_hint or None)
    """
    if isinstance(error, SirenGridError):
        return str(error), error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None


def collect_errors(operation: str) -> "ErrorCollector":
    """
    Create an error collector for batch operations.

    Args:
        operation: Description of the overall operation

    Returns:
        ErrorCollector instance
    """
    return ErrorCollector(operation)


class ErrorCollector:
    """
    Collects multiple errors during batch operations.

    Allows operations to continue even if some fail, then
    report all failures at once.
    """

    def __init__(self, operation: str):
        self.operation = operation
        self.errors: list[tuple[str, Exception]] = []
        self.success_count = 0

    @property
    def has_errors(self) -> bool:
        """Check if any errors were collected."""
        return len(self.errors) > 0

    @property
    def error_count(self) -> int:
        """Get the number of errors collected."""
        return len(self.errors)

    def try_operation(self, sub_operation: str) -> "ErrorCollector._OperationContext":
        """
        Context manager for a single operation within the batch.

        Args:
            sub_operation: Description of this specific operation

        Returns:
            Context manager that catches and stores errors
        """
        return self._OperationContext(self, sub_operation)

    def get_summary(self) -> str:
        """
        Get a summary of collected errors.

        Returns:
            Multi-line summary string
        """
        if not self.has_errors:
            return f"All operations completed successfully ({self.success_count} total)"

        summary = (
            f"{self.operation}: failed {self.error_count} of "
            f"{self.error_count + self.success_count} operations:\n"
        )
        for sub_op, error in self.errors:
            summary += f"  - {sub_op}: {error}\n"

        return summary.rstrip()

    class _OperationContext:
        """Internal context manager for individual operations."""

        def __init__(self, collector: "ErrorCollector", sub_operation: str):
            self.collector = collector
            self.sub_operation = sub_operation
            self.failed = False

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if exc_type is None:
                self.collector.success_count += 1
                return False

            # Only ordinary errors are isolated; KeyboardInterrupt and friends propagate
            if not issubclass(exc_type, Exception):
                return False

            self.failed = True
            self.collector.errors.append((self.sub_operation, exc_val))
            logger.debug(
                f"{self.collector.operation}: {self.sub_operation} failed: {exc_val}",
                exc_info=(exc_type, exc_val, exc_tb),
            )
            return True
