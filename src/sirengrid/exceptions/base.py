"""Root of the sirengrid exception hierarchy.

Errors sirengrid raises on purpose carry a short message for the user and
a longer one for the log file. They also carry where in the user's data
the problem lies, so the CLI can point at it:

- `source`: the carcols.meta or config file involved
- `siren_id`: the siren setting being loaded or exported

The code that raises an error often knows neither; callers further up
fill them in with `with_context` before re-raising:

```python
try:
    text = export(pattern, descriptor, siren_id, strict=True)
except SirenGridError as e:
    raise e.with_context(source=str(path))
```
"""

from typing import Optional, Self


class SirenGridError(Exception):
    """
    Base exception for all sirengrid errors.

    `str(error)` is the user message followed by the location when one is
    known, e.g. "2 cell(s) use direction ... (carcols.meta, siren setting 1)".

    Attributes:
        user_message: Message for display, without the location
        technical_message: Message for the log file
        recoverable: False if retrying with other input cannot help
        recovery_hint: What the user can change, if anything
        source: Descriptor or config file the error refers to
        siren_id: Siren setting the error refers to
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        *,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
        source: Optional[str] = None,
        siren_id: Optional[int] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint
        self.source = source
        self.siren_id = siren_id

    @property
    def location(self) -> Optional[str]:
        """File and siren setting the error refers to, or None if unknown."""
        parts = []
        if self.source:
            parts.append(self.source)
        if self.siren_id is not None:
            parts.append(f"siren setting {self.siren_id}")
        return ", ".join(parts) or None

    def with_context(
        self, source: Optional[str] = None, siren_id: Optional[int] = None
    ) -> Self:
        """Fill in location fields that are still unknown. Returns self."""
        if self.source is None:
            self.source = source
        if self.siren_id is None:
            self.siren_id = siren_id
        return self

    def __str__(self) -> str:
        location = self.location
        if location:
            return f"{self.user_message} ({location})"
        return self.user_message

    def get_full_message(self) -> str:
        """Message with location and recovery hint, for dialogs and the CLI."""
        msg = str(self)
        if self.recovery_hint:
            msg += f"\n\nSuggestion: {self.recovery_hint}"
        return msg
