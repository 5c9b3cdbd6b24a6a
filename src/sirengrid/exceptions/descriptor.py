"""Descriptor-related exceptions.

The parser itself never raises these; it reports structural failure by
returning None. They are raised at the edges (CLI, strict export) where a
caller asked for a hard failure.
"""

from typing import Optional

from .base import SirenGridError


class DescriptorError(SirenGridError):
    """Base class for descriptor conversion errors."""
    pass


class DescriptorNotFoundError(DescriptorError):
    """The text holds no siren settings container."""

    def __init__(self, source: Optional[str] = None):
        """
        Initialize descriptor not found error.

        Args:
            source: File name or label of the text that failed to parse
        """
        super().__init__(
            user_message="No siren settings found",
            technical_message="CVehicleModelInfoVarGlobal/Sirens container missing or XML malformed",
            recoverable=True,
            recovery_hint="Make sure the file is a carcols.meta with a <Sirens> section",
            source=source,
        )


class UnsupportedCellAttributeError(DescriptorError):
    """Grid cells carry attributes the descriptor format cannot store."""

    def __init__(
        self,
        cells: list[tuple[int, int]],
        attributes: set[str],
        siren_id: Optional[int] = None,
    ):
        """
        Initialize unsupported attribute error.

        Args:
            cells: (row, column) of every cell carrying a non-default value
            attributes: Names of the attributes that would be dropped
            siren_id: Siren setting being exported, if known
        """
        names = ", ".join(sorted(attributes))
        super().__init__(
            user_message=f"{len(cells)} cell(s) use {names}, which cannot be exported",
            technical_message=f"Non-default {names} at cells {cells[:10]}",
            recoverable=True,
            recovery_hint="Reset direction, multiples and scale factor, or export without strict mode",
            siren_id=siren_id,
        )
        self.cells = cells
        self.attributes = attributes
