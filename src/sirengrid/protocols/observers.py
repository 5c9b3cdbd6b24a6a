"""Observer protocol definitions for pattern store events."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sirengrid.services import PatternStore

from .events import PatternEvent


@runtime_checkable
class PatternObserver(Protocol):
    """
    Observer that receives pattern store events.

    Lets the editor UI redraw without the store knowing about it.
    """

    def on_pattern_event(self, event: PatternEvent, store: "PatternStore") -> None:
        """
        Handle a pattern store change.

        Args:
            event: What changed
            store: The store after the change
        """
        ...
