"""Generic observer list management."""

import logging
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=object)


class ObserverManager(Generic[T]):
    """
    Generic observer list manager.

    Type Parameters:
        T: The observer protocol type (e.g., PatternObserver)

    Everything runs on the caller's thread; there is no locking.

    Example:
        ```python
        class MyService:
            def __init__(self):
                self._observers = ObserverManager[MyObserver]()

            def register_observer(self, observer: MyObserver) -> None:
                self._observers.register(observer)

            def _notify_something_happened(self, data):
                self._observers.notify('on_something_happened', data)
        ```
    """

    def __init__(self, observer_type_name: str = "observer"):
        """
        Initialize the observer manager.

        Args:
            observer_type_name: Name of the observer type for logging (e.g., "pattern")
        """
        self._observers: list[T] = []
        self._observer_type_name = observer_type_name

    def register(self, observer: T) -> None:
        """Register an observer (idempotent - won't add duplicates)."""
        if observer not in self._observers:
            self._observers.append(observer)
            logger.debug(f"Registered {self._observer_type_name} observer: {observer}")
        else:
            logger.debug(f"{self._observer_type_name} observer already registered: {observer}")

    def unregister(self, observer: T) -> None:
        """Unregister an observer."""
        if observer in self._observers:
            self._observers.remove(observer)
            logger.debug(f"Unregistered {self._observer_type_name} observer: {observer}")
        else:
            logger.warning(
                f"Attempted to unregister unknown {self._observer_type_name} observer: {observer}"
            )

    def notify(self, callback_name: str, *args: Any, **kwargs: Any) -> None:
        """
        Notify all observers by calling their callback method.

        The list is copied first so observers may register or unregister
        from inside a callback.

        Error Handling:
            Exceptions in observer callbacks are logged but don't affect other observers.
        """
        for observer in list(self._observers):
            try:
                callback = getattr(observer, callback_name)
                callback(*args, **kwargs)
            except AttributeError:
                logger.error(
                    f"{self._observer_type_name} observer {observer} has no method '{callback_name}'",
                    exc_info=True,
                )
            except Exception as e:
                logger.error(
                    f"Error notifying {self._observer_type_name} observer {observer} via {callback_name}: {e}",
                    exc_info=True,
                )

    def clear(self) -> None:
        """Remove all observers."""
        self._observers.clear()

    def __len__(self) -> int:
        return len(self._observers)
