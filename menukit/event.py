import logging
from typing import Any, Callable, List

logger = logging.getLogger('menukit.event')


class Event:
    def __init__(self, name: str) -> None:
        self.name = name
        self._items: List[Callable] = []

    def __add__(self, item: Callable):
        self._items.append(item)
        return self

    def __sub__(self, item: Callable):
        self._items.remove(item)
        return self

    def __iadd__(self, item: Callable):
        self._items.append(item)
        return self

    def __isub__(self, item: Callable):
        if item in self._items:
            self._items.remove(item)
        else:
            logger.warning(f'Event handler {item} not found on {self.name}')
        return self

    def __len__(self) -> int:
        return len(self._items)

    def emit(self, *args: Any, **kwargs: Any) -> None:
        """Call every handler in the order it was added."""
        for handler in list(self._items):
            handler(*args, **kwargs)
