"""LIFO container used for the parser's operand and operator stacks."""
from typing import Generic, Iterator, List, Optional, TypeVar

T = TypeVar("T")


class Stack(Generic[T]):
    """Last-in first-out stack."""

    def __init__(self) -> None:
        self._items: List[T] = []

    def push(self, item: T) -> None:
        self._items.append(item)

    def pop(self) -> T:
        """
        Remove and return the top element.

        :return: The top element
        :raises IndexError: If the stack is empty
        """
        if not self._items:
            raise IndexError("pop from empty stack")
        return self._items.pop()

    def top(self) -> Optional[T]:
        """Return the top element without removing it, None if the stack is empty."""
        if not self._items:
            return None
        return self._items[-1]

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        # Top first
        return reversed(self._items)
