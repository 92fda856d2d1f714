"""Unit of work protocol."""

from typing import Protocol


class UnitOfWork(Protocol):
    """
    Commits or discards everything staged by the repositories together.

    Used as a context manager: a clean exit commits, an exception rolls
    back. Storage failures surface as PersistenceError.
    """

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(self, exc_type, exc, tb) -> bool:
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...
