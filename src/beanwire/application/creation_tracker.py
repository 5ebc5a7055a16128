"""Application layer - In-progress bean tracking."""

import threading
from typing import List

from beanwire.domain import CreationPath


class CreationTracker:
    """Tracks the beans currently being created on each thread.

    Uses thread-local storage so that a re-entrant request on the same thread is
    recognised as a cycle while other threads are unaffected.

    Attributes:
        _local: Thread-local storage for creation paths.
    """

    def __init__(self) -> None:
        """Initialize the tracker with thread-local storage."""
        self._local = threading.local()

    def _get_commits(self) -> List[str]:
        """Get the singletons committed by the current thread's outermost creation."""
        if not hasattr(self._local, "commits"):
            self._local.commits = []
        return self._local.commits

    def _get_path(self) -> CreationPath:
        """Get the current thread's creation path."""
        if not hasattr(self._local, "path"):
            self._local.path = CreationPath()
        return self._local.path

    def enter(self, name: str) -> None:
        """Mark a bean as in creation.

        Raises:
            CyclicCreationError: If the bean is already in creation on this thread.

        Example:
            >>> tracker = CreationTracker()
            >>> tracker.enter("a")
            >>> tracker.enter("b")
            >>> tracker.enter("a")  # Raises CyclicCreationError
        """
        self._get_path().push(name)

    def leave(self) -> None:
        """Unmark the most recently entered bean."""
        path = self._get_path()
        path.pop()
        if not path.stack:
            self._get_commits().clear()

    def record_commit(self, name: str) -> None:
        """Note that ``name`` reached the finished tier during the current creation."""
        self._get_commits().append(name)

    def commit_mark(self) -> int:
        return len(self._get_commits())

    def commits_since(self, mark: int) -> List[str]:
        """Remove and return the singletons committed after ``mark``."""
        commits = self._get_commits()
        committed = commits[mark:]
        del commits[mark:]
        return committed

    def is_in_creation(self, name: str) -> bool:
        return name in self._get_path()

    def cycle_to(self, name: str) -> List[str]:
        """Return the chain of bean names closed by requesting ``name`` again."""
        return self._get_path().cycle_to(name)

    @property
    def depth(self) -> int:
        return len(self._get_path().stack)

    def clear(self) -> None:
        """Clear the current thread's path."""
        if hasattr(self._local, "path"):
            self._local.path.clear()
        if hasattr(self._local, "commits"):
            self._local.commits.clear()
