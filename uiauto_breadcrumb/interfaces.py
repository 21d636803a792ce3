"""
@file interfaces.py
@brief Abstract collaborator contracts around the resolver.

The host application owns the live component tree. It hands the resolver a
snapshot plus the target and boundary elements, and receives the finished
path. Any host-side introspection happens behind these interfaces.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from .element import Element, Snapshot


class ISnapshotSource(ABC):
    """
    Supplies one captured component tree per user action.

    Implementations may rely on late-bound or reflective host lookups; the
    path builder guards every call and treats a failure as a missing segment.
    """

    @abstractmethod
    def snapshot(self) -> Snapshot:
        """
        Capture the component tree.

        Returns:
            Immutable snapshot of the dialog
        """
        pass

    @abstractmethod
    def target(self) -> Optional[Element]:
        """
        Element the user selected.

        Returns:
            Target element, or None if the selection is not part of the snapshot
        """
        pass

    @abstractmethod
    def boundary(self) -> Optional[Element]:
        """
        Ancestor that caps every upward search.

        Returns:
            Boundary element, or None to search from the target's parent
        """
        pass

    @abstractmethod
    def base_segments(self) -> Sequence[str]:
        """
        Segments preceding everything the resolver infers
        (settings page path, dialog title, tool window name).
        """
        pass

    def tree_segments(self) -> Sequence[str]:
        """
        Segments contributed by a tree, table or list selection inside the
        page. Empty unless the host knows of one.
        """
        return ()


class IPathConsumer(ABC):
    """Receives the resolved path (clipboard, console, test recorder...)."""

    @abstractmethod
    def consume(self, path: Optional[str]) -> None:
        """
        Accept a resolved path.

        Args:
            path: Separator-joined path, or None when no path could be determined
        """
        pass
