# uiauto_breadcrumb/exceptions.py
from __future__ import annotations
from typing import List, Optional


class BreadcrumbError(Exception):
    """Base exception for the framework."""


class ConfigError(BreadcrumbError):
    """Raised when layout configuration is invalid."""


class SnapshotError(BreadcrumbError):
    """Raised when a snapshot document cannot be loaded or fails validation."""

    def __init__(self, message: str, path: Optional[str] = None, problems: Optional[List[str]] = None):
        self.message = message
        self.path = path
        self.problems = problems or []
        super().__init__(self.__str__())

    def __str__(self) -> str:
        lines = [f"SnapshotError: {self.message}"]
        if self.path:
            lines[0] += f" path='{self.path}'"
        for problem in self.problems:
            lines.append(f"  - {problem}")
        return "\n".join(lines)


class ElementNotFoundError(BreadcrumbError):
    def __init__(self, element_id: str, role: str = "element", known: Optional[List[str]] = None):
        self.element_id = element_id
        self.role = role
        self.known = known or []
        super().__init__(self.__str__())

    def __str__(self) -> str:
        base = f"ElementNotFoundError: {self.role}='{self.element_id}'"
        if self.known:
            preview = ", ".join(self.known[:10])
            more = f" (+{len(self.known) - 10} more)" if len(self.known) > 10 else ""
            base += f" known ids: {preview}{more}"
        return base
