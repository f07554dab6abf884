"""Exceptions and warnings raised by the conversion core."""

from __future__ import annotations

from typing import Iterable, Optional


class DecodeFragmentError(ValueError):
    """Raised when a single decoded text fragment is malformed."""


class ConfigurationError(ValueError):
    """Raised when the style profile lacks an entry a slide needs."""

    def __init__(self, issues: Iterable[str], page_number: Optional[int] = None):
        if isinstance(issues, str):
            issues = [issues]
        self.issues = [str(i).strip() for i in issues if str(i).strip()]
        if not self.issues:
            self.issues = ["Invalid configuration"]
        self.page_number = page_number
        super().__init__(self._format())

    def _format(self) -> str:
        header = "Configuration validation failed"
        if self.page_number is not None:
            header += f" (page {self.page_number})"
        lines = [header + ":"]
        for issue in self.issues:
            lines.append(f"- {issue}")
        return "\n".join(lines)

    def for_page(self, page_number: int) -> "ConfigurationError":
        """Return a copy of this error tagged with a page number."""
        return ConfigurationError(self.issues, page_number=page_number)


class EmptyPageWarning(UserWarning):
    """Issued when a page yields no text lines. Not a failure."""
