# -*- coding: utf-8 -*-
"""Domain errors shared by the stores and services.

Validation errors carry a message that is safe to show to the caller; the
application maps them to HTTP 400.
"""

from __future__ import annotations


class DomainValidationError(ValueError):
    """Input rejected before any state was changed."""

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else "Invalid input"


class LabResultValidationError(DomainValidationError):
    pass


class SymptomValidationError(DomainValidationError):
    pass
