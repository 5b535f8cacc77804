"""Base classes for converter and pipeline options.

This module defines the foundation shared by every options dataclass used
throughout html2adoc.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from html2adoc.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Return the names of all dataclass fields."""
        return frozenset(f.name for f in fields(cls))  # type: ignore[arg-type]

    @classmethod
    def _check_unknown_keys(cls, data: dict[str, Any], section: str) -> None:
        """Reject configuration keys that do not map to a field.

        Raises
        ------
        ValidationError
            If ``data`` contains keys that are not fields of ``cls``.

        """
        unknown = sorted(set(data) - cls.field_names())
        if unknown:
            raise ValidationError(
                f"Unknown {section} option(s): {', '.join(unknown)}",
                parameter_name=section,
                parameter_value=unknown,
            )
