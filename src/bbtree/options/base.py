"""Base classes for parser and renderer options.

This module defines the foundation classes for the option dataclasses used
by the bbtree parser and renderers.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any, Iterable

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


def normalize_tag_set(tags: Iterable[str] | str | None, field_name: str) -> frozenset[str]:
    """Normalize a collection of tag names into a lowercase frozenset.

    Parameters
    ----------
    tags : iterable of str, str, or None
        Tag names; a single string is split on commas
    field_name : str
        Name of the option being validated (for error messages)

    Returns
    -------
    frozenset of str
        Lowercased tag names

    Raises
    ------
    ValueError
        If any tag name is not a non-empty ASCII alphanumeric string

    """
    if tags is None:
        return frozenset()
    if isinstance(tags, str):
        tags = [part for part in tags.split(",") if part.strip()]

    normalized = set()
    for tag in tags:
        if not isinstance(tag, str):
            raise ValueError(f"{field_name} entries must be strings, got {type(tag).__name__}")
        name = tag.strip().lower()
        if not name or not (name.isascii() and name.isalnum()):
            raise ValueError(f"{field_name} contains an invalid tag name: {tag!r}")
        normalized.add(name)
    return frozenset(normalized)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

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
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build options from a configuration mapping.

        Keys may use hyphens or underscores. Unknown keys raise ``ValueError``.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = str(key).replace("-", "_")
            if name not in known:
                raise ValueError(f"Unknown option for {cls.__name__}: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Notes
    -----
    Subclasses should define format-specific rendering options as frozen dataclass fields.

    """

    def __post_init__(self) -> None:
        """Validate renderer options."""
        pass


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for all parser options.

    Notes
    -----
    Subclasses should define format-specific parsing options as frozen dataclass fields.

    """

    def __post_init__(self) -> None:
        """Validate parser options."""
        pass
