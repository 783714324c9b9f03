"""Base settings infrastructure for collectors."""

from dataclasses import asdict, fields
from copy import deepcopy
from typing import Dict, Any, Iterable
from abc import ABC

__all__ = [
    'BaseSettings',
]


class BaseSettings(ABC):
    """Base class for dataclass settings and metadata with common functionality."""

    def copy(self):
        """Return a deep copy of settings."""
        return deepcopy(self)

    @classmethod
    def _check_unknown(cls, keys: Iterable[str]) -> None:
        valid_fields = {f.name for f in fields(cls)}
        unknown = set(keys) - valid_fields
        if unknown:
            allowed = ', '.join(sorted(valid_fields))
            unknown_str = ', '.join(f"'{k}'" for k in sorted(unknown))
            raise ValueError(
                f"Unknown setting(s) {unknown_str} for {cls.__name__}. "
                f"Allowed settings: {allowed}"
            )

    def update(self, **kwargs):
        """Update settings and return new instance (immutable pattern).

        The new instance is built through the constructor, so any
        ``__post_init__`` validation runs again on the updated values.
        """
        self._check_unknown(kwargs.keys())

        values = {f.name: deepcopy(getattr(self, f.name)) for f in fields(self)}
        values.update(kwargs)
        return self.__class__(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Create settings instance from dictionary."""
        cls._check_unknown(data.keys())
        return cls(**data)

    def __str__(self) -> str:
        """Pretty print settings for inspection."""
        lines = [f"{self.__class__.__name__}:"]
        for key, value in self.to_dict().items():
            lines.append(f"  {key}: {value}")
        return '\n'.join(lines)

    def __repr__(self) -> str:
        """Return repr string for debugging."""
        params = ', '.join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"{self.__class__.__name__}({params})"
