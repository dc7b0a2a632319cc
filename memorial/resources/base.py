"""
Base class for YAML-backed resources.

A resource is presentation data kept outside the code, under
`config/`, and looked up by id. Document templates are the only kind
so far.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import yaml


class Resource(ABC):
    """A named piece of configuration loaded from a YAML mapping."""

    @property
    @abstractmethod
    def resource_id(self) -> str:
        pass

    @classmethod
    @abstractmethod
    def from_dict(cls, data: dict[str, Any]) -> Resource:
        pass

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        pass

    @classmethod
    def from_yaml(cls, path: Path | str) -> Resource:
        """
        Load a resource from a YAML file.

        Raises:
            ValueError: The file is not a mapping with an `id`
        """
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict) or not data.get("id"):
            raise ValueError(f"{path} must be a YAML mapping with an 'id'")
        return cls.from_dict(data)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.resource_id!r}>"
