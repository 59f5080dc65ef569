from __future__ import annotations

import enum
import typing as t
from dataclasses import dataclass

from .errors import ValidationError


class CharacterClass(str, enum.Enum):
    NUMERIC = "numeric"
    ALPHANUMERIC = "alphanumeric"

    @classmethod
    def parse(cls, raw: t.Optional[str]) -> "CharacterClass":
        if raw is None:
            return cls.NUMERIC
        try:
            return cls(raw.strip().lower())
        except ValueError:
            choices = ", ".join(f"'{member.value}'" for member in cls)
            raise ValidationError(f"Invalid character type. Must be one of: {choices}") from None


@dataclass
class Item:
    key: str
    value: str
    # Unix timestamp (seconds); None never expires
    ttl: t.Optional[int] = None

    def to_dict(self) -> t.Dict[str, t.Any]:
        data: t.Dict[str, t.Any] = {"key": self.key, "value": self.value}
        if self.ttl is not None:
            data["ttl"] = self.ttl
        return data

    @classmethod
    def from_dict(cls, data: t.Dict[str, t.Any]) -> "Item":
        ttl = data.get("ttl")
        return cls(key=data["key"], value=data["value"], ttl=int(ttl) if ttl is not None else None)
