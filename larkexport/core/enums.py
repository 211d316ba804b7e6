"""Core enumerations."""

from enum import Enum


class Region(str, Enum):
    """Deployment the API host belongs to.

    Feishu is the mainland China deployment, Lark the international one. Both
    expose the same open API under different hosts.
    """

    FEISHU = "feishu"
    LARK = "lark"

    @classmethod
    def from_str(cls, value: str) -> "Region":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown region: {value}") from None
