"""Case-insensitive category keys."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CategoryKey:
    """Category name that compares and hashes case-insensitively.

    The original spelling is kept in ``name`` for display.
    """

    name: str = field(compare=False)
    folded: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "folded", self.name.casefold())

    def matches(self, other: str) -> bool:
        """Return True when ``other`` names the same category."""
        return other.casefold() == self.folded


__all__ = ["CategoryKey"]
