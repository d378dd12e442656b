"""
Recipe Models

Data class for a recipe written up from a recording.
"""

from dataclasses import asdict, dataclass, field
from typing import List, Optional


def parse_lines(text: str) -> List[str]:
    """
    Split editor text into list entries.

    Lines that are blank after stripping are dropped; kept lines
    are returned as typed.

    Example:
        parse_lines("2 eggs\\n\\n  1 cup flour") -> ["2 eggs", "  1 cup flour"]
    """
    return [line for line in text.split("\n") if line.strip()]


@dataclass
class Recipe:
    """A recipe draft or saved recipe"""

    title: str = ""
    description: str = ""
    ingredients: List[str] = field(default_factory=list)
    instructions: List[str] = field(default_factory=list)
    prep_time: str = ""
    cook_time: str = ""
    servings: str = ""
    notes: str = ""
    date_created: Optional[str] = None  # Set when saved

    @property
    def is_saved(self) -> bool:
        return self.date_created is not None

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Recipe":
        """Create Recipe from dictionary"""
        return cls(
            title=data.get("title", ""),
            description=data.get("description", ""),
            ingredients=list(data.get("ingredients", [])),
            instructions=list(data.get("instructions", [])),
            prep_time=data.get("prep_time", ""),
            cook_time=data.get("cook_time", ""),
            servings=data.get("servings", ""),
            notes=data.get("notes", ""),
            date_created=data.get("date_created"),
        )
