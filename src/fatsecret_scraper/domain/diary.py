"""Domain models for scraped diary pages."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FoodItem:
    """A single food row inside a meal."""

    name: str = ""
    quantity: str = ""
    fat: str = ""
    carbs: str = ""
    protein: str = ""
    calories: str = ""


@dataclass(frozen=True)
class MealData:
    """A meal block with aggregate macros and its food items."""

    name: str = ""
    fat: str = ""
    carbs: str = ""
    protein: str = ""
    calories: str = ""
    items: list[FoodItem] = field(default_factory=list)


@dataclass(frozen=True)
class DiaryEntry:
    """One day of a user's food diary.

    Nutrition values are kept as the text rendered by the site. An entry with
    an empty ``date`` means nothing was extracted.
    """

    date: str = ""
    calories: str = ""
    idr: str = ""
    fat: str = ""
    protein: str = ""
    carbs: str = ""
    timestamp: str = ""
    meals: list[MealData] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Return True when the page yielded no diary data."""
        return self.date == ""
