"""Extraction of diary records from FatSecret diary pages.

Every anchor lookup is optional: a missing anchor leaves the matching field
empty instead of failing the whole extraction.
"""

from bs4 import BeautifulSoup, Tag

from fatsecret_scraper.domain.diary import DiaryEntry, FoodItem, MealData
from fatsecret_scraper.domain.errors import ParseError

# Order of the macro cells in every nutrition row of the page.
_MACRO_FIELDS = ("fat", "carbs", "protein", "calories")


def parse_document(markup: bytes | str) -> BeautifulSoup:
    """Parse raw markup into a navigable document."""
    try:
        return BeautifulSoup(markup, "html.parser")
    except Exception as exc:
        raise ParseError(f"Unable to parse page markup: {exc}") from exc


def extract_diary_entry(document: BeautifulSoup | Tag) -> DiaryEntry:
    """Extract the day totals and meals from a diary page."""
    macros: dict[str, str] = {}
    header = document.select_one(
        "div.MyFSHeaderFooterAdditional table.foodsNutritionTbl"
    )
    if header is not None:
        macros = _macros(header.select("tr:nth-child(3) td.sub"))

    return DiaryEntry(
        date=_text(document, "div.subtitle") or "",
        idr=_text(document, "div.big") or "",
        meals=[
            extract_meal(table)
            for table in document.select("table.generic.foodsTbl")
        ],
        **macros,
    )


def extract_meal(table: Tag) -> MealData:
    """Extract one meal block with its aggregate macros and food rows."""
    name = ""
    macros: dict[str, str] = {}
    header_row = table.select_one(
        "tr:first-child td table.foodsNutritionTbl tr:first-child"
    )
    if header_row is not None:
        name = _text(header_row, "td.greytitlex") or ""
        macros = _macros(header_row.select("td.sub"))

    items: list[FoodItem] = []
    for cell in table.select("tr td.borderLeft.borderRight"):
        for row in cell.select("table.foodsNutritionTbl tr"):
            item = extract_food_item(row)
            # Rows without a food link are totals or spacer rows.
            if item.name:
                items.append(item)

    return MealData(name=name, items=items, **macros)


def extract_food_item(row: Tag) -> FoodItem:
    """Extract a food row: name and quantity first, then the macro columns."""
    return FoodItem(
        name=_text(row, "td:nth-child(1) a") or "",
        quantity=_text(row, "td:nth-child(1) div.smallText") or "",
        **_macros(row.select("td.normal")),
    )


def _text(scope: BeautifulSoup | Tag, selector: str) -> str | None:
    """Return the stripped text of the first match, or None when absent."""
    node = scope.select_one(selector)
    if node is None:
        return None
    return node.get_text().strip()


def _macros(cells: list[Tag]) -> dict[str, str]:
    """Map cells positionally onto fat, carbs, protein and calories."""
    return {
        name: cell.get_text().strip()
        for name, cell in zip(_MACRO_FIELDS, cells, strict=False)
    }
