from __future__ import annotations

from pathlib import Path

import pandas as pd
from pydantic import ValidationError

from .models import MenuItem, MenuTags

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
_CATALOG_CSV = _DATA_DIR / "menu_catalog.csv"

# Multi-value cells are pipe-separated, e.g. "점심|저녁".
LIST_SEPARATOR = "|"

TAG_LIST_COLUMNS = [
    "meal_time",
    "companion",
    "cuisine",
    "cooking_method",
    "taste",
    "dish_type",
    "temperature",
    "budget",
    "context",
    "texture",
]
REQUIRED_TAG_COLUMNS = ["meal_time", "cuisine", "dish_type"]

_df: pd.DataFrame | None = None
_catalog: list[MenuItem] | None = None


class CatalogError(ValueError):
    """Raised when the menu catalog file is malformed."""


def _split(value: str) -> list[str]:
    return [v.strip() for v in str(value).split(LIST_SEPARATOR) if v.strip()]


def load_dataframe(path: Path = _CATALOG_CSV) -> pd.DataFrame:
    df = pd.read_csv(path, dtype=str, keep_default_na=False)

    missing = [c for c in ["id", "name", *TAG_LIST_COLUMNS, "satiety"] if c not in df.columns]
    if missing:
        raise CatalogError(f"catalog {path} is missing columns: {', '.join(missing)}")

    for col in TAG_LIST_COLUMNS + ["image_keywords"]:
        if col in df.columns:
            df[col] = df[col].apply(_split)

    if "spicy_level" in df.columns:
        df["spicy_level"] = pd.to_numeric(df["spicy_level"], errors="coerce").fillna(0).astype(int)

    duplicated = df.loc[df["id"].duplicated(), "id"].tolist()
    if duplicated:
        raise CatalogError(f"duplicate menu ids: {', '.join(duplicated)}")

    for col in REQUIRED_TAG_COLUMNS:
        empty = df.loc[df[col].apply(len) == 0, "id"].tolist()
        if empty:
            raise CatalogError(f"menus without {col} tags: {', '.join(empty)}")

    return df


def _row_to_menu(row: pd.Series) -> MenuItem:
    tags = MenuTags(**{col: row[col] for col in TAG_LIST_COLUMNS}, satiety=row["satiety"])
    fields = {
        key: row[key]
        for key in (
            "name_en", "emoji", "description", "cook_time", "calories", "price_range",
            "image_keywords",
        )
        if key in row.index
    }
    if "spicy_level" in row.index:
        fields["spicy_level"] = int(row["spicy_level"])
    return MenuItem(id=row["id"], name=row["name"], tags=tags, **fields)


def build_catalog(df: pd.DataFrame) -> list[MenuItem]:
    try:
        return [_row_to_menu(row) for _, row in df.iterrows()]
    except ValidationError as exc:
        raise CatalogError(f"invalid menu row: {exc}") from exc


def get_dataframe() -> pd.DataFrame:
    """Return the in-memory catalog DataFrame, loading it on first call."""
    global _df
    if _df is None:
        _df = load_dataframe()
    return _df


def get_catalog() -> list[MenuItem]:
    """Return a fresh list of the cached ``MenuItem`` records, loading them on first call."""
    global _catalog
    if _catalog is None:
        _catalog = build_catalog(get_dataframe())
    return list(_catalog)


def get_menu(menu_id: str) -> MenuItem:
    for menu in get_catalog():
        if menu.id == menu_id:
            return menu
    raise KeyError(menu_id)


def tag_vocabulary() -> dict[str, list[str]]:
    """Distinct tag values per facet across the catalog."""
    df = get_dataframe()
    vocab: dict[str, list[str]] = {}
    for col in TAG_LIST_COLUMNS:
        vocab[col] = sorted(df[col].explode().dropna().unique().tolist())
    vocab["satiety"] = sorted(v for v in df["satiety"].unique().tolist() if v)
    vocab["calories"] = sorted(v for v in df.get("calories", pd.Series(dtype=str)).unique().tolist() if v)
    return vocab
