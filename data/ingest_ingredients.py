"""Utilities to load extra ingredient pool entries from CSV files.

This module provides:
- parse_ingredients_csv(csv_path): returns a list of validated ingredient record dicts
- seed_ingredients_from_csv(csv_path, session): idempotently adds them to the pool

Expected columns: `key`, `name_en` (plus optional `name_<lang>` columns),
`category`, the per-100g macros `kcal`, `protein`, `carbs`, `fat`, `fiber`,
`default_portion` and `unit`. The list-valued columns
`safe_for_intolerances`, `triggers_intolerances`, `replaces` and
`meal_types` hold `|`-separated values. `animal_origin`, `staple` and
`macro_source` are optional.
"""
from __future__ import annotations

from typing import Dict, List
import pandas as pd

from core.exceptions import PoolDataError
from core.logger import get_logger
from core.repository import IngredientRepository
from database.database import WriteSessionLocal
from services.pool_context import validate_ingredient

logger = get_logger("data.ingest_ingredients")

LIST_COLUMNS = ("safe_for_intolerances", "triggers_intolerances", "replaces", "meal_types")
NUMERIC_COLUMNS = ("kcal", "protein", "carbs", "fat", "fiber", "default_portion")
OPTIONAL_COLUMNS = ("animal_origin", "staple")


def _split(cell: str) -> List[str]:
    return [part.strip() for part in str(cell).split("|") if part.strip()]


def _row_to_record(row: pd.Series) -> Dict:
    record = {
        "key": row.get("key", "").strip(),
        "names": {
            col[len("name_"):]: str(row[col]).strip()
            for col in row.index
            if col.startswith("name_") and str(row[col]).strip()
        },
        "category": row.get("category", "").strip().lower(),
        "unit": row.get("unit", "").strip() or "g",
        "macro_source": row.get("macro_source", "").strip() or "estimated",
    }
    for col in NUMERIC_COLUMNS:
        value = str(row.get(col, "")).strip()
        # blank macros fail validation below instead of defaulting to zero
        record[col] = value if value else None
    for col in LIST_COLUMNS:
        record[col] = _split(row.get(col, ""))
    for col in OPTIONAL_COLUMNS:
        value = str(row.get(col, "")).strip()
        record[col] = value or None
    return record


def parse_ingredients_csv(csv_path: str) -> List[Dict]:
    """Parse and validate the CSV, returning plain ingredient record dicts.

    Args:
        csv_path: Path to the ingredients CSV file.

    Returns:
        List of records accepted by the `Ingredient` model.

    Raises:
        PoolDataError: On the first invalid row, naming its key and field.
    """
    logger.info("Parsing ingredients CSV: %s", csv_path)
    df = pd.read_csv(csv_path, encoding="utf-8", dtype=str, keep_default_na=False)
    df = df.rename(columns=lambda s: s.strip())
    if "key" not in df.columns:
        raise PoolDataError(f"Ingredients CSV {csv_path} has no 'key' column", field="key")

    records = []
    for _, row in df.iterrows():
        if not str(row.get("key", "")).strip():
            continue
        record = _row_to_record(row)
        ingredient = validate_ingredient(record)
        for col in NUMERIC_COLUMNS:
            record[col] = getattr(ingredient, col)
        record["safe_for_intolerances"] = sorted(ingredient.safe_for_intolerances)
        record["triggers_intolerances"] = sorted(ingredient.triggers_intolerances)
        records.append(record)

    logger.info("Parsed %s ingredients from CSV", len(records))
    return records


def seed_ingredients_from_csv(csv_path: str, session=None) -> int:
    """Idempotently add CSV ingredients to the pool.

    If `session` is not supplied, a `WriteSessionLocal` session is used.
    Ingredients whose key already exists are skipped; published macros are
    never overwritten.

    Args:
        csv_path: Path to the ingredients CSV file.
        session: Optional SQLAlchemy session. If None, creates a new one.

    Returns:
        Number of ingredients added.
    """
    close_session = False
    if session is None:
        session = WriteSessionLocal()
        close_session = True
    try:
        parsed = parse_ingredients_csv(csv_path)
        repo = IngredientRepository(session)
        existing = repo.existing_keys()
        rows = [repo.build_row(r) for r in parsed if r["key"] not in existing]
        if rows:
            repo.create_many(rows)
        logger.info("Seeded %s new ingredients into DB (%s already present)", len(rows), len(parsed) - len(rows))
        return len(rows)
    finally:
        if close_session:
            session.close()


if __name__ == "__main__":
    import argparse
    from core.config import INGREDIENTS_CSV

    p = argparse.ArgumentParser("Seed extra ingredients from CSV into the DB")
    p.add_argument("csv_path", nargs="?", default=INGREDIENTS_CSV)
    args = p.parse_args()
    added = seed_ingredients_from_csv(args.csv_path)
    print(f"Done: {added} ingredients added")
