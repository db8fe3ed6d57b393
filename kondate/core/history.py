"""Cooking history — which dishes were cooked when, and how they were rated.

History is an append-only log keyed by (dish_name, cooked_date): cooking the
same dish on another day adds a row, rating a dish on a day it was already
recorded updates that row.  Consumers that need one signal per dish take the
latest record by date (see core/reselection.py).
"""

from typing import Optional

from kondate.db.database import connect
from kondate.db.models import CookingHistoryRecord
from kondate.errors import ValidationError

RANKS = ("A", "B", "C", "D")

_COLUMNS = """id, dish_name, cooked_date, taste_rating, time_rating, repeat_desire,
              overall_score, rank, notes"""


def overall_score(taste: int, time: int, repeat: int) -> float:
    """Weighted rating: taste counts 40%, cooking time and repeat desire 30% each."""
    return round(taste * 0.4 + time * 0.3 + repeat * 0.3, 2)


def rank_for(score: float) -> str:
    if score >= 4.5:
        return "A"
    if score >= 3.5:
        return "B"
    if score >= 2.5:
        return "C"
    return "D"


def _row_to_record(row) -> CookingHistoryRecord:
    record = CookingHistoryRecord(**dict(row))
    record.notes = record.notes or ""
    return record


def _check_rating(label: str, value: int) -> None:
    if not isinstance(value, int) or not 1 <= value <= 5:
        raise ValidationError(f"{label} must be between 1 and 5")


def record_cooked(household_id: str, dish_name: str, cooked_date: str) -> bool:
    """Log that a dish was cooked on a date.

    Returns False if that dish was already recorded for that date, in which
    case nothing changes.
    """
    if not dish_name or not dish_name.strip():
        raise ValidationError("Dish name is required")
    with connect() as conn:
        cursor = conn.execute(
            """INSERT OR IGNORE INTO cooking_history (household_id, dish_name, cooked_date)
               VALUES (?, ?, ?)""",
            (household_id, dish_name, cooked_date),
        )
        conn.commit()
        return cursor.rowcount > 0


def rate(household_id: str, dish_name: str, cooked_date: str, taste: int, time: int,
         repeat: int, notes: str = "") -> CookingHistoryRecord:
    """Store ratings for the dish cooked on cooked_date (insert or update).

    overall_score and rank are derived here, never taken from the caller.
    """
    if not dish_name or not dish_name.strip():
        raise ValidationError("Dish name is required")
    _check_rating("Taste rating", taste)
    _check_rating("Cooking time rating", time)
    _check_rating("Repeat desire", repeat)
    score = overall_score(taste, time, repeat)
    record = CookingHistoryRecord(
        dish_name=dish_name,
        cooked_date=cooked_date,
        taste_rating=taste,
        time_rating=time,
        repeat_desire=repeat,
        overall_score=score,
        rank=rank_for(score),
        notes=(notes or "").strip(),
    )
    with connect() as conn:
        conn.execute(
            """INSERT INTO cooking_history
               (household_id, dish_name, cooked_date, taste_rating, time_rating,
                repeat_desire, overall_score, rank, notes)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
               ON CONFLICT(household_id, dish_name, cooked_date) DO UPDATE SET
                 taste_rating=excluded.taste_rating, time_rating=excluded.time_rating,
                 repeat_desire=excluded.repeat_desire, overall_score=excluded.overall_score,
                 rank=excluded.rank, notes=excluded.notes""",
            (household_id, record.dish_name, record.cooked_date, record.taste_rating,
             record.time_rating, record.repeat_desire, record.overall_score,
             record.rank, record.notes),
        )
        conn.commit()
    return record


def get_all(household_id: str) -> list[CookingHistoryRecord]:
    """Return every record, newest cooked date first."""
    with connect() as conn:
        rows = conn.execute(
            f"SELECT {_COLUMNS} FROM cooking_history WHERE household_id = ? ORDER BY cooked_date DESC, id DESC",
            (household_id,),
        ).fetchall()
        return [_row_to_record(row) for row in rows]


def get_in_range(household_id: str, start: str, end: str) -> list[CookingHistoryRecord]:
    """Records with start <= cooked_date <= end (ISO dates, inclusive)."""
    with connect() as conn:
        rows = conn.execute(
            f"""SELECT {_COLUMNS} FROM cooking_history
                WHERE household_id = ? AND cooked_date >= ? AND cooked_date <= ?
                ORDER BY cooked_date""",
            (household_id, start, end),
        ).fetchall()
        return [_row_to_record(row) for row in rows]


def get_record(household_id: str, dish_name: str, cooked_date: str) -> Optional[CookingHistoryRecord]:
    with connect() as conn:
        row = conn.execute(
            f"""SELECT {_COLUMNS} FROM cooking_history
                WHERE household_id = ? AND dish_name = ? AND cooked_date = ?""",
            (household_id, dish_name, cooked_date),
        ).fetchone()
        return _row_to_record(row) if row else None


def latest_by_dish(records: list[CookingHistoryRecord]) -> dict[str, CookingHistoryRecord]:
    """Collapse a history list to the most recent record per dish."""
    latest: dict[str, CookingHistoryRecord] = {}
    for record in records:
        current = latest.get(record.dish_name)
        if current is None or record.cooked_date > current.cooked_date:
            latest[record.dish_name] = record
    return latest


def dishes_by_rank(household_id: str, rank: str) -> list[CookingHistoryRecord]:
    """One record per dish (its newest with this rank) for dishes rated rank."""
    if rank not in RANKS:
        raise ValidationError(f"Rank must be one of {', '.join(RANKS)}")
    ranked = [r for r in get_all(household_id) if r.rank == rank]
    return list(latest_by_dish(ranked).values())
