"""
Normalization helpers shared by the sync jobs
Identifier cleanup, numeric parsing of sheet cells, date handling in IST
"""

import math
from datetime import date, datetime, timedelta, timezone
from typing import Any, List, Optional

IST = timezone(timedelta(hours=5, minutes=30))

PLACEHOLDERS = {"", "N/A", "UNKNOWN"}

# Day-first formats seen in the sheets and in the AMFI file
DATE_FORMATS = ["%d-%m-%Y", "%d/%m/%Y", "%d-%b-%Y", "%d %b %Y"]


def norm(value: Any) -> str:
    """Trim and uppercase an identifier (None -> '')"""
    if value is None:
        return ""
    return str(value).strip().upper()


def num_or_null(value: Any) -> Optional[float]:
    """
    Parse a sheet cell as a number

    '1,234.50' -> 1234.5. Empty, zero, whitespace-only or unparsable -> None.
    """
    if not value:
        return None
    text = str(value).replace(",", "").strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return None if math.isnan(number) else number


def is_blank_or_placeholder(value: Any) -> bool:
    """True for empty cells and 'N/A' / 'Unknown' fillers"""
    if value is None:
        return True
    return str(value).strip().upper() in PLACEHOLDERS


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a date cell

    Accepts ISO (yyyy-mm-dd, optionally with time), dd-mm-yyyy, dd/mm/yyyy
    and AMFI's dd-Mon-yyyy. Returns None when nothing matches.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def format_date(value: Any) -> str:
    """ISO yyyy-mm-dd, or '' for anything that is not a date"""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return ""


def ist_today() -> date:
    """Today's date in IST (UTC+5:30)"""
    return datetime.now(IST).date()


def cell(row: List[Any], index: Optional[int], default: Any = "") -> Any:
    """Read a cell from a ragged sheet row"""
    if index is None or index < 0 or index >= len(row):
        return default
    return row[index]


def pad_row(row: List[Any], width: int) -> List[Any]:
    """Extend a ragged row with blanks up to width"""
    if len(row) < width:
        row.extend([""] * (width - len(row)))
    return row
