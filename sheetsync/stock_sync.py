"""
Stock sync - two-way reconciliation of the stock sheet and Supabase

Sheet columns: A name, B symbol, C CMP, D LCP, E sector, F industry, G category

    1. DB -> sheet: fix names, fill blank sector/industry, set missing symbols,
       append stocks the sheet doesn't have
    2. Delete sheet rows whose symbol is not in the DB
    3. Sheet -> DB: sector/industry where the DB has a placeholder, category
       when the sheet has a different one
    4. Sheet -> DB: CMP/LCP for every symbol the DB tracks
"""

from dataclasses import dataclass, field
from typing import Dict, List

from gspread.utils import rowcol_to_a1

from .normalize import cell, is_blank_or_placeholder, norm, num_or_null

SHEET_RANGE = "A1:Z10000"

NAME_COL = 0
SYMBOL_COL = 1
CMP_COL = 2
LCP_COL = 3
SECTOR_COL = 4
INDUSTRY_COL = 5
CATEGORY_COL = 6

# First data row on the sheet (row 1 is the header)
FIRST_ROW = 2


@dataclass
class SheetFixes:
    """DB -> sheet changes"""
    updates: List[Dict] = field(default_factory=list)
    additions: List[List] = field(default_factory=list)
    renamed: int = 0
    filled: int = 0
    symbols_set: int = 0


def _write(fixes: SheetFixes, row_number: int, col: int, value) -> None:
    fixes.updates.append({"range": rowcol_to_a1(row_number, col + 1), "values": [[value]]})


def plan_sheet_fixes(sheet_values: List[List], db_rows: List[Dict]) -> SheetFixes:
    """
    Map DB stocks onto the sheet

    Args:
        sheet_values: Stock sheet values, header row first
        db_rows: DB stock rows

    Returns:
        SheetFixes with cell updates and rows to append
    """
    rows = sheet_values[1:]
    name_to_row = {}
    symbol_to_row = {}
    for i, r in enumerate(rows):
        name = norm(cell(r, NAME_COL))
        symbol = norm(cell(r, SYMBOL_COL))
        if name:
            name_to_row[name] = i + FIRST_ROW
        if symbol:
            symbol_to_row[symbol] = i + FIRST_ROW

    fixes = SheetFixes()
    for r in db_rows:
        name = norm(r.get("stock_name"))
        symbol = norm(r.get("symbol"))
        if not name or not symbol:
            continue

        if symbol in symbol_to_row:
            row_number = symbol_to_row[symbol]
            sheet_row = rows[row_number - FIRST_ROW]

            if norm(cell(sheet_row, NAME_COL)) != name:
                _write(fixes, row_number, NAME_COL, r["stock_name"])
                fixes.renamed += 1
            if not cell(sheet_row, SECTOR_COL) and r.get("sector"):
                _write(fixes, row_number, SECTOR_COL, r["sector"])
                fixes.filled += 1
            if not cell(sheet_row, INDUSTRY_COL) and r.get("industry"):
                _write(fixes, row_number, INDUSTRY_COL, r["industry"])
                fixes.filled += 1

        elif name in name_to_row:
            _write(fixes, name_to_row[name], SYMBOL_COL, symbol)
            fixes.symbols_set += 1

        else:
            fixes.additions.append([r["stock_name"], r["symbol"]])

    return fixes


def rows_to_delete(sheet_values: List[List], db_symbols: set) -> List[int]:
    """Sheet row numbers whose symbol is set but not tracked in the DB"""
    doomed = []
    for i, r in enumerate(sheet_values[1:]):
        symbol = norm(cell(r, SYMBOL_COL))
        if symbol and symbol not in db_symbols:
            doomed.append(i + FIRST_ROW)
    return doomed


def plan_metadata_updates(sheet_values: List[List], db_by_symbol: Dict[str, Dict]) -> List[Dict]:
    """
    Sheet -> DB sector / industry / category

    Returns:
        [{"symbol": <db symbol>, "values": {...}}, ...]
    """
    updates = []
    for r in sheet_values[1:]:
        db_row = db_by_symbol.get(norm(cell(r, SYMBOL_COL)))
        if not db_row:
            continue

        values = {}
        sector = cell(r, SECTOR_COL)
        industry = cell(r, INDUSTRY_COL)
        category = cell(r, CATEGORY_COL) or None

        if sector and is_blank_or_placeholder(db_row.get("sector")):
            values["sector"] = sector
        if industry and is_blank_or_placeholder(db_row.get("industry")):
            values["industry"] = industry
        if category and category != db_row.get("category"):
            values["category"] = category

        if values:
            updates.append({"symbol": db_row["symbol"], "values": values})
    return updates


def plan_price_upserts(sheet_values: List[List], db_by_symbol: Dict[str, Dict]) -> List[Dict]:
    """CMP/LCP rows for every sheet symbol the DB tracks (last sheet row wins)"""
    prices = {}
    for r in sheet_values[1:]:
        key = norm(cell(r, SYMBOL_COL))
        if not key or key not in db_by_symbol:
            continue
        prices[key] = {
            "symbol": db_by_symbol[key]["symbol"],
            "cmp": num_or_null(cell(r, CMP_COL)),
            "lcp": num_or_null(cell(r, LCP_COL)),
        }
    return list(prices.values())


def sync_stocks(sheets, db, settings, dry_run: bool = False) -> Dict:
    """
    Run the two-way stock sync

    Args:
        sheets: SheetsClient
        db: SupabaseDB
        settings: Settings (stock sheet name)
        dry_run: Only compute the DB -> sheet mapping, write nothing

    Returns:
        Dict of counts per step
    """
    print("Stock Sync Started...")
    sheet_name = settings.stock_sheet

    db_rows = db.get_stocks()
    db_by_symbol = {norm(r.get("symbol")): r for r in db_rows if norm(r.get("symbol"))}
    print(f"  Database: {len(db_rows)} stocks")

    values = sheets.read(sheet_name, SHEET_RANGE)
    if not values:
        print("  Sheet is empty, nothing to do")
        return {"success": True, "empty": True}

    # Step 1: DB -> sheet
    fixes = plan_sheet_fixes(values, db_rows)
    result = {
        "renamed": fixes.renamed,
        "filled": fixes.filled,
        "symbols_set": fixes.symbols_set,
        "added": len(fixes.additions),
    }
    if dry_run:
        print(f"  --dry-run: {result}")
        return {**result, "success": True, "dry_run": True}

    sheets.batch_write(sheet_name, fixes.updates)
    sheets.append(sheet_name, fixes.additions, table_range="A:B")
    print(f"  Sheet fixes: {len(fixes.updates)} cells, {len(fixes.additions)} new stocks")

    # Step 2: drop stocks no longer tracked
    values = sheets.read(sheet_name, SHEET_RANGE)
    doomed = rows_to_delete(values, set(db_by_symbol))
    result["deleted"] = sheets.delete_rows(sheet_name, doomed)
    if doomed:
        print(f"  Deleted {len(doomed)} untracked rows")
        values = sheets.read(sheet_name, SHEET_RANGE)

    # Step 3: sheet metadata -> DB
    meta_updates = plan_metadata_updates(values, db_by_symbol)
    for u in meta_updates:
        db.update_stock(u["symbol"], u["values"])
    result["metadata"] = len(meta_updates)
    print(f"  Metadata pushed for {len(meta_updates)} stocks")

    # Step 4: prices -> DB
    prices = plan_price_upserts(values, db_by_symbol)
    if prices:
        db.upsert_stocks(prices)
    result["prices"] = len(prices)
    print(f"  CMP/LCP upserted for {len(prices)} stocks")

    print("Stock Sync Completed.")
    return {**result, "success": True}
