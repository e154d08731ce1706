"""
Database operations - Supabase client and table reads/writes
Single source of truth for all database interactions
"""

import os
from typing import Any, Dict, List

from supabase import Client, create_client

from .config import Settings

PAGE_SIZE = 1000


def get_supabase_client(url: str = None, key: str = None) -> Client:
    """
    Get Supabase client - single factory function for all modules

    Args:
        url: Supabase URL (defaults to SUPABASE_URL env var)
        key: Supabase key (defaults to SUPABASE_API_KEY / SUPABASE_SERVICE_KEY env var)

    Returns:
        Supabase client instance

    Raises:
        ValueError: If credentials not provided
    """
    url = url or os.getenv("SUPABASE_URL")
    key = (
        key
        or os.getenv("SUPABASE_API_KEY")
        or os.getenv("SUPABASE_SERVICE_KEY")
        or os.getenv("SUPABASE_ANON_KEY")
    )

    if not url or not key:
        raise ValueError(
            "Supabase credentials not found. "
            "Set SUPABASE_URL and SUPABASE_API_KEY environment variables."
        )

    return create_client(url, key)


class SupabaseDB:
    """
    Database operations wrapper - reusable across all sync jobs
    Encapsulates all Supabase interactions
    """

    def __init__(self, settings: Settings = None, client: Client = None):
        """Initialize with existing client or create new one"""
        self.settings = settings or Settings()
        self.client = client or get_supabase_client(
            self.settings.supabase_url, self.settings.supabase_key
        )

    # ==================== GENERIC ====================

    def select_all(self, table: str, columns: str = "*") -> List[Dict]:
        """Select every row of a table (paged to get past the 1000 row cap)"""
        rows = []
        offset = 0
        while True:
            result = (
                self.client.table(table)
                .select(columns)
                .range(offset, offset + PAGE_SIZE - 1)
                .execute()
            )
            if not result.data:
                break
            rows.extend(result.data)
            offset += PAGE_SIZE
            if len(result.data) < PAGE_SIZE:
                break
        return rows

    def update_where(self, table: str, values: Dict[str, Any], column: str, value: Any) -> List[Dict]:
        """Update rows where column = value"""
        result = self.client.table(table).update(values).eq(column, value).execute()
        return result.data or []

    def upsert_rows(
        self,
        table: str,
        rows: List[Dict],
        on_conflict: str,
        chunk_size: int = 500
    ) -> int:
        """
        Upsert rows in chunks

        Args:
            table: Table name
            rows: Row dicts (same keys in every row)
            on_conflict: Unique column(s) to merge on
            chunk_size: Rows per request

        Returns:
            Number of rows sent
        """
        saved = 0
        for i in range(0, len(rows), chunk_size):
            chunk = rows[i:i + chunk_size]
            self.client.table(table).upsert(chunk, on_conflict=on_conflict).execute()
            saved += len(chunk)
        return saved

    # ==================== MUTUAL FUNDS ====================

    def get_mutual_funds(self) -> List[Dict]:
        """Get all tracked mutual funds"""
        return self.select_all(self.settings.mf_table, "isin,scheme_code,fund_full_name,cmp,lcp")

    def update_mutual_fund(self, isin: str, values: Dict[str, Any]) -> List[Dict]:
        """Update a mutual fund by ISIN"""
        return self.update_where(self.settings.mf_table, values, "isin", isin)

    # ==================== STOCKS ====================

    def get_stocks(self) -> List[Dict]:
        """Get all tracked stocks"""
        return self.select_all(
            self.settings.stock_table,
            "stock_name,symbol,cmp,lcp,sector,industry,category"
        )

    def update_stock(self, symbol: str, values: Dict[str, Any]) -> List[Dict]:
        """Update a stock by symbol"""
        return self.update_where(self.settings.stock_table, values, "symbol", symbol)

    def upsert_stocks(self, rows: List[Dict]) -> int:
        """Upsert stock rows keyed by symbol"""
        return self.upsert_rows(self.settings.stock_table, rows, on_conflict="symbol")

    # ==================== NPS ====================

    def upsert_nps_navs(self, rows: List[Dict]) -> int:
        """Upsert NPS scheme NAVs keyed by scheme code"""
        return self.upsert_rows(self.settings.nps_table, rows, on_conflict="scheme_code")
