"""
Settings - sheet IDs, sheet names, table names and credentials
Loaded from environment variables (and .env if present)
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass
class Settings:
    """Configuration shared by every sync job"""

    sheet_id: Optional[str] = None
    stock_sheet: str = "Stocks"
    mf_sheet: str = "MF"
    mf1_sheet: str = "MF1"
    nps_sheet: str = "nps"

    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    mf_table: str = "mutual_funds"
    stock_table: str = "stocks"
    nps_table: str = "nps_navs"

    gs_json_base64: Optional[str] = None
    gs_client_email: Optional[str] = None
    gs_private_key: Optional[str] = None
    gs_private_key_file: Optional[str] = None

    port: int = 3000

    def require_sheet_id(self) -> str:
        if not self.sheet_id:
            raise ValueError("GOOGLE_SHEET_ID is not set.")
        return self.sheet_id


def load_settings(env_file: str = None) -> Settings:
    """
    Build Settings from the environment

    Args:
        env_file: Optional .env path (defaults to .env lookup from cwd)

    Returns:
        Settings instance
    """
    load_dotenv(env_file)

    return Settings(
        sheet_id=os.getenv("GOOGLE_SHEET_ID"),
        stock_sheet=os.getenv("GOOGLE_SHEET_NAME", "Stocks"),
        mf_sheet=os.getenv("GOOGLE_SHEET_NAME_MF", "MF"),
        mf1_sheet=os.getenv("GOOGLE_SHEET_NAME_MF1", "MF1"),
        nps_sheet=os.getenv("GOOGLE_SHEET_NAME_NPS", "nps"),
        supabase_url=os.getenv("SUPABASE_URL"),
        supabase_key=(
            os.getenv("SUPABASE_API_KEY")
            or os.getenv("SUPABASE_SERVICE_KEY")
            or os.getenv("SUPABASE_ANON_KEY")
        ),
        mf_table=os.getenv("SUPABASE_TABLE_MF", "mutual_funds"),
        stock_table=os.getenv("SUPABASE_TABLE_NAME", "stocks"),
        nps_table=os.getenv("SUPABASE_TABLE_NPS", "nps_navs"),
        gs_json_base64=os.getenv("GS_JSON_BASE64"),
        gs_client_email=os.getenv("GS_CLIENT_EMAIL"),
        gs_private_key=os.getenv("GS_PRIVATE_KEY"),
        gs_private_key_file=os.getenv("GS_PRIVATE_KEY_FILE"),
        port=int(os.getenv("PORT", "3000")),
    )
