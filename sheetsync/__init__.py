"""
Common modules for Sheet Sync
Google Sheets <-> Supabase reconciliation of MF, stock and NPS prices
"""

from .config import Settings, load_settings
from .db import get_supabase_client, SupabaseDB
from .sheets import get_sheets_client, SheetsClient
from .amfi import AMFIClient, parse_nav_file
from .npsnav import NPSNavClient
from .amfi_sync import fast_nav_update
from .mf_workflow import run_mf_workflow
from .mf_sync import plan_mf_sync, sync_mutual_funds
from .stock_sync import sync_stocks
from .nps_sync import fetch_and_sync_nps_navs

__all__ = [
    'Settings',
    'load_settings',
    'get_supabase_client',
    'SupabaseDB',
    'get_sheets_client',
    'SheetsClient',
    'AMFIClient',
    'parse_nav_file',
    'NPSNavClient',
    'fast_nav_update',
    'run_mf_workflow',
    'plan_mf_sync',
    'sync_mutual_funds',
    'sync_stocks',
    'fetch_and_sync_nps_navs',
]
