"""
Google Sheets operations - service account auth and worksheet reads/writes
Single place where the sync jobs touch gspread
"""

import base64
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

import gspread
from google.oauth2.service_account import Credentials

from .config import Settings

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"

# Values are written exactly as given, no formula/number parsing
VALUE_INPUT = "RAW"


def load_service_account_info(settings: Settings) -> Dict[str, Any]:
    """
    Resolve service account credentials from settings

    Tried in order: GS_JSON_BASE64, GS_CLIENT_EMAIL + GS_PRIVATE_KEY,
    GS_CLIENT_EMAIL + GS_PRIVATE_KEY_FILE.

    Raises:
        ValueError: If no credentials are configured
    """
    if settings.gs_json_base64:
        decoded = base64.b64decode(settings.gs_json_base64).decode("utf-8")
        return json.loads(decoded)

    private_key = None
    if settings.gs_private_key:
        # Keys pasted into env files carry literal \n sequences
        private_key = settings.gs_private_key.replace("\\n", "\n")
    elif settings.gs_private_key_file:
        private_key = Path(settings.gs_private_key_file).read_text(encoding="utf-8")

    if not settings.gs_client_email or not private_key:
        raise ValueError(
            "Google credentials not found. "
            "Set GS_JSON_BASE64, or GS_CLIENT_EMAIL with GS_PRIVATE_KEY / GS_PRIVATE_KEY_FILE."
        )

    return {
        "type": "service_account",
        "client_email": settings.gs_client_email,
        "private_key": private_key,
        "token_uri": TOKEN_URI,
    }


def get_sheets_client(settings: Settings) -> "SheetsClient":
    """Authorize a service account and open the configured spreadsheet"""
    info = load_service_account_info(settings)
    credentials = Credentials.from_service_account_info(info, scopes=SCOPES)
    client = gspread.authorize(credentials)
    return SheetsClient(client.open_by_key(settings.require_sheet_id()))


class SheetsClient:
    """
    Worksheet read/write wrapper around one spreadsheet
    Ranges are plain A1 notation relative to the named worksheet
    """

    def __init__(self, spreadsheet: gspread.Spreadsheet):
        self.spreadsheet = spreadsheet
        self._worksheets: Dict[str, gspread.Worksheet] = {}

    def worksheet(self, name: str) -> gspread.Worksheet:
        """Get a worksheet by title (raises WorksheetNotFound)"""
        if name not in self._worksheets:
            self._worksheets[name] = self.spreadsheet.worksheet(name)
        return self._worksheets[name]

    def list_sheets(self) -> List[str]:
        """Titles of all worksheets"""
        return [ws.title for ws in self.spreadsheet.worksheets()]

    def has_sheet(self, name: str) -> bool:
        return name in self.list_sheets()

    # ==================== READ ====================

    def read(self, name: str, a1_range: str = None) -> List[List[Any]]:
        """
        Read cell values

        Args:
            name: Worksheet title
            a1_range: Range like 'A1:Z10000' (whole sheet if omitted)

        Returns:
            List of rows (rows may be ragged)
        """
        ws = self.worksheet(name)
        if a1_range:
            return [list(row) for row in ws.get(a1_range)]
        return ws.get_all_values()

    # ==================== WRITE ====================

    def write(self, name: str, a1: str, values: List[List[Any]]) -> None:
        """Write a block of values starting at a1"""
        self.worksheet(name).update(
            range_name=a1, values=values, value_input_option=VALUE_INPUT
        )

    def batch_write(self, name: str, updates: List[Dict[str, Any]]) -> int:
        """
        Write many ranges in one request

        Args:
            name: Worksheet title
            updates: [{"range": "C5", "values": [["..."]]}, ...]

        Returns:
            Number of ranges written
        """
        if not updates:
            return 0
        self.worksheet(name).batch_update(updates, value_input_option=VALUE_INPUT)
        return len(updates)

    def append(self, name: str, rows: List[List[Any]], table_range: str = None) -> int:
        """Append rows after the last filled row"""
        if not rows:
            return 0
        self.worksheet(name).append_rows(
            rows, value_input_option=VALUE_INPUT, table_range=table_range
        )
        return len(rows)

    def delete_rows(self, name: str, row_numbers: Iterable[int]) -> int:
        """Delete 1-based sheet rows, bottom-up so the rest keep their numbers"""
        ws = self.worksheet(name)
        deleted = 0
        for row_number in sorted(set(row_numbers), reverse=True):
            ws.delete_rows(row_number)
            deleted += 1
        return deleted
