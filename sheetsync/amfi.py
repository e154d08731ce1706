"""
AMFI Client - Fetches the daily NAV file from amfiindia.com
Parses NAVAll.txt into a scheme code -> (NAV, date) lookup
"""

import re
from dataclasses import dataclass
from typing import Dict

import requests

NAV_ALL_URL = "https://www.amfiindia.com/spages/NAVAll.txt"

# Scheme lines look like:
# Scheme Code;ISIN Div Payout/ ISIN Growth;ISIN Div Reinvestment;Scheme Name;Net Asset Value;Date
MIN_FIELDS = 6


@dataclass
class NavQuote:
    """Latest NAV for one scheme as published by AMFI"""
    scheme_code: str
    nav: str
    date: str


def parse_nav_file(text: str) -> Dict[str, NavQuote]:
    """
    Parse NAVAll.txt contents

    Only lines with at least 6 ';'-separated fields are schemes; headers,
    fund house names and blank lines fall out. NAV is the second-to-last
    field, date the last.

    Args:
        text: Raw file contents

    Returns:
        Dict of scheme code -> NavQuote (later lines win on duplicates)
    """
    quotes = {}
    for line in re.split(r"\r?\n", text):
        parts = line.split(";")
        if len(parts) < MIN_FIELDS:
            continue
        code = parts[0].strip()
        quotes[code] = NavQuote(
            scheme_code=code,
            nav=parts[-2].strip(),
            date=parts[-1].strip(),
        )
    return quotes


class AMFIClient:
    """
    Client for the AMFI NAV file
    Reusable across all scripts
    """

    def __init__(self, url: str = NAV_ALL_URL, verify_ssl: bool = True, timeout: int = 60):
        """
        Initialize AMFI client

        Args:
            url: NAV file URL
            verify_ssl: Whether to verify SSL certificates
            timeout: Request timeout in seconds
        """
        self.url = url
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
            "Accept-Encoding": "gzip, deflate",
        })
        self.session.verify = verify_ssl

    def fetch_text(self) -> str:
        """Download NAVAll.txt"""
        resp = self.session.get(self.url, timeout=self.timeout)
        resp.raise_for_status()
        return resp.text

    def get_nav_map(self) -> Dict[str, NavQuote]:
        """Download and parse the NAV file"""
        quotes = parse_nav_file(self.fetch_text())
        print(f"  AMFI: {len(quotes)} schemes in NAV file")
        return quotes
