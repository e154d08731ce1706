"""
NPS NAV Client - latest NAV per NPS scheme from npsnav.in
"""

import requests

from .normalize import num_or_null

BASE_URL = "https://www.npsnav.in/api/detailed/"


class NPSNavClient:
    """Client for the npsnav.in detailed NAV endpoint"""

    def __init__(self, base_url: str = BASE_URL, verify_ssl: bool = True, timeout: int = 15):
        self.base_url = base_url
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
            "Accept": "application/json",
        })
        self.session.verify = verify_ssl

    def get_detail(self, scheme_code: str) -> dict:
        """Raw JSON for one scheme"""
        resp = self.session.get(f"{self.base_url}{scheme_code}", timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def get_latest_nav(self, scheme_code: str) -> float:
        """
        Latest NAV for a scheme

        Raises:
            ValueError: If the response carries no numeric NAV
        """
        data = self.get_detail(scheme_code)
        nav = num_or_null(data.get("NAV")) if isinstance(data, dict) else None
        if nav is None:
            raise ValueError("Invalid NAV response")
        return nav
