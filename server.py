#!/usr/bin/env python3
"""
Sheet Sync Service - HTTP triggers for the sync jobs

Run:
    python server.py                 # Serves on PORT (default 3000)
    uvicorn server:app --port 3000
"""

import uvicorn
from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from sheetsync import (
    SupabaseDB,
    fast_nav_update,
    fetch_and_sync_nps_navs,
    get_sheets_client,
    load_settings,
    run_mf_workflow,
    sync_mutual_funds,
    sync_stocks,
)

app = FastAPI(title="Sheet Sync Service")

INDEX_HTML = """
<h2>Google Sheet Sync Service Running</h2>
<p>Available Endpoints:</p>
<ul>
  <li><a href="/mf">/mf</a> - Sync Mutual Funds</li>
  <li><a href="/amfi">/amfi</a> - Sync AMFI NAV (?sheet=MF)</li>
  <li><a href="/mf-workflow">/mf-workflow</a> - MF -> MF1 LCP/CMP workflow</li>
  <li><a href="/stocks">/stocks</a> - Sync Stock Prices</li>
  <li><a href="/nps">/nps</a> - Sync NPS Data</li>
</ul>
"""


def get_context():
    """Settings and an authorized sheets client, built per request"""
    settings = load_settings()
    return settings, get_sheets_client(settings)


def get_db(settings) -> SupabaseDB:
    return SupabaseDB(settings)


def run_job(name: str, job) -> dict:
    """Run a job and wrap its outcome as a JSON body"""
    try:
        return {"status": "success", "result": job()}
    except Exception as e:
        print(f"[{name}] failed: {e}")
        return {"status": "error", "message": str(e)}


@app.get("/", response_class=HTMLResponse)
def index():
    return INDEX_HTML


@app.get("/mf")
def mf():
    def job():
        settings, sheets = get_context()
        return sync_mutual_funds(sheets, get_db(settings), settings)
    return run_job("mf", job)


@app.get("/amfi")
def amfi(sheet: str = None):
    def job():
        settings, sheets = get_context()
        return fast_nav_update(sheets, sheet or settings.mf_sheet)
    return run_job("amfi", job)


@app.get("/mf-workflow")
def mf_workflow(sheet: str = None):
    def job():
        settings, sheets = get_context()
        return run_mf_workflow(sheets, sheet or settings.mf_sheet, settings.mf1_sheet)
    return run_job("mf-workflow", job)


@app.get("/stocks")
def stocks():
    def job():
        settings, sheets = get_context()
        return sync_stocks(sheets, get_db(settings), settings)
    return run_job("stocks", job)


@app.get("/nps")
def nps():
    def job():
        settings, sheets = get_context()
        return fetch_and_sync_nps_navs(sheets, get_db(settings), settings)

    body = run_job("nps", job)
    if body["status"] == "success":
        body["message"] = "NPS NAVs synced successfully"
    return body


def main():
    settings = load_settings()
    print(f"Server running on http://localhost:{settings.port}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
