#!/usr/bin/env python3
"""HTTP trigger tests for server.py (FastAPI TestClient, jobs patched out)"""

from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

import server
from sheetsync.config import Settings

client = TestClient(server.app)

SETTINGS = Settings(mf_sheet="MF", mf1_sheet="MF1")


def fake_context():
    return SETTINGS, MagicMock(name="sheets")


def test_index_lists_endpoints():
    resp = client.get("/")
    assert resp.status_code == 200
    for path in ["/mf", "/amfi", "/mf-workflow", "/stocks", "/nps"]:
        assert f'href="{path}"' in resp.text


def test_mf_success():
    job = MagicMock(return_value={"added": 0, "lcp": 3, "cmp": 1, "success": True})
    with patch.object(server, "get_context", fake_context), \
            patch.object(server, "get_db", MagicMock()), \
            patch.object(server, "sync_mutual_funds", job):
        resp = client.get("/mf")

    assert resp.json() == {"status": "success", "result": {"added": 0, "lcp": 3, "cmp": 1, "success": True}}


def test_amfi_uses_sheet_query():
    job = MagicMock(return_value={"updated": 5, "not_found": 0, "message": "ok"})
    with patch.object(server, "get_context", fake_context), \
            patch.object(server, "fast_nav_update", job):
        resp = client.get("/amfi", params={"sheet": "MF2"})
        default = client.get("/amfi")

    assert resp.json()["status"] == "success"
    assert job.call_args_list[0].args[1] == "MF2"
    assert job.call_args_list[1].args[1] == "MF"
    assert default.json()["result"]["updated"] == 5


def test_mf_workflow_targets_mf1():
    job = MagicMock(return_value={"success": True, "message": "done"})
    with patch.object(server, "get_context", fake_context), \
            patch.object(server, "run_mf_workflow", job):
        resp = client.get("/mf-workflow")

    assert resp.json()["status"] == "success"
    assert job.call_args.args[1:] == ("MF", "MF1")


def test_nps_success_message():
    job = MagicMock(return_value={"fetched": 2, "failed": 0, "skipped": 0, "upserted": 2})
    with patch.object(server, "get_context", fake_context), \
            patch.object(server, "get_db", MagicMock()), \
            patch.object(server, "fetch_and_sync_nps_navs", job):
        resp = client.get("/nps")

    body = resp.json()
    assert body["status"] == "success"
    assert body["message"] == "NPS NAVs synced successfully"


def test_job_error_becomes_error_body():
    job = MagicMock(side_effect=RuntimeError("relation \"stocks\" does not exist"))
    with patch.object(server, "get_context", fake_context), \
            patch.object(server, "get_db", MagicMock()), \
            patch.object(server, "sync_stocks", job):
        resp = client.get("/stocks")

    assert resp.status_code == 200
    assert resp.json() == {"status": "error", "message": "relation \"stocks\" does not exist"}


def test_missing_credentials_reported():
    def no_credentials():
        raise ValueError("Google credentials not found.")

    with patch.object(server, "get_context", no_credentials):
        resp = client.get("/mf")

    assert resp.json() == {"status": "error", "message": "Google credentials not found."}


if __name__ == "__main__":
    import pytest
    raise SystemExit(pytest.main([__file__, "-v"]))
