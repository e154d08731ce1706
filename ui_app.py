#!/usr/bin/env python3
"""
Sheet Sync Dashboard - Streamlit UI
Run the sync jobs and preview the MF sheet <-> Supabase diff before applying it
"""

import streamlit as st
import pandas as pd

from sheetsync import (
    SupabaseDB,
    fast_nav_update,
    fetch_and_sync_nps_navs,
    get_sheets_client,
    load_settings,
    plan_mf_sync,
    run_mf_workflow,
    sync_mutual_funds,
    sync_stocks,
)
from sheetsync.mf_sync import SHEET_RANGE as MF_RANGE
from sheetsync.normalize import ist_today

# Page config
st.set_page_config(
    page_title="Sheet Sync",
    page_icon="🔄",
    layout="wide"
)


@st.cache_resource
def get_clients():
    """Settings, sheets client and DB, shared across reruns"""
    settings = load_settings()
    return settings, get_sheets_client(settings), SupabaseDB(settings)


@st.cache_data(ttl=300)
def load_mf_plan():
    """MF sync plan as DataFrames (no writes)"""
    settings, sheets, db = get_clients()
    plan = plan_mf_sync(sheets.read(settings.mf_sheet, MF_RANGE), db.get_mutual_funds())

    headers = sheets.read(settings.mf_sheet, "A1:Z1")
    columns = headers[0] if headers else None

    return {
        "summary": plan.summary(),
        "cmp": pd.DataFrame(plan.cmp_updates, columns=["isin", "cmp"]),
        "lcp": pd.DataFrame(plan.lcp_updates, columns=["isin", "lcp"]),
        "missing": pd.DataFrame(plan.missing_rows, columns=columns) if plan.missing_rows else pd.DataFrame(),
    }


JOBS = {
    "MF sheet <-> Supabase": lambda s, sh, db: sync_mutual_funds(sh, db, s),
    "AMFI NAV update": lambda s, sh, db: fast_nav_update(sh, s.mf_sheet),
    "MF -> MF1 workflow": lambda s, sh, db: run_mf_workflow(sh, s.mf_sheet, s.mf1_sheet),
    "Stocks": lambda s, sh, db: sync_stocks(sh, db, s),
    "NPS NAVs": lambda s, sh, db: fetch_and_sync_nps_navs(sh, db, s),
}


def render_sidebar(settings):
    st.sidebar.header("Targets")
    st.sidebar.text(f"MF sheet:    {settings.mf_sheet} / {settings.mf1_sheet}")
    st.sidebar.text(f"Stock sheet: {settings.stock_sheet}")
    st.sidebar.text(f"NPS sheet:   {settings.nps_sheet}")
    st.sidebar.markdown("---")
    st.sidebar.text(f"MF table:    {settings.mf_table}")
    st.sidebar.text(f"Stock table: {settings.stock_table}")
    st.sidebar.text(f"NPS table:   {settings.nps_table}")
    st.sidebar.caption(f"IST date: {ist_today().isoformat()}")


def render_jobs():
    settings, sheets, db = get_clients()
    for name, job in JOBS.items():
        col1, col2 = st.columns([1, 4])
        with col1:
            clicked = st.button(name, key=f"run_{name}", width="stretch")
        if clicked:
            with col2:
                with st.spinner(f"Running {name}..."):
                    try:
                        result = job(settings, sheets, db)
                        st.success("Done")
                        st.json(result)
                        st.cache_data.clear()
                    except Exception as e:
                        st.error(f"{name} failed: {e}")


def render_preview():
    try:
        with st.spinner("Loading..."):
            preview = load_mf_plan()
    except Exception as e:
        st.error(f"Could not build MF preview: {e}")
        return

    summary = preview["summary"]
    col1, col2, col3 = st.columns(3)
    col1.metric("CMP updates", summary["cmp"])
    col2.metric("LCP rolls", summary["lcp"])
    col3.metric("Funds to append", summary["added"])

    st.subheader("CMP <- sheet NAV")
    st.dataframe(preview["cmp"], width="stretch")

    st.subheader("Missing from sheet")
    if preview["missing"].empty:
        st.info("Every database fund is on the sheet.")
    else:
        st.dataframe(preview["missing"], width="stretch")

    with st.expander("LCP <- CMP (all funds)"):
        st.dataframe(preview["lcp"], width="stretch")


def main():
    st.title("🔄 Sheet Sync")

    try:
        settings, _, _ = get_clients()
    except Exception as e:
        st.error(f"Configuration error: {e}")
        st.stop()

    render_sidebar(settings)

    tab1, tab2 = st.tabs(["▶️ Run Jobs", "🔍 MF Preview"])
    with tab1:
        render_jobs()
    with tab2:
        render_preview()


main()
