"""Core (UI-agnostic) zone dashboard logic.

This package contains:
- configuration and credential tables
- Google Sheets access (gspread -> pandas)
- cell cleaning and zone filters
- per-view compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict) and the xlsx export
"""
