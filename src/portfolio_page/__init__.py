"""
Building blocks of the portfolio page.

The Streamlit entry point lives in `src/app/app.py`; everything here can be
used without a running Streamlit server.
"""

__all__ = [
    "config",
    "client",
    "comments",
    "greeting",
    "travel_map",
    "happiness",
]
