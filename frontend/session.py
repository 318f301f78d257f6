"""Shared login state and API helpers for the Streamlit pages."""
import streamlit as st
import requests

from cliniq.config import settings

API_URL = settings.api_url


def require_user() -> dict:
    """Stop the page unless someone is logged in."""
    user = st.session_state.get("user")
    if not user:
        st.warning("Please log in on the home page first.")
        st.stop()
    return user


def auth_headers() -> dict:
    user = st.session_state["user"]
    return {
        "X-Department": user["department"],
        "X-Access-Key": st.session_state.get("access_key", ""),
        "X-User-Name": user["name"],
    }


def fetch_list(path: str, headers: dict) -> list:
    """GET a JSON list from the API. An error status shows a message and yields []."""
    resp = requests.get(f"{API_URL}{path}", headers=headers, timeout=30)
    if resp.status_code != 200:
        st.error(f"Could not load {path}: {resp.text}")
        return []
    return resp.json()
