"""Dashboard page — department metrics and recent activity."""
import pandas as pd
import streamlit as st
import requests

from session import API_URL, auth_headers, require_user

user = require_user()
HEADERS = auth_headers()

st.title("📊 Dashboard")
st.caption(f"Isolated Storage: {user['department']}")

try:
    stats = requests.get(f"{API_URL}/stats", headers=HEADERS, timeout=30).json()

    # -----------------------------------------------------------
    # Key metrics row
    # -----------------------------------------------------------
    cols = st.columns(len(stats["stats"]))
    for col, card in zip(cols, stats["stats"]):
        col.metric(card["label"], card["value"], card["trend"])
        col.caption(card["description"])

    # -----------------------------------------------------------
    # Charts
    # -----------------------------------------------------------
    left, right = st.columns(2)
    with left:
        st.subheader("Query Volume")
        st.bar_chart(pd.Series(stats["query_volume"], name="queries"))
    with right:
        st.subheader("Storage by Department")
        st.bar_chart(pd.Series(stats["storage_distribution"], name="GB"))

    # -----------------------------------------------------------
    # Recent activity feed
    # -----------------------------------------------------------
    st.subheader("Recent Activity")
    icons = {
        "access": "🔑", "sync": "🔄", "upload": "📤",
        "security": "🛡️", "query": "🤖",
    }
    for entry in stats["recent_activity"]:
        st.markdown(
            f"{icons.get(entry['type'], '•')} {entry['msg']} — *{entry['time']}*"
        )

except requests.ConnectionError:
    st.warning("Cannot connect to the API.")
