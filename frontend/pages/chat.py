"""Chat page — consult the department assistant, with saved sessions."""
import streamlit as st
import requests

from session import API_URL, auth_headers, fetch_list, require_user

user = require_user()
HEADERS = auth_headers()

st.title(f"💬 {user['department']} Assistant")

# -----------------------------------------------------------
# Session state for the active transcript
# -----------------------------------------------------------
if "messages" not in st.session_state:
    st.session_state.messages = []
if "session_id" not in st.session_state:
    st.session_state.session_id = None


def start_new_chat():
    st.session_state.messages = []
    st.session_state.session_id = None


# -----------------------------------------------------------
# Sidebar — saved sessions for this department
# -----------------------------------------------------------
st.sidebar.markdown("### 🕘 Chat History")
if st.sidebar.button("➕ New Chat"):
    start_new_chat()
    st.rerun()

try:
    sessions = fetch_list("/sessions", HEADERS)
except requests.ConnectionError:
    sessions = []
    st.sidebar.warning("Cannot connect to the API.")

if not sessions:
    st.sidebar.caption("No saved consultations yet.")

for session in sessions:
    col_a, col_b = st.sidebar.columns([4, 1])
    active = session["id"] == st.session_state.session_id
    with col_a:
        if st.button(
            ("▶ " if active else "") + session["title"],
            key=f"load_{session['id']}",
        ):
            st.session_state.session_id = session["id"]
            st.session_state.messages = session["messages"]
            st.rerun()
    with col_b:
        if st.button("🗑️", key=f"del_{session['id']}", help="Delete this session"):
            requests.delete(f"{API_URL}/sessions/{session['id']}", headers=HEADERS, timeout=30)
            if active:
                start_new_chat()
            st.rerun()

st.caption("Ongoing Consultation" if st.session_state.session_id else "New Chat Session")

# -----------------------------------------------------------
# Transcript (or suggestions for an empty chat)
# -----------------------------------------------------------
suggestion = None
if not st.session_state.messages:
    st.markdown(
        f"Secure, context-aware AI for {user['department']}. "
        "Answers come only from your department's records."
    )
    try:
        suggestions = fetch_list("/chat/suggestions", HEADERS)
    except requests.ConnectionError:
        suggestions = []
    for i, text in enumerate(suggestions):
        if st.button(text, key=f"suggestion_{i}"):
            suggestion = text

for message in st.session_state.messages:
    with st.chat_message(message["role"]):
        st.markdown(message["text"])
        st.caption(message["timestamp"])

# -----------------------------------------------------------
# Composer
# -----------------------------------------------------------
prompt = st.chat_input(f"Ask about {user['department']} records...") or suggestion
if prompt:
    with st.chat_message("user"):
        st.markdown(prompt)

    with st.chat_message("assistant"):
        with st.spinner("Consulting authorized records..."):
            try:
                response = requests.post(
                    f"{API_URL}/chat",
                    json={"message": prompt, "session_id": st.session_state.session_id},
                    headers=HEADERS,
                    timeout=120,
                )
                if response.status_code == 200:
                    data = response.json()
                    st.markdown(data["answer"])
                    st.session_state.session_id = data["session_id"]
                    st.session_state.messages = data["messages"]
                    st.rerun()
                elif response.status_code == 404:
                    st.error("This session no longer exists. Start a new chat.")
                    start_new_chat()
                else:
                    st.error(f"Error: {response.text}")

            except requests.ConnectionError:
                st.error("Cannot connect to the API. Is the backend running?")
            except requests.Timeout:
                st.error("Request timed out. Please try again.")
