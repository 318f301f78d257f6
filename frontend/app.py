"""
ClinIQ Vault — Streamlit Frontend.

Login gate plus 4 pages:
- Dashboard: department metrics
- Documents: search, edit and delete department records
- Upload: add files to the department repository
- Chat: consult the department assistant, with saved sessions
"""
import streamlit as st
import requests

from session import API_URL

DEPARTMENTS = ["Radiology", "Oncology", "Pathology"]
DEPT_ICONS = {"Radiology": "☢️", "Oncology": "🩺", "Pathology": "🔬"}

st.set_page_config(
    page_title="ClinIQ Vault",
    page_icon="🛡️",
    layout="wide",
    initial_sidebar_state="expanded",
)

# -----------------------------------------------------------
# Login gate
# -----------------------------------------------------------
if "user" not in st.session_state:
    st.title("🛡️ ClinIQ Vault")
    st.markdown("Authorized Department Node Access")

    with st.form("login"):
        department = st.radio(
            "Select Your Department",
            DEPARTMENTS,
            index=None,
            horizontal=True,
            format_func=lambda d: f"{DEPT_ICONS.get(d, '')} {d}",
        )
        name = st.text_input("Physician/Staff Name", placeholder="Enter your name")
        access_key = st.text_input("Department Access Key", type="password")
        submitted = st.form_submit_button("Verify Node Authorization")

    if submitted:
        try:
            resp = requests.post(
                f"{API_URL}/auth/login",
                json={"department": department, "access_key": access_key, "name": name},
                timeout=30,
            )
            if resp.status_code == 200:
                st.session_state["user"] = resp.json()
                st.session_state["access_key"] = access_key
                st.rerun()
            else:
                st.error(resp.json().get("detail", "Login failed"))
        except requests.ConnectionError:
            st.error("Cannot connect to the API. Is the backend running?")

    st.caption("🔒 Department keys are a capability gate, not a security boundary.")
    st.stop()

# -----------------------------------------------------------
# Sidebar — current identity
# -----------------------------------------------------------
user = st.session_state["user"]
st.sidebar.title("🛡️ ClinIQ Vault")
st.sidebar.markdown("Department Knowledge Assistant")
st.sidebar.markdown("---")
st.sidebar.info(
    f"Logged in as: {user['name']} ({user['role']})\n\n"
    f"Node: {DEPT_ICONS.get(user['department'], '')} {user['department']}"
)

if st.sidebar.button("🚪 Log out"):
    st.session_state.clear()
    st.rerun()

st.sidebar.markdown("---")
st.sidebar.markdown("**Powered by:**")
st.sidebar.markdown("FastAPI • LangChain • OpenAI")

# -----------------------------------------------------------
# Main page content
# -----------------------------------------------------------
st.title(f"Welcome, {user['name']}")
st.markdown(f"""
Secure, context-aware AI for the **{user['department']}** department.

**Features:**
- **Isolated storage**: you only see your department's records
- **Document repository**: search, upload and edit protocols
- **Assistant**: answers only from your department's documents
- **Saved consultations**: every chat is kept as a session

Navigate using the pages in the sidebar.
""")
