"""Upload page — add files to the department repository."""
import streamlit as st
import requests

from session import API_URL, auth_headers, require_user

user = require_user()
HEADERS = auth_headers()

st.title("📤 Upload Documents")
st.caption(
    f"Files are stored in the {user['department']} node. Text is not extracted: "
    "edit each document afterwards to add the content the assistant should use."
)

uploaded_files = st.file_uploader(
    "Drag and drop files here",
    type=["pdf", "docx", "txt", "md"],
    accept_multiple_files=True,
)

# Streamlit reruns the script on every interaction; upload each file once
done_ids = st.session_state.setdefault("uploaded_file_ids", set())

if uploaded_files:
    for uploaded_file in uploaded_files:
        if uploaded_file.file_id in done_ids:
            continue
        with st.spinner(f"Uploading {uploaded_file.name}..."):
            response = requests.post(
                f"{API_URL}/documents/upload",
                files={"file": (uploaded_file.name, uploaded_file.getvalue())},
                headers=HEADERS,
                timeout=60,
            )

        if response.status_code == 200:
            doc = response.json()
            done_ids.add(uploaded_file.file_id)
            st.success(f"✅ {doc['name']} — {doc['size']} (ID: {doc['id'][:16]}...)")
        else:
            st.error(f"Upload failed: {response.text}")
