"""Documents page — search, edit and delete department records."""
import streamlit as st
import requests

from session import API_URL, auth_headers, require_user

user = require_user()
HEADERS = auth_headers()

st.title("📁 Document Repository")
st.caption(f"🔒 Isolated Storage: {user['department']}")

query = st.text_input("🔍 Search name or content", value="")

try:
    resp = requests.get(
        f"{API_URL}/documents", params={"q": query}, headers=HEADERS, timeout=30,
    )
    if resp.status_code == 200:
        docs = resp.json()

        if not docs:
            if query:
                st.info(f"No documents match “{query}”.")
            else:
                st.info(
                    "No documents in this department yet. "
                    "Go to the Upload page to add documents."
                )
        else:
            st.markdown(f"**{len(docs)} document(s)** in {user['department']}")
            st.markdown("---")

            for doc in docs:
                with st.container():
                    col1, col2, col3, col4 = st.columns([4, 2, 2, 1])

                    with col1:
                        st.markdown(f"📄 **{doc['name']}**")
                    with col2:
                        st.caption(f"👤 {doc['uploaded_by']}")
                    with col3:
                        st.caption(f"📅 {doc['uploaded_at']} • {doc['size']}")
                    with col4:
                        if st.button("🗑️", key=f"del_{doc['id']}", help="Delete this document"):
                            del_resp = requests.delete(
                                f"{API_URL}/documents/{doc['id']}",
                                headers=HEADERS, timeout=30,
                            )
                            if del_resp.status_code == 200:
                                st.success(f"Deleted {doc['name']}")
                                st.rerun()
                            else:
                                st.error(f"Delete failed: {del_resp.text}")

                    # Edit panel — content is what the assistant reads
                    with st.expander("✏️ Edit"):
                        with st.form(f"edit_{doc['id']}"):
                            new_name = st.text_input("Name", value=doc["name"])
                            new_content = st.text_area(
                                "Content (AI context)", value=doc["content"], height=200,
                            )
                            if st.form_submit_button("Save & re-index"):
                                if not new_name.strip():
                                    st.error("Name cannot be blank.")
                                else:
                                    put_resp = requests.put(
                                        f"{API_URL}/documents/{doc['id']}",
                                        json={"name": new_name, "content": new_content},
                                        headers=HEADERS, timeout=30,
                                    )
                                    if put_resp.status_code == 200:
                                        st.success("Saved.")
                                        st.rerun()
                                    else:
                                        st.error(f"Update failed: {put_resp.text}")

                st.markdown("---")

    elif resp.status_code in (400, 401):
        st.error("🔒 Access denied for your department key.")
    else:
        st.error(f"Error loading documents: {resp.text}")

except requests.ConnectionError:
    st.warning("Cannot connect to the API.")
