"""Tests for the department document repository."""

import re

import pytest

from cliniq.models import Department, User
from cliniq.services.document_repository import (
    DocumentRepository,
    format_size,
    generate_document_id,
    new_upload,
)
from tests.conftest import make_document


@pytest.fixture
def repo(store):
    repo = DocumentRepository(store)
    repo.add(make_document("onc-1", "Chemo_Dosing.pdf", "Dose by body surface area.", Department.ONCOLOGY))
    repo.add(make_document("path-1", "Biopsy_Handling.docx", "Fix in formalin.", Department.PATHOLOGY))
    repo.add(make_document("rad-3", "CT_Contrast.txt", "Check renal function before contrast.", Department.RADIOLOGY))
    return repo


class TestList:
    @pytest.mark.parametrize("department", list(Department))
    def test_list_only_returns_own_department(self, repo, department):
        assert all(doc.department == department for doc in repo.list(department))

    def test_list_keeps_insertion_order(self, repo):
        ids = [doc.id for doc in repo.list(Department.RADIOLOGY)]
        assert ids == ["uuid-rad-001", "uuid-rad-002", "rad-3"]

    def test_empty_department(self, repo):
        assert repo.list(Department.ADMINISTRATION) == []


class TestSearch:
    @pytest.mark.parametrize("department", list(Department))
    def test_empty_query_equals_list(self, repo, department):
        assert repo.search(department, "") == repo.list(department)

    def test_matches_name_case_insensitively(self, repo):
        for query in ("protocol", "MRI", "mri_PROTOCOL"):
            names = [doc.name for doc in repo.search(Department.RADIOLOGY, query)]
            assert names == ["MRI_Protocol_v2.pdf"]

    def test_matches_content(self, repo):
        names = [doc.name for doc in repo.search(Department.RADIOLOGY, "SEDATION")]
        assert names == ["Patient_Safety_Guidelines.pdf"]

    def test_does_not_cross_departments(self, repo):
        assert repo.search(Department.RADIOLOGY, "formalin") == []
        assert len(repo.search(Department.PATHOLOGY, "formalin")) == 1

    def test_no_match(self, repo):
        assert repo.search(Department.RADIOLOGY, "zebrafish") == []


class TestMutations:
    def test_add_flushes_collection(self, repo, blob_store):
        assert "Chemo_Dosing.pdf" in blob_store.blobs["cliniq_vault_docs"]

    def test_update_replaces_name_and_content(self, repo, blob_store):
        assert repo.update("onc-1", "Chemo_v2.pdf", "New dosing table.") is True
        doc = repo.get(Department.ONCOLOGY, "onc-1")
        assert doc.name == "Chemo_v2.pdf"
        assert doc.content == "New dosing table."
        assert doc.uploaded_by == "Tester"
        assert "New dosing table." in blob_store.blobs["cliniq_vault_docs"]

    def test_update_missing_id_is_noop(self, repo):
        before = [doc.model_copy() for doc in repo.all]
        assert repo.update("missing", "x", "y") is False
        assert repo.all == before

    def test_delete_removes_exactly_one_and_keeps_order(self, repo):
        before = [doc.id for doc in repo.all]
        assert repo.delete("uuid-rad-002") is True
        after = [doc.id for doc in repo.all]
        assert after == [i for i in before if i != "uuid-rad-002"]

    def test_delete_missing_id_is_noop(self, repo, blob_store):
        before = [doc.id for doc in repo.all]
        stored = blob_store.blobs["cliniq_vault_docs"]
        assert repo.delete("missing") is False
        assert [doc.id for doc in repo.all] == before
        assert blob_store.blobs["cliniq_vault_docs"] == stored

    def test_get_respects_department(self, repo):
        assert repo.get(Department.RADIOLOGY, "onc-1") is None
        assert repo.get(Department.ONCOLOGY, "onc-1").name == "Chemo_Dosing.pdf"


class TestUpload:
    def test_generated_ids_are_unique_and_prefixed(self):
        ids = {generate_document_id(Department.ONCOLOGY) for _ in range(500)}
        assert len(ids) == 500
        assert all(re.fullmatch(r"uuid-onc-[0-9a-f]{32}", i) for i in ids)

    def test_format_size(self):
        assert format_size(0) == "0.0 MB"
        assert format_size(2516582) == "2.4 MB"

    def test_new_upload_uses_placeholder_content(self):
        user = User(id="u1", name="Dr. X", department=Department.PATHOLOGY)
        doc = new_upload("slides.pdf", 1048576, user)
        assert doc.department == Department.PATHOLOGY
        assert doc.uploaded_by == "Dr. X"
        assert doc.size == "1.0 MB"
        assert doc.content.startswith("Extracted content for slides.pdf...")
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", doc.uploaded_at)
        assert doc.id.startswith("uuid-pat-")
