"""Tests for the department prompt builder."""

from cliniq.models import Department
from cliniq.services.prompt_builder import (
    ASSISTANT_PROMPT,
    NO_DOCUMENTS_MARKER,
    build_context,
    build_prompt,
)
from tests.conftest import make_document

DOCS = [
    make_document("r1", "MRI.pdf", "Screen for implants.", Department.RADIOLOGY),
    make_document("o1", "Chemo.pdf", "Dose by BSA.", Department.ONCOLOGY),
    make_document("r2", "CT.pdf", "Check renal function.", Department.RADIOLOGY),
]


class TestBuildContext:
    def test_only_department_documents_in_list_order(self):
        context = build_context(Department.RADIOLOGY, DOCS)
        assert context == (
            "[DOCUMENT: MRI.pdf]\nScreen for implants."
            "\n\n"
            "[DOCUMENT: CT.pdf]\nCheck renal function."
        )
        assert "Chemo" not in context

    def test_no_documents_marker(self):
        assert build_context(Department.PATHOLOGY, DOCS) == NO_DOCUMENTS_MARKER
        assert build_context(Department.PATHOLOGY, []) == NO_DOCUMENTS_MARKER


class TestAssistantPrompt:
    def test_system_prompt_names_department_and_rules(self):
        messages = ASSISTANT_PROMPT.format_messages(
            **build_prompt("Any contraindications?", Department.ONCOLOGY, DOCS)
        )
        system, human = messages
        assert "assisting the Oncology department" in system.content
        assert "only have access to the documents provided" in system.content
        assert "do not have that information" in system.content
        assert "[DOCUMENT: Chemo.pdf]" in system.content
        assert human.content == "Any contraindications?"

    def test_braces_in_content_are_not_template_variables(self):
        docs = [make_document("x", "t.txt", "dose = {weight} * 2", Department.PATHOLOGY)]
        system = ASSISTANT_PROMPT.format_messages(
            **build_prompt("q", Department.PATHOLOGY, docs)
        )[0]
        assert "dose = {weight} * 2" in system.content
