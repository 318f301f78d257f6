"""Tests for dashboard statistics."""

from cliniq.models import Department, User
from cliniq.services.dashboard import build_dashboard


def test_indexed_files_counts_own_department(store):
    radiology = User(id="u1", name="Dr. X", department=Department.RADIOLOGY)
    oncology = User(id="u2", name="Dr. Y", department=Department.ONCOLOGY)

    assert build_dashboard(radiology, store.documents).indexed_files == 2
    assert build_dashboard(oncology, store.documents).indexed_files == 0


def test_mock_metrics(store):
    user = User(id="u1", name="Dr. X", department=Department.PATHOLOGY)
    stats = build_dashboard(user, store.documents)

    assert [card.label for card in stats.stats] == [
        "Indexed Files", "Authorized Users", "AI Inferences", "Node Integrity",
    ]
    assert list(stats.query_volume) == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert stats.query_volume["Fri"] == 90
    assert sum(stats.storage_distribution.values()) == 1000
    assert "Pathology" in stats.recent_activity[0].msg
