from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from pypdf import PdfReader

from metodic_playbooks.config import VERSION
from metodic_playbooks.main import app
from metodic_playbooks.playbooks_loader import PlaybookRepository
from metodic_playbooks.routers import playbooks as playbook_routes

from conftest import DATA_DIR


@pytest.fixture
def client():
    app.dependency_overrides[playbook_routes.get_repository] = lambda: PlaybookRepository(DATA_DIR)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"ok": True, "version": VERSION}


def test_list_playbooks(client):
    res = client.get("/playbooks")
    assert res.status_code == 200
    rows = res.json()
    assert [r["slug"] for r in rows] == ["breaking-decision-loops", "team-collaboration-reset"]
    assert rows[0]["updated_at"] == "2026-09-14"


def test_list_playbooks_by_category(client):
    res = client.get("/playbooks", params={"category": "team collaboration"})
    assert [r["slug"] for r in res.json()] == ["team-collaboration-reset"]


def test_get_playbook(client):
    res = client.get("/playbooks/breaking-decision-loops")
    assert res.status_code == 200
    body = res.json()
    assert body["title"] == "Breaking Decision Loops"
    assert body["category"] == "Decision-Making"


def test_unknown_and_unpublished_are_404(client):
    assert client.get("/playbooks/nope").status_code == 404
    res = client.get("/playbooks/quarterly-review-draft/download")
    assert res.status_code == 404
    assert res.json()["detail"] == "Playbook not found"


def test_download_pdf(client):
    res = client.get("/playbooks/team-collaboration-reset/download")
    assert res.status_code == 200
    assert res.headers["content-type"] == "application/pdf"
    assert res.headers["content-disposition"] == 'attachment; filename="team-collaboration-reset-extended.pdf"'
    assert res.headers["cache-control"] == "no-store"
    reader = PdfReader(BytesIO(res.content))
    assert len(reader.pages) == 5 + 2


def test_download_with_extended_content(client):
    res = client.get("/playbooks/breaking-decision-loops/download")
    assert res.status_code == 200
    assert res.content.startswith(b"%PDF")


def test_download_render_failure_is_500(client, monkeypatch):
    def boom(playbook, **kwargs):
        raise RuntimeError("renderer down")

    monkeypatch.setattr(playbook_routes, "render_playbook_pdf", boom)
    res = client.get("/playbooks/team-collaboration-reset/download")
    assert res.status_code == 500
    assert res.json()["detail"] == "PDF generation failed"


def test_list_categories(client):
    res = client.get("/playbooks/categories")
    assert res.status_code == 200
    assert res.json() == {"categories": ["Decision-Making", "Team Collaboration"]}


def test_corrupt_file_does_not_break_other_playbooks(tmp_path):
    (tmp_path / "a.yaml").write_text(
        "slug: ok\ntitle: Ok\ncategory: Strategy\norganizational_challenge: x\n", encoding="utf-8"
    )
    (tmp_path / "b.yaml").write_text("slug: [unclosed\n", encoding="utf-8")
    app.dependency_overrides[playbook_routes.get_repository] = lambda: PlaybookRepository(str(tmp_path))
    try:
        client = TestClient(app)
        res = client.get("/playbooks")
        assert res.status_code == 200
        assert [r["slug"] for r in res.json()] == ["ok"]
        res = client.get("/playbooks/ok/download")
        assert res.status_code == 200
        assert len(PdfReader(BytesIO(res.content)).pages) == 5
    finally:
        app.dependency_overrides.clear()
