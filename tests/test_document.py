import re
from io import BytesIO

import pytest
from pypdf import PdfReader

from metodic_playbooks.models import PlaybookRecord
from metodic_playbooks.pdf import PlaybookRenderError, render_playbook_pdf
from metodic_playbooks.pdf import document, pages
from metodic_playbooks.pdf.assets import load_logo

from conftest import make_step


def _render(raw, day, logo):
    return render_playbook_pdf(PlaybookRecord.from_dict(raw), generated_on=day, logo=logo)


def _pages(pdf_bytes):
    """Extracted text per page, whitespace normalised."""
    reader = PdfReader(BytesIO(pdf_bytes))
    return [" ".join((page.extract_text() or "").split()) for page in reader.pages]


def test_output_is_a_pdf(base_record, frozen_day, logo):
    pdf_bytes = _render(base_record, frozen_day, logo)
    assert pdf_bytes.startswith(b"%PDF")


@pytest.mark.parametrize("n_steps", [0, 1, 4, 7])
def test_page_count_is_five_plus_steps(base_record, frozen_day, logo, n_steps):
    base_record["sequence"] = [make_step(i) for i in range(1, n_steps + 1)]
    assert len(_pages(_render(base_record, frozen_day, logo))) == 5 + n_steps


def test_page_order_and_labels(full_record, frozen_day, logo):
    text = _pages(_render(full_record, frozen_day, logo))
    assert "Extended Playbook" in text[0]
    assert "Extended title" in text[0]
    assert "October 19, 2026" in text[0]
    assert "Executive Summary" in text[1]
    assert "OVERVIEW" in text[1]
    assert "Design Principles" in text[2]
    assert "FOUNDATIONS" in text[2]
    assert "STEP 1 OF 2" in text[3]
    assert "Objective 1" in text[3]
    assert "STEP 2 OF 2" in text[4]
    assert "Objective 2" in text[4]
    assert "90-Day Implementation Roadmap" in text[5]
    assert "Scale This with Metodic.io" in text[6]


def test_running_footer_skips_cover(full_record, frozen_day, logo):
    text = _pages(_render(full_record, frozen_day, logo))
    assert "1 / 7" not in text[0]
    for number, page in enumerate(text[1:], start=2):
        assert f"{number} / 7" in page
    assert all("Made with Metodic" in page for page in text)


def test_long_content_still_fits_one_page_per_section(base_record, frozen_day, logo):
    wall = " ".join(["Long facilitation script sentence."] * 400)
    base_record["sequence"] = [make_step(1, script_template=wall), make_step(2)]
    base_record["extended_printable"] = {
        "challenge_analysis": {"symptoms": [wall] * 3},
        "sources": [{"title": wall, "url": "https://example.org"}] * 20,
    }
    assert len(_pages(_render(base_record, frozen_day, logo))) == 7


def test_zero_steps_cover_shows_zero(base_record, frozen_day, logo):
    text = _pages(_render(base_record, frozen_day, logo))
    assert re.search(r"Interventions ?0", text[0])


def test_sources_section_omitted_without_sources(base_record, frozen_day, logo):
    final = _pages(_render(base_record, frozen_day, logo))[-1]
    assert "Scale This with Metodic.io" in final
    assert "Research Sources" not in final


def test_sources_capped_at_twenty(base_record, frozen_day, logo):
    base_record["extended_printable"] = {
        "sources": [{"title": f"Ref-{i:02d}", "url": f"https://example.org/{i}"} for i in range(1, 26)],
    }
    final = _pages(_render(base_record, frozen_day, logo))[-1]
    assert "Research Sources" in final
    assert "Ref-20" in final
    assert "Ref-21" not in final


def test_full_content_shows_no_defaults(full_record, frozen_day, logo):
    text = " ".join(_pages(_render(full_record, frozen_day, logo)))
    for default in (
        "Leaders and facilitators",
        "Session lead",
        "Related challenge",
        "Context-specific method",
        "Sequence over single event",
        "Prepare the objective and participants before the session.",
        "Observable progress in decision quality",
        "Define the playbook owner",
    ):
        assert default not in text
    assert "Extended why." in text
    assert "Monthly steering review." in text


def test_rendering_is_deterministic(full_record, frozen_day, logo):
    assert _render(full_record, frozen_day, logo) == _render(full_record, frozen_day, logo)


def test_missing_logo_falls_back_to_wordmark(base_record, frozen_day, tmp_path):
    logo = load_logo(str(tmp_path / "missing.png"))
    assert not logo.embedded
    text = _pages(_render(base_record, frozen_day, logo))
    assert len(text) == 5
    assert "METODIC" in text[0]


def test_metadata(full_record, frozen_day, logo):
    meta = PdfReader(BytesIO(_render(full_record, frozen_day, logo))).metadata
    assert meta.title == "Base title"
    assert meta.author == "METODIC"
    assert meta.subject == "Extended intervention playbook"
    assert meta.creator == "METODIC learn"


def test_failure_raises_render_error(full_record, frozen_day, logo, monkeypatch):
    def boom(step):
        raise RuntimeError("layout exploded")

    monkeypatch.setattr(pages, "build_step", boom)
    with pytest.raises(PlaybookRenderError, match="full-playbook"):
        _render(full_record, frozen_day, logo)


def test_build_story_has_one_template_per_page(full_record, frozen_day, logo):
    from metodic_playbooks.pdf.content import resolve

    view = resolve(PlaybookRecord.from_dict(full_record), generated_on=frozen_day)
    templates, _ = document.build_story(view, logo)
    assert [t.id for t in templates] == [
        "cover", "summary", "principles", "step-1", "step-2", "roadmap", "final",
    ]


@pytest.mark.parametrize("n_steps", [0, 3])
def test_view_page_count_matches_rendered_pages(base_record, frozen_day, logo, n_steps):
    from metodic_playbooks.pdf.content import resolve

    base_record["sequence"] = [make_step(i) for i in range(1, n_steps + 1)]
    view = resolve(PlaybookRecord.from_dict(base_record), generated_on=frozen_day)
    assert view.page_count == 5 + n_steps
    assert len(_pages(_render(base_record, frozen_day, logo))) == view.page_count
