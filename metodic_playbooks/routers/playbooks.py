"""
Playbook routes:
- GET /playbooks                  published playbooks (optional ?category= & ?q=)
- GET /playbooks/categories       distinct categories of published playbooks
- GET /playbooks/{slug}           one published playbook record
- GET /playbooks/{slug}/download  extended playbook PDF
"""

from dataclasses import asdict
from io import BytesIO
from typing import Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse, StreamingResponse

from ..models import PlaybookRecord
from ..pdf import render_playbook_pdf
from ..playbooks_loader import PlaybookRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/playbooks", tags=["playbooks"])


def get_repository() -> PlaybookRepository:
    return PlaybookRepository()


def _get_published(repo: PlaybookRepository, slug: str) -> PlaybookRecord:
    try:
        playbook = repo.get(slug)
    except ValueError as e:
        logger.error("Playbook %s is malformed: %s", slug, e)
        raise HTTPException(status_code=500, detail="Playbook content is invalid")
    if playbook is None:
        raise HTTPException(status_code=404, detail="Playbook not found")
    return playbook


@router.get("")
async def list_playbooks(
    category: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
    repo: PlaybookRepository = Depends(get_repository),
):
    return JSONResponse(repo.list(category=category, query=q))


@router.get("/categories")
async def list_categories(repo: PlaybookRepository = Depends(get_repository)):
    return {"categories": repo.categories()}


@router.get("/{slug}")
async def get_playbook(slug: str, repo: PlaybookRepository = Depends(get_repository)):
    return asdict(_get_published(repo, slug))


@router.get("/{slug}/download")
def download_playbook_pdf(slug: str, repo: PlaybookRepository = Depends(get_repository)):
    playbook = _get_published(repo, slug)
    filename = f"{playbook.slug or 'playbook'}-extended.pdf"

    try:
        pdf_bytes = render_playbook_pdf(playbook)
    except Exception:
        # already logged with traceback by the renderer
        raise HTTPException(status_code=500, detail="PDF generation failed")

    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "Cache-Control": "no-store",
        },
    )
