"""
playbooks_loader.py
Read-only content store: one YAML playbook per file. Only published records
are ever returned; slug lookup and listing are the whole interface.
"""

from typing import List, Dict, Any, Optional
import logging
import os

import pandas as pd
import yaml

from .config import PLAYBOOKS_DIR, PLAYBOOK_EXTS
from .models import PlaybookRecord, is_published

logger = logging.getLogger(__name__)

LIST_COLUMNS = [
    "slug", "title", "category", "summary", "estimated_duration",
    "transformation_horizon", "steps", "updated_at",
]


def load_playbooks(directory: str) -> List[Dict[str, Any]]:
    pbs = []
    if not os.path.isdir(directory):
        logger.warning("Playbook directory %s does not exist", directory)
        return pbs
    for name in sorted(os.listdir(directory)):
        if not name.endswith(PLAYBOOK_EXTS):
            continue
        try:
            with open(os.path.join(directory, name), "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            logger.warning("Skipping %s: unreadable playbook file (%s)", name, e)
            continue
        if not isinstance(raw, dict):
            logger.warning("Skipping %s: expected a mapping, got %s", name, type(raw).__name__)
            continue
        pbs.append(raw)
    return pbs


def _matches(raw: Dict[str, Any], slug: str) -> bool:
    return str(raw.get("slug", "")) == slug and is_published(raw)


class PlaybookRepository:
    def __init__(self, directory: Optional[str] = None):
        self.directory = directory or PLAYBOOKS_DIR

    def _published(self) -> List[PlaybookRecord]:
        records = []
        for raw in load_playbooks(self.directory):
            if not is_published(raw):
                continue
            try:
                records.append(PlaybookRecord.from_dict(raw))
            except ValueError as e:
                logger.warning("Skipping playbook %r: %s", raw.get("slug"), e)
        return records

    def get(self, slug: str) -> Optional[PlaybookRecord]:
        for raw in load_playbooks(self.directory):
            if _matches(raw, slug):
                return PlaybookRecord.from_dict(raw)
        return None

    def _frame(self) -> pd.DataFrame:
        rows = [
            {
                "slug": pb.slug,
                "title": pb.title,
                "category": pb.category,
                "summary": pb.summary,
                "organizational_challenge": pb.organizational_challenge,
                "estimated_duration": pb.estimated_duration,
                "transformation_horizon": pb.generated_from.transformation_horizon if pb.generated_from else None,
                "steps": len(pb.sequence),
                "updated_at": pb.updated_at,
            }
            for pb in self._published()
        ]
        df = pd.DataFrame(rows, columns=LIST_COLUMNS + ["organizational_challenge"])
        df["_updated"] = pd.to_datetime(df["updated_at"], errors="coerce", utc=True)
        return df

    def list(self, category: Optional[str] = None, query: Optional[str] = None) -> List[Dict[str, Any]]:
        """Published playbook summaries, newest first."""
        df = self._frame()

        if category:
            df = df[df["category"].str.lower() == category.strip().lower()]

        if query and query.strip():
            q = query.strip().lower()
            haystack = (
                df["title"].fillna("") + " " + df["category"].fillna("") + " "
                + df["organizational_challenge"].fillna("") + " " + df["summary"].fillna("")
            ).str.lower()
            df = df[haystack.str.contains(q, regex=False)]

        df = df.sort_values(["_updated", "title"], ascending=[False, True], na_position="last")
        df = df[LIST_COLUMNS].astype(object).where(df[LIST_COLUMNS].notna(), None)
        return df.to_dict(orient="records")

    def categories(self) -> List[str]:
        df = self._frame()
        return sorted(c for c in df["category"].dropna().unique().tolist() if c)
