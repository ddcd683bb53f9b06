import base64
import copy
import os
from datetime import date

import pytest

from metodic_playbooks.pdf.assets import LogoAsset

DATA_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "data", "playbooks"))

# 1x1 PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)

BASE_RECORD = {
    "slug": "meeting-reset",
    "title": "Meeting Reset",
    "category": "Quarterly Review",
    "organizational_challenge": "Meetings end without decisions.",
    "summary": None,
    "target_audience": None,
    "estimated_duration": None,
    "generated_from": None,
    "extended_printable": None,
    "sequence": [],
}


def make_step(order, **overrides):
    step = {
        "order": order,
        "title": f"Step title {order}",
        "intervention": f"Intervention text {order}",
        "script_template": f"Script text {order}",
    }
    step.update(overrides)
    return step


FULL_RECORD = {
    "slug": "full-playbook",
    "title": "Base title",
    "category": "Strategy Alignment",
    "organizational_challenge": "Base challenge.",
    "summary": "Base summary.",
    "target_audience": "Product leadership",
    "estimated_duration": "75 min",
    "generated_from": {
        "transformation_horizon": "12 weeks",
        "cadence": "monthly cadence",
        "review_checkpoint": "Week 6",
    },
    "sequence": [
        make_step(1, phase="Discover", time_window="Week 5", intervention_duration="50 min",
                  owner="COO", success_signal="Base signal 1", challenge_title="Silo thinking",
                  method_name="Fishbowl"),
        make_step(2, phase="Commit", time_window="Week 7", intervention_duration="40 min",
                  owner="CFO", success_signal="Base signal 2", challenge_title="Budget drift",
                  method_name="1-2-4-All"),
    ],
    "extended_printable": {
        "title": "Extended title",
        "subtitle": "Extended subtitle",
        "executive_summary": "Extended executive summary.",
        "challenge_analysis": {
            "context": "Extended context.",
            "symptoms": ["Symptom A", "Symptom B"],
            "root_causes": ["Cause A"],
            "stakes": "Extended stakes.",
        },
        "theory_foundations": [
            {"concept": "Concept A", "explanation": "Explanation A", "application": "Application A"},
        ],
        "detailed_steps": [
            {
                "step_order": order,
                "objective": f"Objective {order}",
                "deep_explanation": f"Deep explanation {order}",
                "facilitator_guidance": f"Guidance {order}",
                "practical_example": f"Example {order}",
                "risks_and_mitigations": f"Risks {order}",
                "success_metrics": f"Metrics {order}",
            }
            for order in (1, 2)
        ],
        "implementation_roadmap": {
            "first_30_days": ["Kickoff item"],
            "days_31_60": ["Midpoint item"],
            "days_61_90": ["Closing item"],
            "governance_and_review": "Monthly steering review.",
        },
        "final_metodic_cta": {
            "why_metodic": "Extended why.",
            "benefits": ["Benefit A", "Benefit B"],
        },
        "sources": [
            {"title": "Paper A", "url": "https://example.org/a", "relevance_note": "Core idea"},
        ],
    },
}


@pytest.fixture
def base_record():
    return copy.deepcopy(BASE_RECORD)


@pytest.fixture
def full_record():
    return copy.deepcopy(FULL_RECORD)


@pytest.fixture
def logo():
    return LogoAsset(data=PNG_BYTES)


@pytest.fixture
def frozen_day():
    return date(2026, 10, 19)
