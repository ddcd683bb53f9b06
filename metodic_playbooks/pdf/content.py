"""
Content resolver for the extended playbook PDF.

Turns a PlaybookRecord (plus optional AI-generated extended content) into a
PlaybookView in which every displayable slot is already filled: either with
the source value (whitespace collapsed) or with the fixed default from
FALLBACKS. Page builders only read the view; they never decide fallbacks.
"""

import re
from dataclasses import dataclass, field
from datetime import date
from typing import List, Dict, Optional, Sequence

from .icons import IconDefinition, pick_icon
from ..config import MAX_SOURCES
from ..models import PlaybookRecord, InterventionStep, StepDetail, ExtendedContent

_WS = re.compile(r"\s+")

PHASES = ("Diagnose", "Align", "Pilot", "Embed")

FALLBACKS = {
    "transformation_horizon": "6-10 weeks",
    "cadence": "weekly cadence",
    "estimated_duration": "45-90 min per session",
    "target_audience": "Leaders and facilitators",
    "review_checkpoint": "Week 4",
    "executive_summary": (
        "This playbook provides a multi-phase transformation sequence. It combines concrete "
        "interventions, facilitation scripts, clear ownership, and success signals so teams can "
        "move from diagnosis to embedded behavior change."
    ),
    "symptoms": [
        "Low alignment across teams",
        "Repeated decision loops",
        "Action follow-through gaps",
    ],
    "root_causes": [
        "Unclear decision rights",
        "Weak meeting structures",
        "Inconsistent accountability",
    ],
    "theory_foundations": [
        {
            "concept": "Sequence over single event",
            "explanation": (
                "Change quality improves when interventions are staged and reinforced over time "
                "rather than attempted in a single workshop."
            ),
            "application": "Build rhythm and checkpointing into every playbook.",
        },
        {
            "concept": "Role clarity",
            "explanation": "Named ownership prevents drift and ambiguity after each session.",
            "application": "Assign a responsible owner to every intervention step.",
        },
        {
            "concept": "Observable signals",
            "explanation": "Teams sustain change when progress is visible and measurable.",
            "application": "Define one success indicator per phase.",
        },
    ],
    "step_duration": "45-90 min",
    "owner": "Session lead",
    "risks_and_mitigations": "Track blockers immediately and assign one mitigation owner.",
    "execution_guidance": [
        "Prepare the objective and participants before the session.",
        "End with explicit owners, deadlines, and a checkpoint date.",
    ],
    "challenge_title": "Related challenge",
    "method_name": "Context-specific method",
    "success_signal": "Observable progress in decision quality and follow-through.",
    "first_30_days": [
        "Define the playbook owner and facilitation support roles.",
        "Schedule all interventions with a clear cadence.",
    ],
    "days_31_60": ["Track success signals per intervention and resolve blockers quickly."],
    "days_61_90": ["Run checkpoint review and adapt the next intervention cycle."],
    "why_metodic": (
        "Use Metodic.io to convert this playbook into practical session designs, facilitation "
        "assets, and repeatable intervention workflows — faster than starting from scratch."
    ),
    "benefits": [
        "Design intervention sessions with proven structures and templates.",
        "Generate facilitator scripts and participant materials automatically.",
        "Standardize quality across teams, projects, and initiatives.",
    ],
    "source_label": "Source",
    "source_url": "No URL provided",
}


def txt(value: Optional[str], fallback: str = "") -> str:
    """Collapse whitespace and trim; blank or missing values give `fallback`."""
    clean = _WS.sub(" ", value or "").strip()
    return clean or fallback


def items(values: Optional[Sequence[str]], fallback: Sequence[str]) -> List[str]:
    cleaned = [txt(v) for v in (values or [])]
    cleaned = [v for v in cleaned if v]
    return cleaned or list(fallback)


def optional_txt(value: Optional[str]) -> Optional[str]:
    return txt(value) or None


def phase_for(step: InterventionStep, index: int) -> str:
    """Step phase, or the positional default (by array index, not `order`)."""
    phase = txt(step.phase)
    if phase:
        return phase
    return PHASES[min(index, len(PHASES) - 1)]


def format_generated_on(day: date) -> str:
    return f"{day:%B} {day.day}, {day.year}"


# ====== View model ======

@dataclass
class CoverView:
    title: str
    subtitle: str
    icon: IconDefinition
    chips: List[str]
    audience: str
    interventions: str
    review_checkpoint: str
    generated_on: str


@dataclass
class SummaryView:
    executive_summary: str
    context: str
    symptoms: List[str]
    root_causes: List[str]
    stakes: Optional[str] = None


@dataclass
class PrincipleView:
    concept: str
    explanation: str
    application: Optional[str] = None


@dataclass
class StepView:
    section_label: str
    title: str
    phase: str
    timing: str
    duration: str
    owner: str
    goal: str
    script: str
    challenge: str
    method: str
    success_signal: str
    example: Optional[str] = None
    risks: Optional[str] = None
    guidance: List[str] = field(default_factory=list)


@dataclass
class RoadmapView:
    first_30_days: List[str]
    days_31_60: List[str]
    days_61_90: List[str]
    governance: Optional[str] = None


@dataclass
class CtaView:
    why: str
    benefits: List[str]
    sources: List[str] = field(default_factory=list)


@dataclass
class PlaybookView:
    slug: str
    title: str
    cover: CoverView
    summary: SummaryView
    principles: List[PrincipleView]
    steps: List[StepView]
    roadmap: RoadmapView
    cta: CtaView

    @property
    def page_count(self) -> int:
        return 5 + len(self.steps)


# ====== Resolution ======

def step_details_by_order(ext: Optional[ExtendedContent]) -> Dict[int, StepDetail]:
    """Map step order -> extended detail. First detail for an order wins."""
    lookup: Dict[int, StepDetail] = {}
    for detail in (ext.detailed_steps if ext else []):
        if detail.step_order is not None and detail.step_order not in lookup:
            lookup[detail.step_order] = detail
    return lookup


def _resolve_cover(pb: PlaybookRecord, ext: Optional[ExtendedContent], generated_on: date) -> CoverView:
    gen = pb.generated_from
    return CoverView(
        title=txt(ext.title if ext else None, txt(pb.title)),
        subtitle=txt(
            ext.subtitle if ext else None,
            txt(pb.summary, txt(pb.organizational_challenge)),
        ),
        icon=pick_icon(pb.category),
        chips=[
            txt(pb.category),
            txt(gen.transformation_horizon if gen else None, FALLBACKS["transformation_horizon"]),
            txt(gen.cadence if gen else None, FALLBACKS["cadence"]),
            txt(pb.estimated_duration, FALLBACKS["estimated_duration"]),
        ],
        audience=txt(pb.target_audience, FALLBACKS["target_audience"]),
        interventions=str(len(pb.sequence)),
        review_checkpoint=txt(gen.review_checkpoint if gen else None, FALLBACKS["review_checkpoint"]),
        generated_on=format_generated_on(generated_on),
    )


def _resolve_summary(pb: PlaybookRecord, ext: Optional[ExtendedContent]) -> SummaryView:
    analysis = ext.challenge_analysis if ext else None
    return SummaryView(
        executive_summary=txt(ext.executive_summary if ext else None, FALLBACKS["executive_summary"]),
        context=txt(analysis.context if analysis else None, txt(pb.organizational_challenge)),
        symptoms=items(analysis.symptoms if analysis else None, FALLBACKS["symptoms"]),
        root_causes=items(analysis.root_causes if analysis else None, FALLBACKS["root_causes"]),
        stakes=optional_txt(analysis.stakes) if analysis else None,
    )


def _resolve_principles(ext: Optional[ExtendedContent]) -> List[PrincipleView]:
    if ext and ext.theory_foundations:
        return [
            PrincipleView(
                concept=txt(item.concept, f"Principle {idx}"),
                explanation=txt(item.explanation),
                application=optional_txt(item.application),
            )
            for idx, item in enumerate(ext.theory_foundations, start=1)
        ]
    return [PrincipleView(**entry) for entry in FALLBACKS["theory_foundations"]]


def _resolve_step(
    pb: PlaybookRecord,
    step: InterventionStep,
    index: int,
    detail: Optional[StepDetail],
) -> StepView:
    d = detail or StepDetail()
    example = optional_txt(d.practical_example)
    return StepView(
        section_label=f"Step {index + 1} of {len(pb.sequence)}",
        title=txt(d.objective, txt(step.title)),
        phase=phase_for(step, index),
        timing=txt(step.time_window, f"Week {index + 1}"),
        duration=txt(
            step.intervention_duration,
            txt(pb.estimated_duration, FALLBACKS["step_duration"]),
        ),
        owner=txt(step.owner, FALLBACKS["owner"]),
        goal=txt(d.deep_explanation, txt(step.intervention)),
        script=txt(d.facilitator_guidance, txt(step.script_template)),
        example=example,
        risks=txt(d.risks_and_mitigations, FALLBACKS["risks_and_mitigations"]) if example else None,
        guidance=[] if example else list(FALLBACKS["execution_guidance"]),
        challenge=txt(step.challenge_title, FALLBACKS["challenge_title"]),
        method=txt(step.method_name, FALLBACKS["method_name"]),
        success_signal=txt(
            d.success_metrics,
            txt(step.success_signal, FALLBACKS["success_signal"]),
        ),
    )


def _resolve_roadmap(ext: Optional[ExtendedContent]) -> RoadmapView:
    roadmap = ext.implementation_roadmap if ext else None
    return RoadmapView(
        first_30_days=items(roadmap.first_30_days if roadmap else None, FALLBACKS["first_30_days"]),
        days_31_60=items(roadmap.days_31_60 if roadmap else None, FALLBACKS["days_31_60"]),
        days_61_90=items(roadmap.days_61_90 if roadmap else None, FALLBACKS["days_61_90"]),
        governance=optional_txt(roadmap.governance_and_review) if roadmap else None,
    )


def _resolve_cta(ext: Optional[ExtendedContent]) -> CtaView:
    cta = ext.final_metodic_cta if ext else None
    sources = []
    for source in (ext.sources if ext else [])[:MAX_SOURCES]:
        label = txt(source.title, txt(source.publisher, FALLBACKS["source_label"]))
        line = f"{label}: {txt(source.url, FALLBACKS['source_url'])}"
        note = txt(source.relevance_note)
        if note:
            line += f" — {note}"
        sources.append(line)
    return CtaView(
        why=txt(cta.why_metodic if cta else None, FALLBACKS["why_metodic"]),
        benefits=items(cta.benefits if cta else None, FALLBACKS["benefits"]),
        sources=sources,
    )


def resolve(pb: PlaybookRecord, generated_on: Optional[date] = None) -> PlaybookView:
    """Build the fully populated view for one render. Never raises on missing content."""
    ext = pb.extended_printable
    details = step_details_by_order(ext)
    return PlaybookView(
        slug=pb.slug,
        title=txt(pb.title),
        cover=_resolve_cover(pb, ext, generated_on or date.today()),
        summary=_resolve_summary(pb, ext),
        principles=_resolve_principles(ext),
        steps=[
            _resolve_step(pb, step, idx, details.get(step.order))
            for idx, step in enumerate(pb.sequence)
        ],
        roadmap=_resolve_roadmap(ext),
        cta=_resolve_cta(ext),
    )
