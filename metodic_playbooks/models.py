"""
Playbook records as they come out of the content store.

Everything here is plain data. Parsing is tolerant: optional keys may be missing
or null, lists may be absent. Rendering never mutates these objects.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional


def _opt_str(raw: Dict[str, Any], key: str) -> Optional[str]:
    val = raw.get(key)
    if val is None:
        return None
    return str(val)


def _str_list(raw: Dict[str, Any], key: str) -> Optional[List[str]]:
    val = raw.get(key)
    if not isinstance(val, list):
        return None
    return [str(v) for v in val if v is not None]


def _dict_list(raw: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    val = raw.get(key)
    if not isinstance(val, list):
        return []
    return [v for v in val if isinstance(v, dict)]


def _mapping(raw: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
    val = raw.get(key)
    return val if isinstance(val, dict) else None


_TRUE_WORDS = {"true", "yes", "on", "1"}


def is_published(raw: Dict[str, Any]) -> bool:
    """Missing flag means published. Strings are parsed; unknown words hide the record."""
    val = raw.get("is_published", True)
    if val is None:
        return True
    if isinstance(val, str):
        return val.strip().lower() in _TRUE_WORDS
    return isinstance(val, (bool, int)) and bool(val)


@dataclass
class InterventionStep:
    order: int
    title: str
    intervention: str
    script_template: str
    phase: Optional[str] = None
    time_window: Optional[str] = None
    intervention_duration: Optional[str] = None
    owner: Optional[str] = None
    success_signal: Optional[str] = None
    challenge_title: Optional[str] = None
    method_name: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "InterventionStep":
        order = raw.get("order")
        if isinstance(order, bool) or not isinstance(order, int):
            raise ValueError(f"step 'order' must be an integer, got {order!r}")
        return cls(
            order=order,
            title=str(raw.get("title") or ""),
            intervention=str(raw.get("intervention") or ""),
            script_template=str(raw.get("script_template") or ""),
            phase=_opt_str(raw, "phase"),
            time_window=_opt_str(raw, "time_window"),
            intervention_duration=_opt_str(raw, "intervention_duration"),
            owner=_opt_str(raw, "owner"),
            success_signal=_opt_str(raw, "success_signal"),
            challenge_title=_opt_str(raw, "challenge_title"),
            method_name=_opt_str(raw, "method_name"),
        )


@dataclass
class ChallengeAnalysis:
    context: Optional[str] = None
    symptoms: Optional[List[str]] = None
    root_causes: Optional[List[str]] = None
    stakes: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ChallengeAnalysis":
        return cls(
            context=_opt_str(raw, "context"),
            symptoms=_str_list(raw, "symptoms"),
            root_causes=_str_list(raw, "root_causes"),
            stakes=_opt_str(raw, "stakes"),
        )


@dataclass
class TheoryFoundation:
    concept: Optional[str] = None
    explanation: Optional[str] = None
    application: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "TheoryFoundation":
        return cls(
            concept=_opt_str(raw, "concept"),
            explanation=_opt_str(raw, "explanation"),
            application=_opt_str(raw, "application"),
        )


@dataclass
class StepDetail:
    step_order: Optional[int] = None
    objective: Optional[str] = None
    deep_explanation: Optional[str] = None
    facilitator_guidance: Optional[str] = None
    practical_example: Optional[str] = None
    risks_and_mitigations: Optional[str] = None
    success_metrics: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "StepDetail":
        step_order = raw.get("step_order")
        if isinstance(step_order, bool) or not isinstance(step_order, int):
            step_order = None
        return cls(
            step_order=step_order,
            objective=_opt_str(raw, "objective"),
            deep_explanation=_opt_str(raw, "deep_explanation"),
            facilitator_guidance=_opt_str(raw, "facilitator_guidance"),
            practical_example=_opt_str(raw, "practical_example"),
            risks_and_mitigations=_opt_str(raw, "risks_and_mitigations"),
            success_metrics=_opt_str(raw, "success_metrics"),
        )


@dataclass
class ImplementationRoadmap:
    first_30_days: Optional[List[str]] = None
    days_31_60: Optional[List[str]] = None
    days_61_90: Optional[List[str]] = None
    governance_and_review: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ImplementationRoadmap":
        return cls(
            first_30_days=_str_list(raw, "first_30_days"),
            days_31_60=_str_list(raw, "days_31_60"),
            days_61_90=_str_list(raw, "days_61_90"),
            governance_and_review=_opt_str(raw, "governance_and_review"),
        )


@dataclass
class MetodicCta:
    why_metodic: Optional[str] = None
    benefits: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "MetodicCta":
        return cls(
            why_metodic=_opt_str(raw, "why_metodic"),
            benefits=_str_list(raw, "benefits"),
        )


@dataclass
class Source:
    title: Optional[str] = None
    url: Optional[str] = None
    publisher: Optional[str] = None
    relevance_note: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Source":
        return cls(
            title=_opt_str(raw, "title"),
            url=_opt_str(raw, "url"),
            publisher=_opt_str(raw, "publisher"),
            relevance_note=_opt_str(raw, "relevance_note"),
        )


@dataclass
class ExtendedContent:
    """AI-generated printable content. Any subset of fields may be missing."""
    title: Optional[str] = None
    subtitle: Optional[str] = None
    executive_summary: Optional[str] = None
    challenge_analysis: Optional[ChallengeAnalysis] = None
    theory_foundations: List[TheoryFoundation] = field(default_factory=list)
    detailed_steps: List[StepDetail] = field(default_factory=list)
    implementation_roadmap: Optional[ImplementationRoadmap] = None
    final_metodic_cta: Optional[MetodicCta] = None
    sources: List[Source] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ExtendedContent":
        analysis = _mapping(raw, "challenge_analysis")
        roadmap = _mapping(raw, "implementation_roadmap")
        cta = _mapping(raw, "final_metodic_cta")
        return cls(
            title=_opt_str(raw, "title"),
            subtitle=_opt_str(raw, "subtitle"),
            executive_summary=_opt_str(raw, "executive_summary"),
            challenge_analysis=ChallengeAnalysis.from_dict(analysis) if analysis is not None else None,
            theory_foundations=[TheoryFoundation.from_dict(d) for d in _dict_list(raw, "theory_foundations")],
            detailed_steps=[StepDetail.from_dict(d) for d in _dict_list(raw, "detailed_steps")],
            implementation_roadmap=ImplementationRoadmap.from_dict(roadmap) if roadmap is not None else None,
            final_metodic_cta=MetodicCta.from_dict(cta) if cta is not None else None,
            sources=[Source.from_dict(d) for d in _dict_list(raw, "sources")],
        )


@dataclass
class GeneratedFrom:
    transformation_horizon: Optional[str] = None
    cadence: Optional[str] = None
    review_checkpoint: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "GeneratedFrom":
        return cls(
            transformation_horizon=_opt_str(raw, "transformation_horizon"),
            cadence=_opt_str(raw, "cadence"),
            review_checkpoint=_opt_str(raw, "review_checkpoint"),
        )


@dataclass
class PlaybookRecord:
    slug: str
    title: str
    category: str
    organizational_challenge: str
    summary: Optional[str] = None
    target_audience: Optional[str] = None
    estimated_duration: Optional[str] = None
    sequence: List[InterventionStep] = field(default_factory=list)
    extended_printable: Optional[ExtendedContent] = None
    generated_from: Optional[GeneratedFrom] = None
    is_published: bool = True
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "PlaybookRecord":
        if not isinstance(raw, dict):
            raise ValueError(f"playbook record must be a mapping, got {type(raw).__name__}")
        slug = raw.get("slug")
        if not slug:
            raise ValueError("playbook record has no 'slug'")

        ext = _mapping(raw, "extended_printable")
        gen = _mapping(raw, "generated_from")
        return cls(
            slug=str(slug),
            title=str(raw.get("title") or ""),
            category=str(raw.get("category") or ""),
            organizational_challenge=str(raw.get("organizational_challenge") or ""),
            summary=_opt_str(raw, "summary"),
            target_audience=_opt_str(raw, "target_audience"),
            estimated_duration=_opt_str(raw, "estimated_duration"),
            sequence=[InterventionStep.from_dict(d) for d in _dict_list(raw, "sequence")],
            extended_printable=ExtendedContent.from_dict(ext) if ext is not None else None,
            generated_from=GeneratedFrom.from_dict(gen) if gen is not None else None,
            is_published=is_published(raw),
            updated_at=_opt_str(raw, "updated_at"),
        )
