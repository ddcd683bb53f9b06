"""
Page builders for the extended playbook PDF.

Every builder is a pure function of the resolved view and returns the list of
flowables for exactly one page. The assembler takes care of page templates,
running header/footer and page breaks.
"""

from typing import List
from xml.sax.saxutils import escape

from reportlab.platypus import Flowable, Paragraph, Spacer, Table, TableStyle

from .assets import LogoAsset, logo_flowable
from .content import CoverView, CtaView, PlaybookView, RoadmapView, StepView, SummaryView
from .flowables import ChipRow, IconBadge
from .styles import C, CONTENT_WIDTH, PAGE_WIDTH, STYLES
from ..config import FOOTER_CAPTION, METODIC_URL


def para(text: str, style: str = "body") -> Paragraph:
    return Paragraph(escape(text), STYLES[style])


def labelled(label: str, text: str) -> Paragraph:
    return Paragraph(f"<b>{escape(label)}</b> {escape(text)}", STYLES["body"])


def bullets(values: List[str]) -> List[Paragraph]:
    return [Paragraph(escape(v), STYLES["bullet"], bulletText="•") for v in values]


def section_title(text: str) -> List[Flowable]:
    return [
        para(text, "section_title"),
        Table([[""]], colWidths=[CONTENT_WIDTH], rowHeights=[2], style=TableStyle([
            ("LINEABOVE", (0, 0), (-1, -1), 2, C["border_light"]),
        ])),
        Spacer(1, 10),
    ]


def divider() -> Table:
    return Table([[""]], colWidths=[CONTENT_WIDTH], rowHeights=[16], style=TableStyle([
        ("LINEBELOW", (0, 0), (-1, -1), 1, C["border_light"]),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]))


_BOXES = {
    # highlighted instruction block: tinted, thick left rule
    "instruction": [
        ("BACKGROUND", (0, 0), (-1, -1), C["bg"]),
        ("LINEBEFORE", (0, 0), (0, -1), 3, C["border"]),
    ],
    "card": [
        ("BOX", (0, 0), (-1, -1), 2, C["border"]),
    ],
    "tips": [
        ("BACKGROUND", (0, 0), (-1, -1), C["bg"]),
        ("BOX", (0, 0), (-1, -1), 1, C["border_light"]),
    ],
    "cta": [
        ("BACKGROUND", (0, 0), (-1, -1), C["bg"]),
        ("BOX", (0, 0), (-1, -1), 2, C["border"]),
    ],
}


def box(content: List[Flowable], kind: str = "card", width: float = CONTENT_WIDTH,
        padding: float = 12) -> Table:
    commands = list(_BOXES[kind]) + [
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("LEFTPADDING", (0, 0), (-1, -1), padding),
        ("RIGHTPADDING", (0, 0), (-1, -1), padding),
        ("TOPPADDING", (0, 0), (-1, -1), padding),
        ("BOTTOMPADDING", (0, 0), (-1, -1), padding - 4),
    ]
    t = Table([[content]], colWidths=[width], style=TableStyle(commands))
    t.spaceAfter = 10
    return t


def two_columns(left: List[Flowable], right: List[Flowable]) -> Table:
    return Table(
        [[left, right]],
        colWidths=[CONTENT_WIDTH * 0.49, CONTENT_WIDTH * 0.51],
        style=TableStyle([
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (0, -1), 0),
            ("RIGHTPADDING", (0, 0), (0, -1), 8),
            ("LEFTPADDING", (1, 0), (1, -1), 8),
            ("RIGHTPADDING", (1, 0), (1, -1), 0),
        ]),
    )


# ====== Cover ======

def build_cover(cover: CoverView, logo: LogoAsset) -> List[Flowable]:
    header = Table(
        [[logo_flowable(logo, 120, 40), para("Extended Playbook", "cover_badge")]],
        colWidths=[PAGE_WIDTH / 2 - 40, PAGE_WIDTH / 2 - 40],
        style=TableStyle([
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("LEFTPADDING", (0, 0), (-1, -1), 0),
            ("RIGHTPADDING", (0, 0), (-1, -1), 0),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 16),
            ("LINEBELOW", (0, 0), (-1, -1), 2, C["border"]),
        ]),
    )

    info_rows = [
        ("Audience", cover.audience),
        ("Interventions", cover.interventions),
        ("Review checkpoint", cover.review_checkpoint),
        ("Generated", cover.generated_on),
    ]
    info = Table(
        [[para(label, "info_label"), para(value, "info_value")] for label, value in info_rows],
        colWidths=[120, PAGE_WIDTH - 80 - 120],
        style=TableStyle([
            ("BACKGROUND", (0, 0), (-1, -1), C["bg"]),
            ("BOX", (0, 0), (-1, -1), 1, C["border_light"]),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (-1, -1), 14),
            ("TOPPADDING", (0, 0), (-1, 0), 14),
            ("BOTTOMPADDING", (0, -1), (-1, -1), 14),
            ("TOPPADDING", (0, 1), (-1, -1), 2),
            ("BOTTOMPADDING", (0, 0), (-1, -2), 3),
        ]),
    )

    return [
        header,
        Spacer(1, 60),
        IconBadge(cover.icon),
        para(cover.title, "cover_title"),
        _centered(para(cover.subtitle, "cover_subtitle"), 410),
        ChipRow(cover.chips),
        Spacer(1, 60),
        info,
    ]


def _centered(flowable: Flowable, width: float) -> Table:
    return Table([[flowable]], colWidths=[width], hAlign="CENTER", style=TableStyle([
        ("LEFTPADDING", (0, 0), (-1, -1), 0),
        ("RIGHTPADDING", (0, 0), (-1, -1), 0),
    ]))


# ====== Executive summary ======

def build_summary(summary: SummaryView) -> List[Flowable]:
    left = [
        para("Challenge Context", "sub_heading"),
        para(summary.context),
        para("Common Symptoms", "sub_heading"),
        *bullets(summary.symptoms),
    ]
    right = [
        para("Root Causes", "sub_heading"),
        *bullets(summary.root_causes),
    ]
    if summary.stakes:
        right += [para("Why It Matters", "sub_heading"), para(summary.stakes)]

    return [
        *section_title("Executive Summary"),
        box([para(summary.executive_summary)], "instruction"),
        divider(),
        two_columns(left, right),
    ]


# ====== Design principles ======

def build_principles(view: PlaybookView) -> List[Flowable]:
    story = [
        *section_title("Design Principles"),
        para(
            "Each principle below informs how the interventions are sequenced. "
            "They combine facilitation discipline with behavior-change mechanics."
        ),
    ]
    for item in view.principles:
        content = [para(item.concept, "sub_heading")]
        if item.explanation:
            content.append(para(item.explanation))
        if item.application:
            content.append(labelled("Application:", item.application))
        story.append(box(content, "card"))
    return story


# ====== Intervention step ======

def _meta_strip(step: StepView) -> Table:
    cells = [
        [para(label.upper(), "meta_label"), para(value, "meta_value")]
        for label, value in (
            ("Phase", step.phase),
            ("Timing", step.timing),
            ("Duration", step.duration),
            ("Owner", step.owner),
        )
    ]
    gap = 8
    col = (CONTENT_WIDTH - 3 * gap) / 4
    row = []
    for i, cell in enumerate(cells):
        row.append(Table([[cell]], colWidths=[col], style=TableStyle([
            ("BOX", (0, 0), (-1, -1), 1, C["border"]),
            ("LEFTPADDING", (0, 0), (-1, -1), 8),
            ("TOPPADDING", (0, 0), (-1, -1), 4),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ])))
        if i < len(cells) - 1:
            row.append("")
    strip = Table([row], colWidths=[col, gap] * 3 + [col], style=TableStyle([
        ("LEFTPADDING", (0, 0), (-1, -1), 0),
        ("RIGHTPADDING", (0, 0), (-1, -1), 0),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]))
    strip.spaceAfter = 10
    return strip


def build_step(step: StepView) -> List[Flowable]:
    if step.example:
        guidance = [
            labelled("Example:", step.example),
            labelled("Risks + mitigations:", step.risks or ""),
        ]
    else:
        guidance = [para(line) for line in step.guidance]

    left = [para("Execution Guidance", "sub_heading"), *guidance]
    right = [
        para("Applied Context", "sub_heading"),
        labelled("Challenge:", step.challenge),
        labelled("Method:", step.method),
    ]

    return [
        *section_title(step.title),
        _meta_strip(step),
        box([para("Intervention Goal", "sub_heading"), para(step.goal)], "instruction"),
        box([para("Facilitator Script", "sub_heading"), para(step.script)], "card"),
        two_columns(left, right),
        Spacer(1, 6),
        box([para("Success Signal", "sub_heading"), para(step.success_signal)], "tips"),
    ]


# ====== Roadmap ======

def build_roadmap(roadmap: RoadmapView) -> List[Flowable]:
    story = [
        *section_title("90-Day Implementation Roadmap"),
        para("Use this cadence to move from launch to durable practice."),
    ]
    for heading, values in (
        ("Days 1 – 30", roadmap.first_30_days),
        ("Days 31 – 60", roadmap.days_31_60),
        ("Days 61 – 90", roadmap.days_61_90),
    ):
        story.append(box([para(heading, "sub_heading"), *bullets(values)], "card"))
    if roadmap.governance:
        story.append(box(
            [para("Governance and Review", "sub_heading"), para(roadmap.governance)], "tips"
        ))
    return story


# ====== Final page ======

def build_final(cta: CtaView, logo: LogoAsset) -> List[Flowable]:
    story = [
        *section_title("Scale This with Metodic.io"),
        box([
            para(cta.why),
            para("How Metodic helps", "sub_heading"),
            *bullets(cta.benefits),
            Paragraph(f'Explore: <a href="{METODIC_URL}"><u>{METODIC_URL}</u></a>', STYLES["body"]),
        ], "cta", padding=14),
    ]
    if cta.sources:
        story += [divider(), para("Research Sources", "sub_heading")]
        story += [para(f"• {line}", "source") for line in cta.sources]

    story += [
        Spacer(1, 24),
        _centered(logo_flowable(logo, 90, 30), 90),
        Spacer(1, 6),
        para(FOOTER_CAPTION, "closing"),
    ]
    return story
