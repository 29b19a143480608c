from __future__ import annotations
from datetime import date
from io import BytesIO
from typing import Any, Dict, List, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import letter
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, ListFlowable, ListItem, Table, TableStyle
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.lib import colors

from catalog import task_name
from models import HouseholdSetup, InsightEntry
from reporting import INSIGHT_LABELS, find_imbalances, wmli_next_steps
from scoring import CalculatedResults
from wmli import WMLIResults

REPORT_TITLE = "Household Work Discussion Report"


def _safe(s: Any) -> str:
    if s is None:
        return ""
    return escape(str(s))


def _share_table(results: CalculatedResults) -> Table:
    rows = [["", "You", "Partner"]]
    partner = results.has_partner
    rows.append([
        "Visible work (min/week)",
        f"{results.my_visible_time} ({results.my_visible_percentage}%)",
        f"{results.partner_visible_time} ({results.partner_visible_percentage}%)" if partner else "-",
    ])
    rows.append([
        "Mental load (points/week)",
        f"{results.my_mental_load} ({results.my_mental_percentage}%)",
        f"{results.partner_mental_load} ({results.partner_mental_percentage}%)" if partner else "-",
    ])
    t = Table(rows, hAlign="LEFT")
    t.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("LINEBELOW", (0, 0), (-1, 0), 0.5, colors.HexColor("#888888")),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]))
    return t


def report_to_pdf_bytes(
    results: CalculatedResults,
    setup: HouseholdSetup,
    wmli: Optional[WMLIResults] = None,
    insights: Sequence[InsightEntry] = (),
    discussion_notes: Optional[Dict[str, str]] = None,
    generated_on: Optional[date] = None,
) -> bytes:
    """Render the discussion report as a PDF."""
    buf = BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=letter,
        leftMargin=0.8*inch,
        rightMargin=0.8*inch,
        topMargin=0.8*inch,
        bottomMargin=0.8*inch,
        title=REPORT_TITLE,
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "LoadShareTitle",
        parent=styles["Title"],
        textColor=colors.HexColor("#111111"),
        spaceAfter=12,
    )
    h_style = ParagraphStyle(
        "LoadShareH2",
        parent=styles["Heading2"],
        textColor=colors.HexColor("#111111"),
        spaceBefore=10,
        spaceAfter=6,
    )
    b_style = ParagraphStyle(
        "LoadShareBody",
        parent=styles["BodyText"],
        leading=14,
        spaceAfter=6,
    )
    small_style = ParagraphStyle(
        "LoadShareSmall",
        parent=styles["BodyText"],
        fontSize=9,
        leading=11,
        textColor=colors.HexColor("#444444"),
        spaceAfter=6,
    )

    flow = []
    flow.append(Paragraph(REPORT_TITLE, title_style))

    generated_on = generated_on or date.today()
    meta = [
        f"<b>Generated:</b> {generated_on.isoformat()}",
        f"<b>Household:</b> {_safe(setup.household_type.replace('_', ' '))}",
        f"<b>Mode:</b> {'Together' if setup.is_together else 'Solo'}",
    ]
    flow.append(Paragraph("<br/>".join(meta), small_style))
    flow.append(Spacer(1, 6))

    def add_list(items: List[str]):
        lf = ListFlowable(
            [ListItem(Paragraph(_safe(x), b_style), leftIndent=14) for x in items],
            bulletType="bullet",
            leftIndent=14,
        )
        flow.append(lf)

    # Distribution
    flow.append(Paragraph("Key findings", h_style))
    flow.append(_share_table(results))
    flow.append(Spacer(1, 6))

    # WMLI
    if wmli is not None:
        flow.append(Paragraph("Weighted Mental Load Index", h_style))
        flow.append(Paragraph(f"<b>Your WMLI:</b> {wmli.my_wmli}/100 ({_safe(wmli.interpretation_level)})", b_style))
        if wmli.partner_wmli is not None:
            flow.append(Paragraph(f"<b>Partner's WMLI:</b> {wmli.partner_wmli}/100", b_style))
        flow.append(Paragraph(_safe(wmli.interpretation_context), small_style))

        flagged = [task_name(t) for t in wmli.my_flags.strain_tasks]
        if flagged:
            flow.append(Paragraph("<i>High-strain tasks:</i>", b_style))
            add_list(flagged)
        flagged = [task_name(t) for t in wmli.my_flags.unfairness_tasks]
        if flagged:
            flow.append(Paragraph("<i>Tasks with fairness concerns:</i>", b_style))
            add_list(flagged)

        flow.append(Paragraph("Next steps", h_style))
        for step in wmli_next_steps(wmli):
            flow.append(Paragraph(f"<b>{_safe(step['title'])}</b>", b_style))
            flow.append(Paragraph(_safe(step["text"]), b_style))

    # Imbalances
    imbalances = find_imbalances(results, wmli)
    if imbalances:
        flow.append(Paragraph("Biggest imbalances", h_style))
        for item in imbalances:
            flow.append(Paragraph(f"<b>{_safe(item['task_name'])}</b> "
                                  f"<font color='#666666'>({_safe(item['type'])})</font>", b_style))
            flow.append(Paragraph(_safe(item["insight"]), b_style))
            flow.append(Paragraph(f"<i>Conversation starter:</i> {_safe(item['prompt'])}", b_style))
            flow.append(Spacer(1, 6))

    # Insights + notes
    flow.append(Paragraph("Discussion insights", h_style))
    if insights:
        add_list([f"{INSIGHT_LABELS.get(i.kind, i.kind)}: {i.description}" for i in insights])
    else:
        flow.append(Paragraph("No specific insights captured during assessment.", b_style))

    flow.append(Paragraph("Conversation notes", h_style))
    notes = discussion_notes or {}
    if notes:
        for key, note in notes.items():
            flow.append(Paragraph(f"<b>{_safe(key)}</b>", b_style))
            flow.append(Paragraph(_safe(note), b_style))
    else:
        flow.append(Paragraph("None.", b_style))

    doc.build(flow)
    return buf.getvalue()
