import io
from itertools import groupby
from typing import List

from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from mealcart.domain.ShoppingItem import AggregatedIngredient


def generate_pdf_for_shopping_list(week_start, items: List[AggregatedIngredient]):
    """Generate a PDF with one table per category: Item / Amount / Used in."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(f"Shopping List – Week of {week_start}", styles["Title"]),
        Spacer(1, 16),
    ]
    if not items:
        elements.append(Paragraph("Nothing planned for this week.", styles["Normal"]))

    # items arrive sorted by category
    for category, group in groupby(items, key=lambda i: i.category):
        elements.append(Paragraph(category, styles["Heading2"]))
        data = [["Item", "Amount", "Used in"]]
        for item in group:
            data.append([
                item.name,
                f"{item.display_amount} {item.unit}".strip(),
                Paragraph(", ".join(item.source_recipes), styles["Normal"]),
            ])
        table = Table(data, repeatRows=1, colWidths=[160, 90, 290])
        table.setStyle(TableStyle([
            ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#4CAF50")),
            ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
            ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
            ("BOTTOMPADDING", (0,0), (-1,0), 8),
            ("VALIGN", (0,0), (-1,-1), "TOP"),
            ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
        ]))
        elements.append(table)
        elements.append(Spacer(1, 12))

    doc.build(elements)
    return buf.getvalue()
