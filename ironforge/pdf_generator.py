"""
PDF quotation generator.

Uses fpdf2 (pure Python, no system dependencies).

Page 1 onwards:
1. Company header
2. Billed-to block, quotation number and date
3. Items table
4. Hardware & accessories (manual lines, when present)
5. Totals (structure, hardware, installation, grand total)
6. Bank details and terms

Then one specification sheet per quoted item.
"""

import base64
import logging
from datetime import datetime
from io import BytesIO
from typing import Optional

from fpdf import FPDF

from .calculators.gate import GateCalculator
from .calculators.layout import gate_door_spans
from .catalog import default_gate_catalog, default_window_catalog
from .config import settings
from .schemas import GateConfig, QuoteDetails, QuoteTotals

logger = logging.getLogger(__name__)

GATE_TYPE_NAMES = {
    "sliding": "Sliding",
    "openable": "Openable",
    "fixed": "Fixed",
    "sliding-openable": "Sliding + Openable (two leaves)",
}

INNER_DESIGN_NAMES = {
    "vertical-bars": "Vertical Bars",
    "horizontal-bars": "Horizontal Bars",
    "criss-cross": "Criss-Cross",
    "sheet": "Sheet",
}


def _fmt(amount) -> str:
    """Format a number as <currency> X,XXX.XX"""
    try:
        return f"{settings.CURRENCY_SYMBOL} {float(amount):,.2f}"
    except (ValueError, TypeError):
        return f"{settings.CURRENCY_SYMBOL} 0.00"


def _num(value, digits: int = 2) -> str:
    return f"{float(value):,.{digits}f}"


def _safe(text) -> str:
    """Replace Unicode chars that can't be rendered by built-in PDF fonts (latin-1)."""
    if not text:
        return ""
    return (
        str(text)
        .replace("\u20b9", "Rs.")  # rupee sign
        .replace("\u2022", "-")    # bullet
        .replace("\u2014", " - ")  # em dash
        .replace("\u2013", "-")    # en dash
        .replace("\u201c", '"')    # left double quote
        .replace("\u201d", '"')    # right double quote
        .replace("\u2018", "'")    # left single quote
        .replace("\u2019", "'")    # right single quote
        .encode("latin-1", errors="replace")
        .decode("latin-1")
    )


def _decode_image(data_url: str) -> Optional[BytesIO]:
    """PNG/JPEG preview sent by the client as a data URL."""
    if not data_url or "," not in data_url:
        return None
    try:
        return BytesIO(base64.b64decode(data_url.split(",", 1)[1], validate=True))
    except ValueError:
        logger.warning("Preview image is not valid base64, skipped")
        return None


class QuotePDF(FPDF):
    """Custom PDF class for quotation documents."""

    def __init__(self, company_name="", company_info="", footer_text=""):
        super().__init__()
        self.company_name = company_name
        self.company_info = company_info
        self.footer_text = footer_text
        self.set_auto_page_break(auto=True, margin=20)

    def header(self):
        self.set_font("Helvetica", "B", 16)
        self.cell(0, 9, _safe(self.company_name), align="C", new_x="LMARGIN", new_y="NEXT")
        if self.company_info:
            self.set_font("Helvetica", "", 8)
            self.set_text_color(100, 100, 100)
            self.cell(0, 4, _safe(self.company_info), align="C", new_x="LMARGIN", new_y="NEXT")
            self.set_text_color(0, 0, 0)
        self.set_draw_color(45, 55, 72)
        self.line(self.l_margin, self.get_y() + 2, self.w - self.r_margin, self.get_y() + 2)
        self.ln(6)

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(150, 150, 150)
        text = f"{_safe(self.footer_text)}  |  Page {self.page_no()}/{{nb}}"
        self.cell(0, 10, text, align="C")

    def section_header(self, title):
        """Render a section header bar."""
        self.set_font("Helvetica", "B", 11)
        self.set_fill_color(45, 55, 72)
        self.set_text_color(255, 255, 255)
        self.cell(0, 8, f"  {_safe(title)}", fill=True, new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.ln(2)

    def table_header(self, cols):
        """Render a table header row. cols: [(label, width), ...]"""
        self.set_font("Helvetica", "B", 8)
        self.set_fill_color(240, 240, 240)
        for label, width in cols:
            align = "R" if label in ("Qty", "Rate", "Amount") else "L"
            self.cell(width, 6, label, border="B", fill=True, align=align)
        self.ln()

    def table_row(self, values, widths, right_cols=2):
        """Render a table data row; the last `right_cols` columns are right aligned."""
        self.set_font("Helvetica", "", 8)
        for i, (val, width) in enumerate(zip(values, widths)):
            align = "R" if i >= len(widths) - right_cols else "L"
            self.cell(width, 5.5, _safe(val), align=align)
        self.ln()

    def spec_row(self, label, value):
        """Two-column label/value row for specification sheets."""
        self.set_font("Helvetica", "B", 9)
        self.cell(60, 6, _safe(label), border=1)
        self.set_font("Helvetica", "", 9)
        self.cell(0, 6, _safe(value), border=1, new_x="LMARGIN", new_y="NEXT")

    def subtotal_row(self, label, amount):
        """Render a subtotal row spanning the full width."""
        self.set_font("Helvetica", "B", 9)
        self.cell(140, 6, _safe(label), align="R", border="T")
        self.cell(50, 6, _fmt(amount), align="R", border="T")
        self.ln(8)


def _profile_name(catalog, profile_id) -> str:
    profile = catalog.get(profile_id)
    return profile.name if profile else "N/A"


def _draw_gate_spec(pdf: QuotePDF, config: GateConfig, calcs, gate_catalog, title_prefix=""):
    pdf.spec_row(f"{title_prefix}Overall Size (WxH)",
                 f"{config.width:g} x {config.height:g} {config.unit.value}")
    pdf.spec_row(f"{title_prefix}Gate Type", GATE_TYPE_NAMES.get(config.gate_type.value, config.gate_type.value))
    pdf.spec_row(f"{title_prefix}Frame Profile", _profile_name(gate_catalog, config.frame_profile_id))
    pdf.spec_row(f"{title_prefix}Frame Color", config.frame_color)
    pdf.spec_row(f"{title_prefix}Estimated Area", f"{_num(calcs.area_sq_ft)} sq ft")
    pdf.spec_row(f"{title_prefix}Estimated Weight", f"{_num(calcs.total_weight_kg)} kg")

    frame = gate_catalog.get(config.frame_profile_id)
    breakdown = GateCalculator(gate_catalog).breakdown(config)
    spans = gate_door_spans(config, frame) if frame is not None else []
    for span, door in zip(spans, breakdown.doors):
        design = span.design
        label = "Inner Design" if span.key == "single" else f"{span.key.title()} Leaf Design"
        summary = INNER_DESIGN_NAMES.get(design.inner_design.value, design.inner_design.value)
        if door.bar_count:
            summary += f" ({door.bar_count} bars)"
        pdf.spec_row(f"{title_prefix}{label}", summary)
        for i, step in enumerate(design.inner_design_sequence):
            pdf.spec_row(f"  Step {i + 1}",
                         f"{_profile_name(gate_catalog, step.profile_id)}, "
                         f"gap {step.gap:g} {config.unit.value}")


def _draw_item_spec(pdf: QuotePDF, item, index: int, gate_catalog, window_catalog):
    pdf.add_page()
    pdf.set_font("Helvetica", "B", 13)
    title = item.description.replace(" with Security Grill", "")
    pdf.multi_cell(0, 7, _safe(f"SPECIFICATION SHEET - ITEM #{index + 1}: {title}"),
                   new_x="LMARGIN", new_y="NEXT")
    pdf.ln(2)

    image = _decode_image(item.preview_image) if item.preview_image else None
    if image is not None:
        try:
            pdf.image(image, w=90)
            pdf.ln(4)
        except Exception as e:
            logger.warning("Could not add preview for item %s: %s", item.id, e)

    calcs = item.calculations
    if item.product_type == "gate":
        _draw_gate_spec(pdf, item.config, calcs, gate_catalog)
        return

    config = item.config
    pdf.spec_row("Overall Size (WxH)", f"{config.width:g} x {config.height:g} {config.unit.value}")
    pdf.spec_row("Grid Layout", f"{len(config.row_sizes)} Rows x {len(config.col_sizes)} Cols")
    pdf.spec_row("Color/Finish", config.color)
    pdf.spec_row("Glass Thickness", f"{config.glass_thickness_mm:g} mm")
    pdf.spec_row("Outer Frame", _profile_name(window_catalog, config.frame_profiles.outer_frame))
    pdf.spec_row("Est. Aluminium Weight", f"{_num(calcs.total_weight_kg)} kg")
    pdf.spec_row("Est. Area", f"{_num(calcs.area_sq_ft)} sq ft")
    pdf.ln(4)

    cols = [("Panel ID", 40), ("Type", 50), ("Insect Mesh", 40), ("Fittings", 60)]
    pdf.table_header(cols)
    for cell in (c for row in config.grid for c in row):
        pdf.table_row(
            [f"Panel ({cell.id})", cell.type.value, "Yes" if cell.has_mesh else "No",
             str(len(cell.fittings))],
            [w for _, w in cols], right_cols=0,
        )
    pdf.ln(4)

    if calcs.hardware:
        pdf.set_font("Helvetica", "B", 10)
        pdf.cell(0, 6, "Estimated Hardware (for reference)", new_x="LMARGIN", new_y="NEXT")
        hw_cols = [("Item", 100), ("Qty", 40), ("Unit", 50)]
        pdf.table_header(hw_cols)
        for line in calcs.hardware:
            pdf.table_row([line.name, f"{line.quantity:g}", line.unit], [w for _, w in hw_cols],
                          right_cols=0)
        pdf.ln(4)

    if config.grill_config is not None and item.grill_calculations is not None:
        pdf.set_font("Helvetica", "B", 11)
        pdf.cell(0, 7, "Attached Iron Security Grill Details", new_x="LMARGIN", new_y="NEXT")
        _draw_gate_spec(pdf, config.grill_config, item.grill_calculations, gate_catalog,
                        title_prefix="Grill ")


def generate_quote_pdf(
    details: QuoteDetails,
    totals: QuoteTotals,
    gate_catalog=None,
    window_catalog=None,
    quote_number: Optional[str] = None,
) -> bytes:
    """
    Generate a PDF quotation.

    Args:
        details: the quote (company, customer, items, manual hardware, installation)
        totals: compute_totals(details)
        quote_number: printed as "QUOTATION #"; generated from the clock if omitted

    Returns:
        PDF bytes
    """
    gate_catalog = gate_catalog if gate_catalog is not None else default_gate_catalog()
    window_catalog = window_catalog if window_catalog is not None else default_window_catalog()
    company, customer, meta = details.company, details.customer, details.meta

    info_parts = [p for p in (company.address, company.contact, company.email, company.website) if p]
    footer = " | ".join(p for p in (company.name, f"GSTIN: {company.gst}" if company.gst else "") if p)
    pdf = QuotePDF(company_name=company.name, company_info=" | ".join(info_parts), footer_text=footer)
    pdf.alias_nb_pages()
    pdf.add_page()
    pw = pdf.w - pdf.l_margin - pdf.r_margin  # printable width

    # -- Title --
    pdf.set_font("Helvetica", "B", 14)
    pdf.cell(0, 8, _safe(meta.title.upper()), new_x="LMARGIN", new_y="NEXT")
    if meta.description:
        pdf.set_font("Helvetica", "", 9)
        pdf.multi_cell(0, 4.5, _safe(meta.description), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(3)

    # -- Billed to / quote info --
    now = datetime.now()
    quote_number = quote_number or f"Q-{now.strftime('%y%m%d%H%M%S')[-6:]}"
    top = pdf.get_y()
    pdf.set_font("Helvetica", "B", 9)
    pdf.cell(0, 5, "BILLED TO", new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 9)
    pdf.cell(0, 5, _safe(customer.name), new_x="LMARGIN", new_y="NEXT")
    pdf.multi_cell(pw / 2, 4.5, _safe(customer.address), new_x="LMARGIN", new_y="NEXT")
    bottom = pdf.get_y()

    pdf.set_xy(pdf.l_margin + pw / 2, top)
    pdf.set_font("Helvetica", "B", 9)
    pdf.cell(pw / 4, 5, "QUOTATION #")
    pdf.set_font("Helvetica", "", 9)
    pdf.cell(pw / 4, 5, _safe(quote_number), align="R", new_x="LMARGIN", new_y="NEXT")
    pdf.set_x(pdf.l_margin + pw / 2)
    pdf.set_font("Helvetica", "B", 9)
    pdf.cell(pw / 4, 5, "DATE")
    pdf.set_font("Helvetica", "", 9)
    pdf.cell(pw / 4, 5, now.strftime("%B %d, %Y"), align="R", new_x="LMARGIN", new_y="NEXT")
    pdf.set_y(max(bottom, pdf.get_y()) + 4)

    # -- Items --
    pdf.section_header("ITEMS")
    cols = [("#", 10), ("Item Description", 85), ("Qty", 15), ("Rate", 40), ("Amount", 40)]
    widths = [c[1] for c in cols]
    pdf.table_header(cols)
    for index, item in enumerate(details.items):
        cfg = item.config
        size = f"{cfg.width:g}x{cfg.height:g} {cfg.unit.value}"
        rate = f"{_fmt(item.rate)}/{item.rate_unit.value}"
        pdf.table_row(
            [str(index + 1), f"{item.description} (Size: {size})"[:55], str(item.quantity),
             rate, _fmt(item.structure_cost)],
            widths, right_cols=3,
        )
        if item.product_type == "window" and item.grill_rate:
            unit = item.grill_rate_unit.value if item.grill_rate_unit else ""
            pdf.table_row(["", "  + Iron Security Grill", "", f"{_fmt(item.grill_rate)}/{unit}", ""],
                          widths, right_cols=3)
    pdf.subtotal_row("Structure Subtotal", totals.structure_total)

    # -- Manual hardware --
    if details.hardware:
        pdf.section_header("HARDWARE & ACCESSORIES")
        hw_cols = [("Item", 80), ("Qty", 20), ("Unit", 20), ("Rate", 35), ("Amount", 35)]
        hw_widths = [c[1] for c in hw_cols]
        pdf.table_header(hw_cols)
        for line in details.hardware:
            pdf.table_row(
                [line.name[:45], f"{line.quantity:g}", line.unit, _fmt(line.rate),
                 _fmt(line.quantity * line.rate)],
                hw_widths, right_cols=2,
            )
        pdf.subtotal_row("Hardware Subtotal", totals.hardware_total)

    # -- Totals --
    pdf.section_header("QUOTE TOTAL")
    pdf.set_font("Helvetica", "", 10)
    installation_label = "Installation Charges"
    if details.installation.rate > 0 and details.installation.unit.value != "lumpsum":
        installation_label += f" ({_fmt(details.installation.rate)}/{details.installation.unit.value})"
    for label, amount in (
        ("Structure Subtotal", totals.structure_total),
        ("Hardware Subtotal", totals.hardware_total),
        (installation_label, totals.installation_total),
    ):
        pdf.cell(130, 6, _safe(label))
        pdf.cell(60, 6, _fmt(amount), align="R")
        pdf.ln()

    pdf.ln(1)
    pdf.set_fill_color(45, 55, 72)
    pdf.set_text_color(255, 255, 255)
    pdf.set_font("Helvetica", "B", 13)
    pdf.cell(130, 10, "  GRAND TOTAL", fill=True)
    pdf.cell(60, 10, f"{_fmt(totals.grand_total)}  ", fill=True, align="R")
    pdf.set_text_color(0, 0, 0)
    pdf.ln(14)

    # -- Bank details & terms --
    bank = company.bank_details
    pdf.section_header("BANK DETAILS")
    pdf.set_font("Helvetica", "", 8)
    for line in (
        f"Bank: {bank.bank}, {bank.branch}",
        f"A/C Name: {bank.name}",
        f"A/C No: {bank.account}",
        f"IFSC: {bank.ifsc}",
    ):
        pdf.cell(pw, 4.5, _safe(line), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(3)

    if meta.terms:
        pdf.section_header("TERMS & CONDITIONS")
        pdf.set_font("Helvetica", "", 8)
        pdf.multi_cell(pw, 4.5, _safe(meta.terms), new_x="LMARGIN", new_y="NEXT")

    # -- Specification sheets --
    for index, item in enumerate(details.items):
        _draw_item_spec(pdf, item, index, gate_catalog, window_catalog)

    logger.info("Generated quotation PDF %s with %d items", quote_number, len(details.items))
    return bytes(pdf.output())
