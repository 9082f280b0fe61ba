"""
Quotation endpoints. Nothing is stored: the client keeps the quote and
posts it back for totals or the PDF.

POST /api/quote/items    snapshot a configuration into a priced QuotationItem
POST /api/quote/totals   QuoteDetails -> QuoteTotals
POST /api/quote/pdf      QuoteDetails -> application/pdf
"""

import re
from typing import Annotated, Literal, Optional, Union

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from pydantic import Field, RootModel

from ..catalog import ProfileCatalog, WindowProfileCatalog
from ..dependencies import get_gate_catalog, get_window_catalog
from ..pdf_generator import generate_quote_pdf
from ..pricing_engine import QuotationBuilder, compute_totals
from ..schemas import (
    CamelModel,
    GateConfig,
    QuotationItem,
    QuoteDetails,
    QuoteTotals,
    RateUnit,
    WindowConfig,
)

router = APIRouter(prefix="/quote", tags=["quote"])


class _ItemRequestBase(CamelModel):
    quantity: int = Field(default=1, ge=1)
    rate: float = 0.0
    rate_unit: RateUnit = RateUnit.SQFT
    description: str = ""
    preview_image: Optional[str] = None


class GateItemRequest(_ItemRequestBase):
    product_type: Literal["gate"]
    config: GateConfig


class WindowItemRequest(_ItemRequestBase):
    product_type: Literal["window"]
    config: WindowConfig
    grill_rate: Optional[float] = None
    grill_rate_unit: Optional[RateUnit] = None


class AddItemRequest(RootModel):
    root: Annotated[Union[GateItemRequest, WindowItemRequest], Field(discriminator="product_type")]


@router.post("/items", response_model=QuotationItem)
def add_quote_item(
    req: AddItemRequest,
    gate_catalog: ProfileCatalog = Depends(get_gate_catalog),
    window_catalog: WindowProfileCatalog = Depends(get_window_catalog),
):
    body = req.root
    builder = QuotationBuilder(gate_catalog, window_catalog)
    try:
        return builder.build_item(
            body.product_type,
            body.config,
            quantity=body.quantity,
            rate=body.rate,
            rate_unit=body.rate_unit,
            grill_rate=getattr(body, "grill_rate", None),
            grill_rate_unit=getattr(body, "grill_rate_unit", None),
            description=body.description,
            preview_image=body.preview_image,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/totals", response_model=QuoteTotals)
def quote_totals(details: QuoteDetails):
    return compute_totals(details)


@router.post("/pdf")
def quote_pdf(
    details: QuoteDetails,
    gate_catalog: ProfileCatalog = Depends(get_gate_catalog),
    window_catalog: WindowProfileCatalog = Depends(get_window_catalog),
):
    """
    Render the quotation document.
    Returns: application/pdf
    """
    totals = compute_totals(details)
    pdf_bytes = generate_quote_pdf(details, totals, gate_catalog, window_catalog)
    filename = re.sub(r"\W+", "_", details.meta.title).strip("_") or "Quotation"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}_Quotation.pdf"'},
    )
