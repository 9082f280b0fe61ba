"""
AI design suggestion endpoint.

POST /api/ai/suggest   {prompt, config?} -> validated suggestion + merged config
  503 when no Gemini key is configured
  422 when the model returned nothing usable
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ..catalog import ProfileCatalog
from ..dependencies import get_gate_catalog
from ..schemas import CamelModel, GateConfig
from ..suggestions import GateSuggestion, apply_suggestion, is_ai_available, request_suggestion

router = APIRouter(prefix="/ai", tags=["ai"])


class SuggestRequest(CamelModel):
    prompt: str
    config: Optional[GateConfig] = None


class SuggestResponse(CamelModel):
    suggestion: GateSuggestion
    config: Optional[GateConfig] = None


@router.post("/suggest", response_model=SuggestResponse)
def suggest_design(req: SuggestRequest, catalog: ProfileCatalog = Depends(get_gate_catalog)):
    if not is_ai_available():
        raise HTTPException(status_code=503, detail="AI suggestions are not configured")
    suggestion = request_suggestion(req.prompt, req.config, catalog)
    if suggestion is None:
        raise HTTPException(status_code=422, detail="No valid design suggestion was returned")
    merged = apply_suggestion(req.config, suggestion) if req.config is not None else None
    return SuggestResponse(suggestion=suggestion, config=merged)
