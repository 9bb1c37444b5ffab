"""
api/routes/options.py -- Shared design option catalogue.

Routes:
  GET  /api/options  -- every option (authenticated)
  POST /api/options  -- replace the whole catalogue (designer)
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from api.models import OptionResponse, OptionsSaveRequest, OptionsSaveResponse
from auth.dependencies import require_authenticated, require_designer
from auth.models import User
from catalogue.models import OptionGroup
from catalogue.store import OptionStore

logger = logging.getLogger("designdesk.catalogue")

router = APIRouter()


@router.get("/options", response_model=list[OptionResponse], dependencies=[Depends(require_authenticated)])
def list_options(request: Request) -> list[OptionResponse]:
    catalogue: OptionStore = request.app.state.catalogue
    options = catalogue.list_all()
    logger.debug("Options fetched: %d", len(options))
    return [OptionResponse.from_option(o) for o in options]


@router.post("/options", response_model=OptionsSaveResponse)
def save_options(
    request: Request,
    body: OptionsSaveRequest,
    current_user: User = Depends(require_designer),
) -> OptionsSaveResponse:
    """Replace every existing option with the submitted design preferences."""
    catalogue: OptionStore = request.app.state.catalogue
    groups = [OptionGroup(topic_name=g.topic_name, options=list(g.options)) for g in body.design_preferences]
    saved = catalogue.replace_all(groups)
    logger.info("Designer %s saved %d options in %d groups", current_user.id, len(saved), len(groups))
    return OptionsSaveResponse(saved_options=[OptionResponse.from_option(o) for o in saved])
