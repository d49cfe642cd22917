"""Alexa skill endpoint."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from cookidoo_skill.services.skill_handler import SkillHandler, SkillIdMismatchError

from ..dependencies import get_skill_handler

router = APIRouter()


@router.post("/alexa")
async def handle_alexa_request(
    payload: Annotated[Any, Body()],
    handler: Annotated[SkillHandler, Depends(get_skill_handler)],
) -> dict[str, Any]:
    """Run one Alexa envelope through the skill and return the response envelope."""
    try:
        return await handler.handle_event(payload)
    except SkillIdMismatchError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc


__all__ = ["router"]
