from __future__ import annotations

from fastapi import APIRouter, Request

from models.profile import ProfileRecord
from models.ui_state import UIState
from services.preference_store import PreferenceStore
from services.profile_service import profile_service

router = APIRouter()


@router.get("/profile", response_model=ProfileRecord)
async def get_profile() -> ProfileRecord:
    return profile_service.get_profile()


@router.get("/preferences", response_model=UIState)
async def get_preferences(request: Request) -> UIState:
    return PreferenceStore.from_request(request).state
