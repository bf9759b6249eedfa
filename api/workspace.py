from typing import List
from fastapi import APIRouter, HTTPException
from exceptions.custom_errors import *
from utils.storage import (
    Preset,
    RosterWorkspace,
    apply_preset,
    delete_preset,
    find_preset,
    load_workspace,
    save_workspace,
    upsert_preset,
)

router = APIRouter(prefix="/workspace", tags=["Workspace"])


def _store(workspace: RosterWorkspace) -> RosterWorkspace:
    try:
        save_workspace(workspace)
    except OSError as e:
        raise HTTPException(status_code=500, detail=f"Could not store workspace: {e}")
    return workspace


@router.get("", response_model=RosterWorkspace, summary="Load Workspace")
def get_workspace():
    """Return the stored staff, services, constraints, config, tier defaults and presets."""
    return load_workspace()


@router.put("", response_model=RosterWorkspace, summary="Save Workspace")
def put_workspace(workspace: RosterWorkspace):
    return _store(workspace)


# presets
@router.get("/presets", response_model=List[Preset], summary="List Presets")
def list_presets():
    return load_workspace().presets


@router.post("/presets", response_model=Preset, status_code=201, summary="Save Preset")
def save_preset(preset: Preset):
    """Store a named preset; an existing preset with the same name is replaced."""
    _store(upsert_preset(load_workspace(), preset))
    return preset


@router.get("/presets/{name}", response_model=Preset, summary="Get Preset")
def get_preset(name: str):
    try:
        return find_preset(load_workspace(), name)
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))


@router.delete("/presets/{name}", status_code=204, summary="Delete Preset")
def remove_preset(name: str):
    try:
        _store(delete_preset(load_workspace(), name))
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))


@router.post("/presets/{name}/load", response_model=RosterWorkspace, summary="Load Preset")
def load_preset(name: str):
    """Replace the workspace's staff, services and constraints with the preset's and store the result."""
    try:
        return _store(apply_preset(load_workspace(), name))
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
