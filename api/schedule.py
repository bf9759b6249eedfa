from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse
from schemas.schedule.generate import ScheduleRequest
from scheduler.builder import generate
from scheduler.extractor import extract_response
from utils.exporter import XLSX_MIME, export_filename, write_schedule_workbook
from utils.helpers.schedule_roster import unpack_request
from exceptions.custom_errors import *
import traceback
from docs.schedule.roster import schedule_roster_description, schedule_export_description

router = APIRouter(prefix="/schedule", tags=["Roster"])


def _run(request: ScheduleRequest):
    staff, slot_types, constraints, config = unpack_request(request)
    result = generate(staff, slot_types, constraints, config)
    active = [s for s in staff if s.active]
    return result, active, slot_types


# generate roster
@router.post(
    "/generate",
    response_model=dict,
    description=schedule_roster_description,
    summary="Generate Roster",
)
def generate_schedule(request: ScheduleRequest):
    try:
        result, active, _ = _run(request)
        return extract_response(result, active)

    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")


# export roster as xlsx
@router.post(
    "/export",
    description=schedule_export_description,
    summary="Export Roster",
)
def export_schedule(request: ScheduleRequest):
    try:
        result, active, slot_types = _run(request)
        buffer = write_schedule_workbook(result, slot_types, active)

    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")

    return StreamingResponse(
        buffer,
        media_type=XLSX_MIME,
        headers={"Content-Disposition": f'attachment; filename="{export_filename(result)}"'},
    )
