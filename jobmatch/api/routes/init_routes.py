"""
Init Route

POST /init - Resolve a firebase id to its employer or jobseeker row
"""

import asyncio

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from jobmatch.core.errors import send_error, send_json
from jobmatch.db.postgres import Database, get_database
from jobmatch.schemas.schemas import InitRequest
from jobmatch.utils.validators import escape, require_fields

router = APIRouter(tags=["Init"])


@router.post("/init")
async def init_user(data: InitRequest, db: Database = Depends(get_database)):
    """
    Look the firebase id up in both account tables at once.

    Employer wins if both match. The row gains a user_type key.
    """
    firebase_id = escape(data.firebaseID)
    require_fields(firebase_id)

    params = {"fb_id": firebase_id}
    employer, jobseeker = await asyncio.gather(
        run_in_threadpool(db.fetch_one, "SELECT * FROM employer WHERE fb_id = :fb_id", params),
        run_in_threadpool(db.fetch_one, "SELECT * FROM jobseeker WHERE fb_id = :fb_id", params),
    )

    if employer is None and jobseeker is None:
        return JSONResponse(
            status_code=404,
            content=send_error(404, f"User with firebaseID = {firebase_id} not found.")
        )

    row = employer if employer is not None else jobseeker
    row["user_type"] = "employer" if employer is not None else "jobseeker"
    return send_json(200, row)
