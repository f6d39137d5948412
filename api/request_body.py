"""Request body parsing shared by the POST routes."""

import json
from typing import Any, Dict

from fastapi import HTTPException, Request

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_request_payload(request: Request) -> Dict[str, Any]:
    """Parse a JSON or form-encoded body into a flat dict.

    Unknown content types and non-object JSON give an empty payload.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type == "application/json" or content_type.endswith("+json"):
        if not await request.body():
            return {}
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise HTTPException(status_code=400, detail="Malformed JSON body")
        return payload if isinstance(payload, dict) else {}

    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    return {}
