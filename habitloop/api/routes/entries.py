"""
Entries Route - Log activity and run pattern analysis

Provides endpoints for:
- Logging a new activity entry (optional base64 screenshot)
- Listing entries and fetching one
- Analyzing an entry and storing its detected patterns
"""

import base64
import binascii
import logging

from fastapi import APIRouter, HTTPException

from habitloop import service
from habitloop.api.errors import unwrap
from habitloop.api.schemas import EntryCreate

logger = logging.getLogger(__name__)


router = APIRouter()


@router.post("", status_code=201)
async def create_entry(body: EntryCreate):
    """Log one snippet of online activity."""
    image = None
    if body.image_base64:
        try:
            image = base64.b64decode(body.image_base64, validate=True)
        except (binascii.Error, ValueError):
            raise HTTPException(status_code=400, detail="Image must be base64-encoded")

    return unwrap(
        service.log_entry(
            source_label=body.source_label,
            notes=body.notes,
            timestamp=body.timestamp,
            image=image,
            external_blob=body.external_blob,
        )
    )


@router.get("")
async def list_entries():
    return unwrap(service.list_entries())


@router.get("/{entry_id}")
async def get_entry(entry_id: int):
    return unwrap(service.get_entry(entry_id), status_code=404)


@router.post("/{entry_id}/analyze")
async def analyze_entry(entry_id: int):
    """
    Detect patterns in an entry and store them.

    Succeeds with an empty pattern list and a message when nothing was found.
    """
    return unwrap(service.analyze_entry(entry_id), status_code=404)
