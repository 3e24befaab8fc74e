"""
Patterns Route - Stored detections and ad-hoc detection
"""

from fastapi import APIRouter

from habitloop import service
from habitloop.analysis.pattern_detector import detect_patterns
from habitloop.api.errors import unwrap
from habitloop.api.schemas import DetectRequest


router = APIRouter()


@router.get("")
async def list_patterns():
    return unwrap(service.list_patterns())


@router.post("/detect")
async def detect(body: DetectRequest):
    """Run the detector on text without storing anything."""
    detections = detect_patterns(body.text)
    return {
        "success": True,
        "patterns": [d.to_dict() for d in detections],
        "count": len(detections),
    }
