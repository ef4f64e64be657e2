"""Access Code Routes - format validation for purchased access codes.

Endpoints:
- POST /api/validate-code - Check an access code before the details form is unlocked
"""
from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel
from typing import Optional
from services.access_codes import is_valid_access_code
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["access-codes"])


class ValidateCodeRequest(BaseModel):
    """Request to validate an access code."""
    code: Optional[str] = None


class ValidateCodeResponse(BaseModel):
    valid: bool
    message: str
    code: str


@router.post("/validate-code", response_model=ValidateCodeResponse)
async def validate_code(body: ValidateCodeRequest):
    """
    Validate access code format.

    Format check only (WN- prefix, at least 10 characters); codes are not looked up
    anywhere, so any well-formed string is accepted.
    """
    code = body.code

    if not code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Access code is required"
        )

    if not is_valid_access_code(code):
        logger.info("Access code rejected: length=%s", len(code))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"valid": False, "error": "Invalid access code format"}
        )

    return ValidateCodeResponse(
        valid=True,
        message="Access code validated successfully",
        code=code,
    )
