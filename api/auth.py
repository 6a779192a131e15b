"""X-API-Key check shared by the mutating and transcription routes."""

import secrets
from typing import Optional

from fastapi import Header, HTTPException

from api.config import APIConfig


async def verify_api_key(
    x_api_key: Optional[str] = Header(None),
) -> Optional[str]:
    """Reject requests whose X-API-Key does not match API_KEY.

    Leaving API_KEY unset disables the check, which is the local development
    setup. The health and root endpoints never require a key.
    """
    expected = APIConfig.load().api_key
    if not expected:
        return None
    if not x_api_key or not secrets.compare_digest(x_api_key.encode(), expected.encode()):
        raise HTTPException(status_code=401, detail="Invalid or missing API key")
    return x_api_key
