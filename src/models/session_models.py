from datetime import datetime

from pydantic import BaseModel


class SessionModel(BaseModel):
    """Server side record of a logged-in browser, referenced by the cookie token."""
    session_id: str
    username: str
    created_at: datetime
    expires_at: datetime
