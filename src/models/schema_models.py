from pydantic import BaseModel
from typing import Optional


class GameSchema(BaseModel):
    id: int
    title: str
    genre: Optional[str] = None

    class Config:
        from_attributes = True


class UserSchema(BaseModel):
    """Administrator as exposed to the rest of the app. The password never leaves the store."""
    id: int
    username: str

    class Config:
        from_attributes = True
