from pydantic import BaseModel
from typing import Optional


class GameModel(BaseModel):
    """Request body for creating or replacing a game."""
    title: str
    genre: Optional[str] = None


class LoginModel(BaseModel):
    username: str
    password: str


class MessageModel(BaseModel):
    message: str
