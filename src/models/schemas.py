from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.schema import Column
from sqlalchemy.types import Integer, String


class Base(DeclarativeBase):
    pass


class Game(Base):
    __tablename__ = "games"
    # ids are assigned by the store (max + 1), never by SQLite
    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String, nullable=False)
    genre = Column(String, nullable=True)


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String, unique=True, nullable=False)
    password = Column(String, nullable=False)  # stored and compared in plain text
