import uuid

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def generate_external_id() -> str:
    """Public identifier handed out instead of the internal integer id"""
    return uuid.uuid4().hex
