# market/schemas/common.py
from .base import BaseSchema


class MessageOut(BaseSchema):
    message: str


class HealthOut(BaseSchema):
    status: str
