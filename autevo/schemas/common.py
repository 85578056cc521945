# autevo/schemas/common.py
import math
from pydantic import BaseModel


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit) if limit else 0)


def reject_null(value):
    """Partial updates may omit a required column but never null it"""
    if value is None:
        raise ValueError("Field may not be null")
    return value
