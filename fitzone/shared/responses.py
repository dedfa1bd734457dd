"""Response envelope helpers shared by all routers"""

import math
from typing import Any, Optional

from fastapi.encoders import jsonable_encoder


def success(data: Any = None, message: Optional[str] = None, **extra) -> dict:
    """Build the standard `{success, data, message?}` envelope"""
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = jsonable_encoder(data)
    body.update(jsonable_encoder(extra))
    return body


def pagination(page: int, limit: int, total: int) -> dict:
    pages = math.ceil(total / limit) if limit else 0
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": pages,
        "has_more": page < pages,
    }


def paginate_query(query, page: int, limit: int) -> tuple[list, dict]:
    """Apply offset/limit to a SQLAlchemy query and return (items, pagination)"""
    page = max(page, 1)
    limit = max(limit, 1)
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return items, pagination(page, limit, total)
