"""Uniform {code, msg, data} response envelope."""

from typing import Any, Dict, List, Optional


def success(data: Optional[Any] = None, msg: str = "success") -> Dict[str, Any]:
    """Wrap a payload in a success envelope. ``data`` is left out when None."""
    body: Dict[str, Any] = {"code": 200, "msg": msg}
    if data is not None:
        body["data"] = data
    return body


def error(msg: str, code: int = 500) -> Dict[str, Any]:
    return {"code": code, "msg": msg}


def page_data(items: List[Any], total: int, page: int, page_size: int) -> Dict[str, Any]:
    """Paginated list payload in the shape the frontend tables expect."""
    return {
        "list": items,
        "total": total,
        "page": page,
        "pageSize": page_size,
    }
