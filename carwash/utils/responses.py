# carwash/utils/responses.py
"""Response envelopes shared by all routers"""
from typing import Any, Dict, Optional


def api_response(message: str, data: Any = None, meta: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Build a {"success": true, ...} body"""
    body: Dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    if meta:
        body["meta"] = meta
    return body


def error_body(message: str, errors: Any = None, code: Optional[str] = None) -> Dict[str, Any]:
    """Build a {"success": false, ...} body"""
    body: Dict[str, Any] = {"success": False, "message": message}
    if code:
        body["code"] = code
    if errors:
        body["errors"] = errors
    return body


def paginate_meta(page: int, limit: int, total: int) -> Dict[str, int]:
    pages = (total + limit - 1) // limit if limit else 0
    return {"page": page, "limit": limit, "total": total, "pages": pages}
