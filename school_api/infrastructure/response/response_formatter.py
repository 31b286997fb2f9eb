from typing import Any, Dict


def standard_response(data: Any = None, code: int = 200, msg: str = "OK") -> Dict[str, Any]:
    """
    Build the {"code", "data", "msg"} envelope

    Args:
        data: response payload, any JSON-ready value
        code: HTTP status of the response
        msg: human readable message
    """
    return {
        "code": code,
        "data": data,
        "msg": msg,
    }


def error_response(msg: str, code: int = 400) -> Dict[str, Any]:
    """Error envelope; data is always null"""
    return standard_response(data=None, code=code, msg=msg)
