"""
Shared error response schemas for OpenAPI documentation.

Import these in endpoint files to add consistent error responses.

Note: These definitions use inline examples rather than model references
to avoid circular imports with the exceptions module.
"""

from typing import Dict, Any


def _problem(status: int, title: str, code: str, detail: str) -> Dict[str, Any]:
    return {
        "application/problem+json": {
            "example": {
                "type": f"/problems/{code.lower().replace('_', '-')}",
                "title": title,
                "status": status,
                "detail": detail,
                "code": code,
                "timestamp": "2026-01-29T10:30:00Z",
                "trace_id": "abc123def456"
            }
        }
    }


# Reusable response definitions for OpenAPI
ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {
        "description": "Bad Request - Entity is in the wrong lifecycle state",
        "content": _problem(400, "Bad Request", "BIZ_001", "Job is already completed"),
    },
    404: {
        "description": "Not Found - Referenced job, service record or equipment does not exist",
        "content": _problem(404, "Not Found", "RES_001", "Service record not found"),
    },
    422: {
        "description": "Validation Error - Malformed identifier, length or range violation",
        "content": _problem(422, "Validation Error", "VAL_001", "Request validation failed"),
    },
    500: {
        "description": "Internal Server Error",
        "content": _problem(500, "Internal Server Error", "SRV_001", "An unexpected error occurred"),
    },
    502: {
        "description": "Bad Gateway - Photo store or database failure",
        "content": _problem(502, "Bad Gateway", "EXT_001", "Photo store service error: upload failed"),
    },
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response definitions for specified status codes.

    Usage in endpoint:
        @router.get(
            "/{id}",
            responses=get_error_responses(404, 422)
        )
    """
    return {
        code: ERROR_RESPONSES[code]
        for code in status_codes
        if code in ERROR_RESPONSES
    }


# Common response combinations for convenience
QUERY_ERROR_RESPONSES = get_error_responses(422, 500)
READ_ERROR_RESPONSES = get_error_responses(404, 422, 500)
TRANSITION_ERROR_RESPONSES = get_error_responses(400, 404, 422, 500, 502)
