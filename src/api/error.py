"""API error envelope

ClientError carries a use-case Error to the exception handlers in app.py.
Bodies are {"error": "<message>"}; the stable error code travels in the
X-Error-Code header.
"""

import logging
from typing import Optional
from fastapi import status
from fastapi.responses import JSONResponse
from libs.result import Error

logger = logging.getLogger(__name__)

ERROR_CODE_HEADER = "X-Error-Code"

ERROR_STATUS_CODES = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_AMOUNT": status.HTTP_400_BAD_REQUEST,
    "INVALID_SIGNATURE": status.HTTP_400_BAD_REQUEST,
    "INVALID_WEBHOOK": status.HTTP_400_BAD_REQUEST,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "TENANT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "UPSTREAM_ERROR": status.HTTP_502_BAD_GATEWAY,
}


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message},
        headers={ERROR_CODE_HEADER: code},
    )


class ClientError(Exception):
    def __init__(self, error: Error, status_code: Optional[int] = None):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code or ERROR_STATUS_CODES.get(
            error.code, status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    def to_response(self) -> JSONResponse:
        if self.error.reason:
            logger.info(f"{self.error.code} ({self.status_code}): {self.error.reason}")
        return error_response(self.status_code, self.error.code, self.error.message)
