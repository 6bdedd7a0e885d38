"""
Failures raised by the order creation workflow.

Each error carries the HTTP status it maps to, a short message naming the
operation that failed, and every individual cause as an ``ErrorDetail``
so callers can branch on ``code`` and fix all problems in one retry.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    field: Optional[str] = None
    code: str
    message: str


class OrderWorkflowError(Exception):
    status_code = 500
    message = "Failed to create order"

    def __init__(self, errors: Optional[List[ErrorDetail]] = None, message: Optional[str] = None):
        self.errors = list(errors or [])
        if message:
            self.message = message
        super().__init__(self.message)

    def to_response(self) -> Dict[str, Any]:
        return {
            "status": "error",
            "message": self.message,
            "errors": [e.model_dump() for e in self.errors],
        }


class InputValidationError(OrderWorkflowError):
    """Missing or malformed request fields. Nothing was read or written."""
    status_code = 400
    message = "Validation failed"


class CustomerNotFoundError(OrderWorkflowError):
    status_code = 404
    message = "Customer not found"

    def __init__(self, customer_id: int):
        self.customer_id = customer_id
        super().__init__([
            ErrorDetail(
                field="customer_id",
                code="not_found",
                message=f"Customer with ID {customer_id} not found",
            )
        ])

    def to_response(self) -> Dict[str, Any]:
        body = super().to_response()
        body["customer_id"] = self.customer_id
        return body


class BusinessRuleError(OrderWorkflowError):
    """Unknown products or insufficient stock, detected before any write."""
    status_code = 400
    message = "Product validation failed"


class PersistenceError(OrderWorkflowError):
    """Writing the order failed after it started; the transaction was rolled back."""
    status_code = 500
    message = "Failed to create order"

    def __init__(self, errors: Optional[List[ErrorDetail]] = None, error: str = ""):
        super().__init__(errors)
        self.error = error or "; ".join(e.message for e in self.errors)

    def to_response(self) -> Dict[str, Any]:
        body = super().to_response()
        body["error"] = self.error
        return body
