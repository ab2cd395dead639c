from typing import Any, Dict, Optional


class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)


class ValidationError(AppException):
    """Request data that fails a business rule (not a schema error)."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=422,
            error_code="VALIDATION_ERROR",
            details=details
        )


class RoleNotInChainError(AppException):
    def __init__(self, role: str, chain_roles: list):
        super().__init__(
            message=f"Role '{role}' is not part of this approval chain ({' -> '.join(chain_roles)})",
            status_code=409,
            error_code="ROLE_NOT_IN_CHAIN",
            details={"role": role, "chain": chain_roles}
        )


class OutOfOrderApprovalError(AppException):
    def __init__(self, role: str, expected_role: Optional[str]):
        super().__init__(
            message=f"Role '{role}' cannot act yet; awaiting '{expected_role}'",
            status_code=409,
            error_code="OUT_OF_ORDER_APPROVAL",
            details={"role": role, "expected_role": expected_role}
        )


class InvalidTransitionError(AppException):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=409,
            error_code="INVALID_TRANSITION",
            details=details
        )


class EmployeeNotFoundError(AppException):
    def __init__(self, employee_id: str):
        super().__init__(
            message=f"Employee '{employee_id}' not found",
            status_code=404,
            error_code="EMPLOYEE_NOT_FOUND",
            details={"employee_id": employee_id}
        )


class RequestNotFoundError(AppException):
    def __init__(self, kind: str, request_id: str):
        super().__init__(
            message=f"{kind.capitalize()} request '{request_id}' not found",
            status_code=404,
            error_code="REQUEST_NOT_FOUND",
            details={"kind": kind, "request_id": request_id}
        )
