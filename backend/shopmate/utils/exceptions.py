"""
Custom business exceptions for the HTTP surface.

WHAT: Domain-specific exceptions that map to HTTP status codes
WHY: Consistent error handling across all API endpoints
HOW: Custom exception classes with error codes and messages

The decision engine itself never raises on chat input; these only
surface at the service boundary.
"""

from typing import Optional, List, Dict, Any


class BusinessException(Exception):
    """Base class for business logic exceptions."""

    def __init__(self, message: str, code: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details


class ConversationNotFoundException(BusinessException):
    """Raised when a conversation id is unknown or expired."""

    def __init__(self, conversation_id: str):
        super().__init__(
            message=f"Conversation not found: {conversation_id}",
            code="CONVERSATION_NOT_FOUND",
            details={"conversation_id": conversation_id}
        )


class InvalidProductException(BusinessException):
    """Raised when a product cannot be negotiated on."""

    def __init__(self, product_id: str, reason: str):
        super().__init__(
            message=f"Product {product_id} cannot be negotiated: {reason}",
            code="INVALID_PRODUCT",
            details={"product_id": product_id, "reason": reason}
        )


class NegotiationNotActiveException(BusinessException):
    """Raised when reading the negotiation of an idle conversation."""

    def __init__(self, conversation_id: str):
        super().__init__(
            message=f"No active negotiation for conversation {conversation_id}",
            code="NEGOTIATION_NOT_ACTIVE",
            details={"conversation_id": conversation_id}
        )


class ValidationException(BusinessException):
    """Raised for validation errors."""

    def __init__(self, message: str, field_errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"field_errors": field_errors} if field_errors else None
        )
