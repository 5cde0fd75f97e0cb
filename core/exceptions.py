"""Custom exception classes for the meal pool service.

Defines domain-specific exceptions raised by the generation pipeline and
handled consistently by the FastAPI exception handlers.
"""

from typing import Optional, Any, Dict, List


class AppException(Exception):
    """Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize application exception.

        Args:
            message: Error message.
            status_code: HTTP status code (default: 500).
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: Any):
        """Initialize not found error.

        Args:
            resource: Type of resource (e.g., 'Ingredient', 'Meal').
            identifier: ID or key that was not found.
        """
        message = f"{resource} with id '{identifier}' not found"
        super().__init__(message, status_code=404, details={"resource": resource, "id": identifier})


class ValidationError(AppException):
    """Exception raised when input validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        """Initialize validation error.

        Args:
            message: Validation error message.
            field: Optional field name that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, status_code=400, details=details)


class DatabaseError(AppException):
    """Exception raised when database operations fail."""

    def __init__(self, message: str, operation: Optional[str] = None):
        """Initialize database error.

        Args:
            message: Database error message.
            operation: Optional operation that failed (e.g., 'insert', 'load_pool').
        """
        details = {"operation": operation} if operation else {}
        super().__init__(message, status_code=500, details=details)


class NoRuleFoundError(AppException):
    """Raised when no cultural rule applies to a (country, meal_type) pair.

    Covers an exhausted fallback chain, a cyclic chain and a chain longer
    than the configured maximum depth.
    """

    def __init__(self, country_code: str, meal_type: str, chain: Optional[List[str]] = None, reason: str = "exhausted"):
        chain = list(chain or [])
        message = f"No cultural rule found for country '{country_code}' and meal type '{meal_type}' ({reason})"
        super().__init__(
            message,
            status_code=404,
            details={"country_code": country_code, "meal_type": meal_type, "chain": chain, "reason": reason},
        )
        self.country_code = country_code
        self.meal_type = meal_type
        self.chain = chain
        self.reason = reason


class RuleValidationError(AppException):
    """Raised when cultural rule data is malformed."""

    def __init__(self, message: str, rule_id: Optional[str] = None, cycles: Optional[List[List[str]]] = None):
        details: Dict[str, Any] = {}
        if rule_id:
            details["rule_id"] = rule_id
        if cycles:
            details["cycles"] = cycles
        super().__init__(message, status_code=500, details=details)


class PoolDataError(AppException):
    """Raised when an ingredient record fails validation at pool-load time."""

    def __init__(self, message: str, ingredient_key: Optional[str] = None, field: Optional[str] = None):
        details: Dict[str, Any] = {}
        if ingredient_key:
            details["ingredient_key"] = ingredient_key
        if field:
            details["field"] = field
        super().__init__(message, status_code=500, details=details)


class IngredientPoolExhaustedError(AppException):
    """Raised internally by the generator when a required type has no eligible ingredient.

    The generator catches it and reports a shortfall instead of failing.
    """

    def __init__(self, component_type: str, meal_type: Optional[str] = None):
        message = f"Ingredient pool exhausted for component type '{component_type}'"
        super().__init__(message, status_code=409, details={"component_type": component_type, "meal_type": meal_type})
        self.component_type = component_type


class PersistenceConflictError(AppException):
    """Raised when a meal with identical content already exists in the pool."""

    def __init__(self, content_hash: str, meal_type: Optional[str] = None):
        message = f"Meal with content hash '{content_hash}' already exists"
        super().__init__(message, status_code=409, details={"content_hash": content_hash, "meal_type": meal_type})
        self.content_hash = content_hash


class NoSubstituteFoundError(AppException):
    """Raised when no pool ingredient can safely replace a flagged ingredient."""

    def __init__(self, ingredient_key: str, intolerances: Optional[List[str]] = None):
        intolerances = sorted(intolerances or [])
        message = f"No safe substitute found for ingredient '{ingredient_key}'"
        super().__init__(
            message,
            status_code=404,
            details={"ingredient_key": ingredient_key, "intolerances": intolerances},
        )
        self.ingredient_key = ingredient_key
