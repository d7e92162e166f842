"""
Custom Exception Hierarchy
Domain and application-level exceptions
"""


class DomainException(Exception):
    """Base exception for all domain errors"""
    pass


class AuthenticationException(DomainException):
    """Authentication failed"""
    pass


class AuthorizationException(DomainException):
    """User not authorized for this operation"""
    pass


class AgeRequirementException(AuthorizationException):
    """Applicant is below the minimum working age"""

    def __init__(self, minimum_age: int):
        self.minimum_age = minimum_age
        super().__init__(f"You must be at least {minimum_age} years old to apply.")


class ValidationException(DomainException):
    """Data validation failed"""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class RepositoryException(DomainException):
    """Database operation failed"""
    pass


class ResourceNotFoundException(DomainException):
    """Requested resource not found"""

    def __init__(self, resource_type: str, identifier: str):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} not found: {identifier}")


class DuplicateResourceException(DomainException):
    """Resource already exists"""

    def __init__(self, resource_type: str, field: str, value: str):
        self.resource_type = resource_type
        self.field = field
        self.value = value
        super().__init__(f"{resource_type} with {field}='{value}' already exists")


class BusinessRuleException(DomainException):
    """Request is well-formed but violates a marketplace rule"""
    pass


class InvalidTransitionException(BusinessRuleException):
    """Status change not allowed from the current state"""

    def __init__(self, resource_type: str, current: str, target: str):
        self.resource_type = resource_type
        self.current = current
        self.target = target
        super().__init__(f"Cannot move {resource_type} from '{current}' to '{target}'")


class JobPostingLimitException(BusinessRuleException):
    """Employer reached the job limit of their subscription tier"""

    def __init__(self, tier: str, limit: int):
        self.tier = tier
        self.limit = limit
        if limit == 0:
            message = f"The {tier} plan cannot post jobs. Upgrade your subscription."
        else:
            message = f"The {tier} plan allows {limit} active jobs. Upgrade your subscription."
        super().__init__(message)


class ConcurrentModificationException(BusinessRuleException):
    """Row changed between read and write"""

    def __init__(self, resource_type: str, identifier: str):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} {identifier} was modified by another request. Reload and retry.")


class NotificationDeliveryException(DomainException):
    """Notification could not be delivered"""

    def __init__(self, message: str, retryable: bool = True):
        self.retryable = retryable
        super().__init__(message)
