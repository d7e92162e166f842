"""
Email Value Object
Immutable, lower-cased email with validation
"""
import re
from dataclasses import dataclass

from core.exceptions import ValidationException


EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


@dataclass(frozen=True)
class Email:
    """Email value object with validation"""

    value: str

    def __post_init__(self):
        normalized = self.value.strip().lower()
        if not self.is_valid(normalized):
            raise ValidationException("email", f"Invalid email format: {self.value}")
        object.__setattr__(self, "value", normalized)

    @staticmethod
    def is_valid(email: str) -> bool:
        return bool(EMAIL_PATTERN.match(email))

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Email({self.value})"
