"""Programme domain exceptions."""

from app.services.exceptions import ValidationError


class InvalidProgram(ValidationError):
    """Programme does not exist under the department or is hidden."""

    pass
