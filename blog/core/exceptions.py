class BlogError(Exception):
    """Base class for every error raised by the data layer."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(BlogError):
    def __init__(self, entity: str, key):
        super().__init__(f"{entity} not found: {key}")
        self.entity = entity
        self.key = key


class DuplicateEmail(BlogError):
    def __init__(self, email: str):
        super().__init__(f"User with this email already exists: {email}")
        self.email = email


class ConstraintViolation(BlogError):
    pass


class ValidationError(BlogError):
    pass
