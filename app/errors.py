class TypemasterError(Exception):
    """Base for every error raised by the typing engine."""


class InvalidInput(TypemasterError):
    pass


class SubmissionError(TypemasterError):
    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.details = list(details or [])
