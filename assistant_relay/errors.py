"""Errores del relay. Cada uno lleva un mensaje apto para el cliente."""
from typing import Optional


class RelayError(Exception):
    public_message = "An unexpected server error occurred."

    def __init__(self, detail: str = "", public_message: Optional[str] = None):
        super().__init__(detail or public_message or self.public_message)
        if public_message:
            self.public_message = public_message


class ConfigurationError(RelayError):
    def __init__(self, detail: str):
        # El nombre de la variable no es secreto: se puede mostrar
        super().__init__(detail, public_message=detail)


class InvalidRequestError(RelayError):
    public_message = "Request body must be a JSON object."


class UpstreamError(RelayError):
    public_message = "Error communicating with the assistant service."

    def __init__(self, operation: str, detail: str = "", status_code: Optional[int] = None):
        self.operation = operation
        self.status_code = status_code
        super().__init__(f"{operation} failed (status={status_code}): {detail}")


class RunFailureError(RelayError):
    def __init__(self, status: str):
        self.status = status
        msg = f"Assistant run failed with status: {status}."
        super().__init__(msg, public_message=msg)


class RunTimeoutError(RelayError, TimeoutError):
    public_message = "Assistant run timed out or did not complete."

    def __init__(self, attempts: int, last_status: str):
        self.attempts = attempts
        self.last_status = last_status
        super().__init__(f"run still '{last_status}' after {attempts} status checks")


class UnexpectedShapeError(RelayError):
    public_message = "Unexpected response from the assistant service."
