class PersistenceError(Exception):
    """Raised when the record store rejects a write or cannot be reached.

    ``status_code`` carries the upstream HTTP status when one was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"[{self.status_code}] {self.message}"
