# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service-level exceptions. Services raise these; controllers and the global
handlers in main.py turn them into JSON error bodies.
"""


class MemberNotFoundError(KeyError):
    """No row matches the requested (zone, name) identity."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class RowStoreError(RuntimeError):
    """The spreadsheet (or other row store) call itself failed."""


class AuthenticationError(Exception):
    """Missing, malformed, expired or otherwise rejected credentials."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)
        self.message = message
