"""Custom exceptions for recipesage-mcp."""


class RecipeSageMCPError(Exception):
    """Base exception for recipesage-mcp."""


class ConfigError(RecipeSageMCPError):
    """Raised when the account configuration is missing, malformed or incomplete."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        line: int | None = None,
        col: int | None = None,
    ) -> None:
        self.file_path = file_path
        self.line = line
        self.col = col
        full_message = message
        if file_path:
            location = f" in {file_path}"
            if line is not None:
                location += f" at line {line}"
                if col is not None:
                    location += f", column {col}"
            full_message = f"Configuration error{location}: {message}"
        super().__init__(full_message)


class AccountNotFoundError(RecipeSageMCPError):
    """Raised when a requested account is not found."""

    def __init__(self, account_id: str) -> None:
        self.account_id = account_id
        super().__init__(f"Account not found: {account_id}")


class NoDefaultAccountError(RecipeSageMCPError):
    """Raised when no account was given and no default can be inferred."""

    def __init__(self) -> None:
        super().__init__("No default account configured")


class AuthenticationError(RecipeSageMCPError):
    """Raised when the credential exchange for an account is rejected or unreachable."""

    def __init__(self, account_id: str, reason: str) -> None:
        self.account_id = account_id
        self.reason = reason
        super().__init__(f"Authentication failed for account {account_id}: {reason}")


class UpstreamError(RecipeSageMCPError):
    """Raised when the recipe service answers with a non-success status or a malformed body."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class ResourceNotFoundError(RecipeSageMCPError):
    """Raised when an operation cannot locate a resource it depends on."""


class InvalidParameterError(RecipeSageMCPError):
    """Raised when tool parameters fail a local check before any network call."""
