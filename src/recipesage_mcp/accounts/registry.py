"""Registry of configured RecipeSage accounts."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from recipesage_mcp.accounts.config import AccountConfig, AccountInfo, validate_account_records
from recipesage_mcp.exceptions import AccountNotFoundError, NoDefaultAccountError

logger = logging.getLogger(__name__)


class AccountRegistry:
    """Holds the validated set of accounts and decides which one applies to a call.

    The registry is built once at startup and passed to every tool. Apart from
    ``set_default`` it only changes through a full ``load``.
    """

    def __init__(self, accounts: Sequence[AccountConfig | Mapping[str, Any]] | None = None) -> None:
        """Initialize the registry, optionally loading accounts right away.

        Args:
            accounts: Account records to load. When omitted the registry starts empty.

        Raises:
            ConfigError: If the given accounts fail validation.
        """
        self._accounts: dict[str, AccountConfig] = {}
        self._default_id: str | None = None
        if accounts is not None:
            self.load(accounts)

    def load(self, accounts: Sequence[AccountConfig | Mapping[str, Any]]) -> None:
        """Validate and index a batch of accounts, replacing the current set.

        If no account is marked default, the first one becomes the default.

        Raises:
            ConfigError: If the batch is empty, has several defaults, has an
                account with a missing id/email/password, or repeats an id.
        """
        validated = validate_account_records(accounts)

        index = {account.id: account for account in validated}
        default_id = next((a.id for a in validated if a.is_default), validated[0].id)

        # Swap both together so readers never see a half-loaded registry
        self._accounts, self._default_id = index, default_id
        logger.info("Loaded %d account(s) (default=%s)", len(index), default_id)

    def resolve(self, account_id: str | None = None) -> AccountConfig:
        """Return the account for a tool call.

        Args:
            account_id: Explicit account id, or None to use the default.

        Raises:
            AccountNotFoundError: If an explicit id matches no account.
            NoDefaultAccountError: If no id was given and there is no default.
        """
        if account_id:
            account = self._accounts.get(account_id)
            if account is None:
                raise AccountNotFoundError(account_id)
            return account

        if self._default_id is None:
            raise NoDefaultAccountError()
        return self._accounts[self._default_id]

    def list_accounts(self) -> list[AccountInfo]:
        """Return all accounts in declaration order, without passwords."""
        default_id = self._default_id
        return [
            AccountInfo(id=a.id, email=a.email, default=a.id == default_id)
            for a in self._accounts.values()
        ]

    def set_default(self, account_id: str) -> None:
        """Make another loaded account the default for the rest of the process.

        Raises:
            AccountNotFoundError: If no account has this id.
        """
        if account_id not in self._accounts:
            raise AccountNotFoundError(account_id)
        self._default_id = account_id
        logger.info("Default account set to %s", account_id)

    @property
    def default_account_id(self) -> str | None:
        return self._default_id

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._accounts

    def __len__(self) -> int:
        return len(self._accounts)
