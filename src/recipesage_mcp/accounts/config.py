"""Account configuration models and batch validation."""

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, TypeAdapter, ValidationError

from recipesage_mcp.exceptions import ConfigError

REQUIRED_FIELDS = ("id", "email", "password")

_FLAG = TypeAdapter(bool)


class AccountConfig(BaseModel):
    """Credentials for one RecipeSage account.

    Attributes:
        id: Unique identifier chosen by the owner (e.g., "personal", "family").
        email: Login email for the account.
        password: Login password, kept as a SecretStr so it never shows up in reprs.
        is_default: Whether this account is used when a tool call names none.
            Configured under the ``default`` key.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    id: str = Field(..., min_length=1, description="Unique account identifier")
    email: str = Field(..., min_length=1, description="Login email")
    password: SecretStr = Field(..., description="Login password")
    is_default: bool = Field(default=False, alias="default", description="Use as default account")


class AccountInfo(BaseModel):
    """Public view of an account, safe to return from tools."""

    id: str
    email: str
    default: bool = False


def _as_record(entry: AccountConfig | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(entry, AccountConfig):
        return {
            "id": entry.id,
            "email": entry.email,
            "password": entry.password.get_secret_value(),
            "default": entry.is_default,
        }
    if not isinstance(entry, Mapping):
        raise ConfigError(f"Account entry must be a mapping, got {type(entry).__name__}")
    return dict(entry)


def _is_default(record: dict[str, Any]) -> bool:
    # Same coercion the model applies, so "true" or 1 count as a default too
    raw = record.get("default", record.get("is_default", False))
    try:
        return _FLAG.validate_python(raw)
    except ValidationError as e:
        account_id = record.get("id") or "unknown"
        raise ConfigError(f"Invalid account {account_id}: default must be a boolean") from e


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, SecretStr):
        value = value.get_secret_value()
    return isinstance(value, str) and not value.strip()


def validate_account_records(
    entries: Sequence[AccountConfig | Mapping[str, Any]] | None,
) -> list[AccountConfig]:
    """Validate a batch of account records and build AccountConfig models.

    Checks run over the whole batch before any model is built, in this order:
    non-empty batch, at most one default, required fields present, unique ids.

    Args:
        entries: Account records as parsed from the config file, or models.

    Returns:
        Validated accounts in declaration order.

    Raises:
        ConfigError: If any check fails. Messages name the offending account id.
    """
    if not entries:
        raise ConfigError("No accounts configured")

    records = [_as_record(entry) for entry in entries]

    defaults = [r for r in records if _is_default(r)]
    if len(defaults) > 1:
        raise ConfigError("Multiple default accounts found. Only one account can be default.")

    for record in records:
        missing = [name for name in REQUIRED_FIELDS if _is_blank(record.get(name))]
        if missing:
            account_id = record.get("id") or "unknown"
            raise ConfigError(
                f"Missing required field in account: {account_id} ({', '.join(missing)})"
            )

    seen: set[str] = set()
    for record in records:
        account_id = str(record["id"])
        if account_id in seen:
            raise ConfigError(f"Duplicate account id: {account_id}")
        seen.add(account_id)

    accounts = []
    for record in records:
        try:
            accounts.append(AccountConfig.model_validate(record))
        except ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ConfigError(f"Invalid account {record['id']}: {details}") from e
    return accounts
