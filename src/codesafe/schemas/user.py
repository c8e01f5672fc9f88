"""UserConfig: forgiving, minimal user-facing configuration.

Users only specify what they want to override from the expert defaults.
Validation is lenient: flat aliases (TRUTHY, BLANK_TOKENS, ...), a single
string where a list is expected, and lower-case level names are accepted.
"""

from typing import Any, Optional

from pydantic import AliasChoices, ConfigDict, Field, field_validator

from codesafe.schemas.base import CodesafeBaseModel

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _as_token_list(v):
    if v is None:
        return v
    if isinstance(v, str):
        return [part.strip() for part in v.split(",") if part.strip()]
    return list(v)


def _as_level(v):
    if v is None:
        return v
    level = str(v).strip().upper()
    if level == "WARN":
        level = "WARNING"
    if level not in _LEVELS:
        raise ValueError(f"Unknown log level: {v!r}")
    return level


class UserConfig(CodesafeBaseModel):
    """User-facing overrides with aliases."""

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    truthy_tokens: Optional[list[str]] = Field(
        None, validation_alias=AliasChoices("truthy_tokens", "TRUTHY", "truthy")
    )
    falsy_tokens: Optional[list[str]] = Field(
        None, validation_alias=AliasChoices("falsy_tokens", "FALSY", "falsy")
    )
    blank_tokens: Optional[list[str]] = Field(
        None, validation_alias=AliasChoices("blank_tokens", "BLANK_TOKENS", "blank")
    )
    absorbed_level: Optional[str] = Field(
        None, validation_alias=AliasChoices("absorbed_level", "ABSORBED_LEVEL")
    )
    unhandled_level: Optional[str] = Field(
        None, validation_alias=AliasChoices("unhandled_level", "UNHANDLED_LEVEL")
    )
    handler_level: Optional[str] = Field(
        None, validation_alias=AliasChoices("handler_level", "HANDLER_LEVEL")
    )

    @field_validator("truthy_tokens", "falsy_tokens", "blank_tokens", mode="before")
    @classmethod
    def split_tokens(cls, v):
        """Accept a comma-separated string for token lists."""
        return _as_token_list(v)

    @field_validator("absorbed_level", "unhandled_level", "handler_level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Accept lower-case names and WARN."""
        return _as_level(v)

    def to_internal_overrides(self) -> dict[str, Any]:
        """Convert the flat user fields into the nested ParamConfig layout."""
        overrides: dict[str, Any] = {}

        parse = {
            key: getattr(self, key)
            for key in ("truthy_tokens", "falsy_tokens")
            if getattr(self, key) is not None
        }
        if parse:
            overrides["parse"] = parse

        if self.blank_tokens is not None:
            overrides["check"] = {"blank_tokens": self.blank_tokens}

        levels = {
            key: getattr(self, key)
            for key in ("absorbed_level", "unhandled_level", "handler_level")
            if getattr(self, key) is not None
        }
        if levels:
            overrides["logging"] = levels

        return overrides
