# Copyright 2025-present DatusAI, Inc.
# Licensed under the Apache License, Version 2.0.
# See http://www.apache.org/licenses/LICENSE-2.0 for details.

from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union
from urllib.parse import urlsplit

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError

HTTP_PORT = 8123
HTTPS_PORT = 8443

ModelT = TypeVar("ModelT", bound=BaseModel)


def _load(model: Type[ModelT], data: Union[ModelT, Mapping[str, Any], None]) -> ModelT:
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(dict(data or {}))
    except PydanticValidationError as exc:
        errors = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or model.__name__}: {err['msg']}" for err in exc.errors()
        )
        raise ValidationError(f"Invalid {model.__name__}: {errors}") from exc


class ClickHouseCredentials(BaseModel):
    """Decrypted ClickHouse credentials as handed over by the host secret store.

    The secret store uses ``url`` and ``user``; ``host`` and ``username`` are
    accepted as well. ``host`` may be a bare host name or a full URL; a URL path
    is kept as the client's proxy path prefix, a query string is ignored.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    host: str = Field(..., validation_alias=AliasChoices("url", "host"), description="ClickHouse URL or host name")
    database: str = Field(default="default", description="Default database")
    username: str = Field(default="default", validation_alias=AliasChoices("user", "username"))
    password: str = Field(default="", repr=False)

    @field_validator("host")
    @classmethod
    def _host_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("host must not be empty")
        return value

    @field_validator("database", "username", "password", mode="before")
    @classmethod
    def _none_as_default(cls, value: Any, info) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @classmethod
    def from_mapping(cls, data: Union["ClickHouseCredentials", Mapping[str, Any], None]) -> "ClickHouseCredentials":
        return _load(cls, data)

    def client_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``clickhouse_connect.get_client``."""
        target = self.host if "://" in self.host else f"http://{self.host}"
        parts = urlsplit(target)
        secure = parts.scheme.lower() == "https"
        try:
            port: Optional[int] = parts.port
        except ValueError as exc:
            raise ValidationError(f"Invalid ClickHouse URL {self.host!r}: {exc}") from exc
        kwargs: Dict[str, Any] = {
            "host": parts.hostname or self.host,
            "port": port or (HTTPS_PORT if secure else HTTP_PORT),
            "secure": secure,
            "database": self.database,
            "username": self.username,
            "password": self.password,
        }
        path = parts.path.rstrip("/")
        if path:
            kwargs["proxy_path"] = path
        return kwargs


class QueryOptions(BaseModel):
    """The ``options`` collection of the query operation."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    schema_description: str = Field(default="", alias="schemaDescription")
    read_only_mode: bool = Field(default=False, alias="readOnlyMode")
    max_results: int = Field(default=0, ge=0, alias="maxResults")

    @field_validator("schema_description", "read_only_mode", "max_results", mode="before")
    @classmethod
    def _none_as_default(cls, value: Any, info) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @classmethod
    def from_mapping(cls, data: Union["QueryOptions", Mapping[str, Any], None]) -> "QueryOptions":
        return _load(cls, data)
