"""
Wire models for Honeybadger notices.

An ErrorReport is assembled once per reported exception, serialized to JSON
and discarded after it is sent. Every model is frozen.

Optional blocks follow two different rules:

- ``request.context`` and ``request.params`` are dropped from the JSON when
  absent.
- ``request.cgi_data`` values are kept as ``null`` when absent, so the CGI
  mapping always carries the same key set.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer

from honeybadger_reporter.__metadata__ import get_metadata


class _NoticeModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Notifier(_NoticeModel):
    name: str
    url: str
    version: str

    @classmethod
    def default(cls) -> Notifier:
        return cls(**get_metadata())


class StackFrame(_NoticeModel):
    number: int = 0
    file: str | None = None
    method: str = "unknown"


class ErrorInfo(_NoticeModel):
    # "class" is a Python keyword; the alias keeps the literal JSON key.
    error_class: str = Field(alias="class")
    message: str
    backtrace: list[StackFrame] = Field(default_factory=list)


class UserContext(_NoticeModel):
    username: str | None = None
    user_id: Any = None


class RequestInfo(_NoticeModel):
    url: str
    form: dict[str, str | list[str]] = Field(default_factory=dict)
    context: UserContext | None = None
    cgi_data: dict[str, str | None]
    params: dict[str, Any] | None = None

    @model_serializer(mode="wrap")
    def _drop_absent_blocks(self, handler):
        data = handler(self)
        for key in ("context", "params"):
            if data.get(key) is None:
                data.pop(key, None)
        return data


class ProjectRoot(_NoticeModel):
    path: str


class ServerInfo(_NoticeModel):
    project_root: ProjectRoot
    environment_name: str
    hostname: str


class ErrorReport(_NoticeModel):
    notifier: Notifier = Field(default_factory=Notifier.default)
    error: ErrorInfo
    request: RequestInfo | None = None
    server: ServerInfo

    def to_payload(self) -> dict[str, Any]:
        """Return the notice as plain JSON-compatible data."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        """Serialize the notice for delivery."""
        return self.model_dump_json(by_alias=True)
