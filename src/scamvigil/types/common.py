"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal

type ScanType = Literal["profile", "link", "email", "message"]
type NotificationKind = Literal["success", "warning", "error", "info"]
type RpcVerb = Literal["query", "mutation", "action"]

type JsonScalar = str | int | float | bool | None
type JsonValue = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
type JsonObject = dict[str, JsonValue]
