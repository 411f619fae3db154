import json
from typing import Any, Dict, Mapping, MutableMapping, Optional

from pydantic import BaseModel, Field, field_validator


class Transaction(BaseModel):
    """A typed view of one Dredd transaction.

    Dredd hands hooks a plain mapping (``name``, ``fullPath``, ``request`` and
    ``expected``). Hooks build a Transaction from it, adjust headers, body or the
    resolved path, then write the changes back with ``write_back``.
    """

    name: str = Field(default="")
    method: str = Field(default="GET")
    full_path: str = Field(default="")
    uri: str = Field(default="")
    headers: Dict[str, str] = Field(default_factory=dict)
    body: str = Field(default="")
    expected_status_code: Optional[int] = Field(default=None)

    @field_validator("expected_status_code", mode="before")
    @classmethod
    def coerce_status_code(cls, value: Any) -> Optional[int]:
        """Dredd reports the expected status as a string; it is only used for logging."""
        if value is None or value == "":
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @classmethod
    def from_dredd(cls, raw: Mapping[str, Any]) -> "Transaction":
        request = raw.get("request") or {}
        expected = raw.get("expected") or {}
        return cls(
            name=raw.get("name") or "",
            method=request.get("method") or "GET",
            full_path=raw.get("fullPath") or "",
            uri=request.get("uri") or "",
            headers=dict(request.get("headers") or {}),
            body=request.get("body") or "",
            expected_status_code=expected.get("statusCode"),
        )

    def write_back(self, raw: MutableMapping[str, Any]) -> None:
        """Copies the mutable fields that changed back into Dredd's mapping.

        Fields that were not touched are left as they are, so an unchanged
        transaction stays byte-identical.
        """
        original = Transaction.from_dredd(raw)
        request_changes: Dict[str, Any] = {}
        if self.headers != original.headers:
            request_changes["headers"] = dict(self.headers)
        if self.body != original.body:
            request_changes["body"] = self.body
        if self.uri != original.uri:
            request_changes["uri"] = self.uri

        if request_changes:
            raw.setdefault("request", {}).update(request_changes)
        if self.full_path != original.full_path:
            raw["fullPath"] = self.full_path

    def get_header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        for key, value in self.headers.items():
            if key.lower() == name.lower():
                return value
        return None

    def set_header(self, name: str, value: str) -> None:
        """Sets a header, replacing any existing header with the same name in another casing."""
        for key in [k for k in self.headers if k.lower() == name.lower()]:
            del self.headers[key]
        self.headers[name] = value

    def set_json_body(self, payload: Mapping[str, Any]) -> None:
        self.body = json.dumps(payload)

    def replace_path_segment(self, old: str, new: str) -> None:
        """Replaces the first occurrence of ``old`` in both the full path and the request URI."""
        self.full_path = self.full_path.replace(old, new, 1)
        self.uri = self.uri.replace(old, new, 1)
