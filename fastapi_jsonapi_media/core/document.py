"""JSON:API top-level document helpers."""

import json
from typing import Any, Mapping


class JSONAPIDocumentBuilder:
    """Merge configured top-level ``meta`` into outgoing JSON:API documents."""

    def __init__(self, meta: Mapping[str, Any] | None = None) -> None:
        self.meta = dict(meta) if meta else {}

    def merge_meta(self, document: Mapping[str, Any]) -> dict[str, Any]:
        """Return a copy of the document with configured meta merged in.

        Keys already present in the document's own ``meta`` are kept.
        """
        merged: dict[str, Any] = dict(document)
        if not self.meta:
            return merged
        existing = merged.get("meta")
        if isinstance(existing, Mapping):
            merged["meta"] = {**self.meta, **existing}
        else:
            merged["meta"] = dict(self.meta)
        return merged

    def rewrite_body(self, body: bytes) -> bytes:
        """Merge meta into an encoded JSON object body.

        Empty, undecodable and non-object bodies are returned unchanged.
        """
        if not self.meta or not body:
            return body
        try:
            document = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError):
            return body
        if not isinstance(document, dict):
            return body
        return json.dumps(
            self.merge_meta(document),
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")
