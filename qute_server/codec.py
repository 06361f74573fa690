"""JSON wire codec: one flat object per datagram in both directions."""
from __future__ import annotations

import json
from typing import Any, Dict, Optional, Type, Union

from pydantic import ValidationError

from .constants import InboundType
from .errors import MalformedRecord
from .schemas import InboundRecord, OutboundRecord


def decode_payload(payload: Union[bytes, str]) -> Dict[str, Any]:
    """Parse a datagram into a dict; raises ``MalformedRecord`` on anything else."""
    try:
        text = payload.decode("utf-8") if isinstance(payload, bytes) else payload
        data = json.loads(text)
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise MalformedRecord(f"invalid JSON ({exc})", payload) from exc
    if not isinstance(data, dict):
        raise MalformedRecord(f"expected a JSON object, got {type(data).__name__}", payload)
    return data


def inbound_kind(data: Dict[str, Any]) -> Optional[InboundType]:
    """Return the record kind, or ``None`` for kinds this server does not handle."""
    value = data.get("type")
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    try:
        return InboundType(value)
    except ValueError:
        return None


def parse_record(data: Dict[str, Any], model: Type[InboundRecord]) -> InboundRecord:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) or "record" for err in exc.errors())
        raise MalformedRecord(f"{model.__name__} failed validation on: {fields}", data) from exc


def encode_record(record: OutboundRecord) -> bytes:
    return record.model_dump_json(by_alias=True).encode("utf-8")


__all__ = ["decode_payload", "inbound_kind", "parse_record", "encode_record"]
