"""
JSON file store for stock transfers.

Stand-in until transfers get a table: the whole array is read, changed and
rewritten on every write. There is no locking, so concurrent creates can
drop one another's record.
"""
from __future__ import annotations

import json
import logging
import secrets
import string
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from partsdesk.core.exceptions import TransferStoreError

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


def _random_suffix(length: int = 9) -> str:
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def new_transfer_id() -> str:
    return f"transfer-{int(time.time() * 1000)}-{_random_suffix()}"


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _created_at_key(transfer: dict[str, Any]) -> datetime:
    """``createdAt`` as an aware datetime; missing or unparseable values sort oldest."""
    value = transfer.get("createdAt")
    if not isinstance(value, str):
        return _EPOCH
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class JsonTransferStore:
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read_all(self) -> list[dict[str, Any]]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            logger.error("Error reading transfers file %s: %s", self.path, exc)
            raise TransferStoreError("Failed to fetch stock transfers", message=str(exc)) from exc
        try:
            data = json.loads(raw) if raw.strip() else []
        except json.JSONDecodeError as exc:
            # Left on disk untouched; the next write would otherwise discard every record.
            logger.error("Transfers file %s is not valid JSON: %s", self.path, exc)
            raise TransferStoreError("Failed to fetch stock transfers", message=str(exc)) from exc
        if not isinstance(data, list):
            raise TransferStoreError("Failed to fetch stock transfers", message="Transfers file must hold a JSON array")
        return data

    def _write_all(self, transfers: list[dict[str, Any]]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(transfers, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.error("Error writing transfers file %s: %s", self.path, exc)
            raise TransferStoreError("Failed to create stock transfer", message=str(exc)) from exc

    def list(self, page: int = 1, limit: int = 10) -> tuple[list[dict[str, Any]], int]:
        """Return one page of transfers, newest first, and the overall count."""
        transfers = self._read_all()
        transfers.sort(key=_created_at_key, reverse=True)
        start = (page - 1) * limit
        return transfers[start:start + limit], len(transfers)

    def create(self, data: dict[str, Any]) -> dict[str, Any]:
        transfers = self._read_all()
        now = _iso_now()
        transfer = {
            "id": new_transfer_id(),
            "transferNo": data["transferNo"],
            "transferDate": data["transferDate"],
            "status": data.get("status") or "draft",
            "notes": data.get("notes") or "",
            "items": data["items"],
            "fromStoreId": data.get("fromStoreId"),
            "toStoreId": data.get("toStoreId"),
            "createdAt": now,
            "updatedAt": now,
        }
        transfers.append(transfer)
        self._write_all(transfers)
        logger.info("Stock transfer saved: %s", transfer["id"])
        return transfer
