"""
Firestore scratch store: TTL markers shared across replicas in the `scratch` collection.

Used when DATA_SOURCE=firebase. Each document: { key, value, expires_at }.
Document ID: the key with "/" escaped. Expired documents read as absent; a
Firestore TTL policy on expires_at can remove them server-side.
Uses google.cloud.firestore.AsyncClient so every call is awaitable.
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional, Union

from google.cloud.firestore import AsyncClient
from google.cloud.firestore_v1.base_query import FieldFilter
from google.oauth2 import service_account

from skillrank import GatewayError

logger = logging.getLogger(__name__)

SCRATCH_COLLECTION = "scratch"


def _project_id_from_credentials_file(credentials_path: Union[Path, str]) -> Optional[str]:
    """Read project_id from a Google service account JSON file if present."""
    path = Path(credentials_path)
    if not path.is_file():
        return None
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return None
    return data.get("project_id") or data.get("projectId")


def _doc_id(key: str) -> str:
    return key.replace("/", "%2F")


class FirestoreScratchStore:
    """Scratch store backed by Firestore documents with an expires_at field."""

    def __init__(
        self,
        project_id: Optional[str] = None,
        credentials_path: Optional[Union[Path, str]] = None,
        collection: str = SCRATCH_COLLECTION,
        client: Optional[AsyncClient] = None,
    ):
        self._collection = collection
        if client is not None:
            self._db = client
            return
        if not credentials_path:
            raise ValueError("FirestoreScratchStore requires credentials_path or client")
        credentials_path = str(Path(credentials_path).resolve())
        creds = service_account.Credentials.from_service_account_file(credentials_path)
        proj = project_id or _project_id_from_credentials_file(credentials_path)
        self._db = AsyncClient(project=proj, credentials=creds)

    def _ref(self):
        return self._db.collection(self._collection)

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl_seconds)
        try:
            await self._ref().document(_doc_id(key)).set(
                {"key": key, "value": value, "expires_at": expires_at}
            )
        except Exception as e:
            raise GatewayError(f"scratch put failed for {key!r}: {e}") from e

    async def get(self, key: str) -> Optional[str]:
        try:
            doc = await self._ref().document(_doc_id(key)).get()
        except Exception as e:
            raise GatewayError(f"scratch get failed for {key!r}: {e}") from e
        if not doc.exists:
            return None
        data = doc.to_dict() or {}
        expires_at = data.get("expires_at")
        if expires_at is None or expires_at <= datetime.now(timezone.utc):
            return None
        return data.get("value")

    async def delete(self, key: str) -> None:
        try:
            await self._ref().document(_doc_id(key)).delete()
        except Exception as e:
            raise GatewayError(f"scratch delete failed for {key!r}: {e}") from e

    async def keys(self, prefix: str = "") -> List[str]:
        now = datetime.now(timezone.utc)
        query = self._ref()
        if prefix:
            query = query.where(filter=FieldFilter("key", ">=", prefix)).where(
                filter=FieldFilter("key", "<", prefix + "\uf8ff")
            )
        out = []
        try:
            async for doc in query.stream():
                d = doc.to_dict() or {}
                expires_at = d.get("expires_at")
                key = d.get("key", doc.id)
                if key.startswith(prefix) and expires_at is not None and expires_at > now:
                    out.append(key)
        except Exception as e:
            raise GatewayError(f"scratch keys failed for prefix {prefix!r}: {e}") from e
        return sorted(out)

    async def is_available(self) -> bool:
        """True if a trivial read succeeds."""
        try:
            await self._ref().document("_health").get()
            return True
        except Exception as e:
            logger.warning("[firestore] UNAVAILABLE err=%s", e)
            return False
