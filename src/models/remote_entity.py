"""Drive file data model."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"

SYNC_ROOT_KEY = "syncRoot"
SYNC_ROOT_ID_KEY = "syncRootId"


@dataclass(frozen=True)
class RemoteEntity:
    """Read snapshot of a Drive file or directory.

    Entities are fetched once per run and never mutated; corrections are
    sent to Drive as separate update requests.

    Attributes:
        file_id: Unique Drive identifier
        name: Display name
        parents: Parent folder IDs in Drive order (only the first is used)
        mime_type: MIME type, FOLDER_MIME_TYPE for directories
        app_properties: Private key/value metadata (syncRoot, syncRootId)
        md5_checksum: Content hash (binary files only)
        size: Content size in bytes (binary files only)
        modified_time: RFC 3339 modification timestamp
    """
    file_id: str
    name: str = ""
    parents: List[str] = field(default_factory=list)
    mime_type: str = ""
    app_properties: Dict[str, str] = field(default_factory=dict)
    md5_checksum: str = ""
    size: Optional[int] = None
    modified_time: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "RemoteEntity":
        """Build an entity from a Drive v3 files resource."""
        size = data.get("size")
        return cls(
            file_id=data["id"],
            name=data.get("name", ""),
            parents=list(data.get("parents") or []),
            mime_type=data.get("mimeType", ""),
            app_properties=dict(data.get("appProperties") or {}),
            md5_checksum=data.get("md5Checksum", ""),
            size=int(size) if size is not None else None,
            modified_time=data.get("modifiedTime", ""),
        )

    @property
    def is_dir(self) -> bool:
        return self.mime_type == FOLDER_MIME_TYPE

    @property
    def first_parent(self) -> Optional[str]:
        return self.parents[0] if self.parents else None

    @property
    def is_sync_root(self) -> bool:
        # Presence only, the value is irrelevant
        return SYNC_ROOT_KEY in self.app_properties

    @property
    def sync_root_id(self) -> str:
        """The sync root this entity believes it belongs to ("" for none)."""
        return self.app_properties.get(SYNC_ROOT_ID_KEY) or ""
