"""Subtree partition result model."""

from dataclasses import dataclass, field
from typing import List, Set

from src.models.remote_entity import RemoteEntity


@dataclass
class PartitionResult:
    """A listing split into the sync root's subtree and everything else.

    The root itself is kept in ``root`` only; it never appears in either list.

    Attributes:
        root: The resolved sync root
        in_subtree: Entities reachable from the root via first parents
        not_in_subtree: All remaining listed entities
    """
    root: RemoteEntity
    in_subtree: List[RemoteEntity] = field(default_factory=list)
    not_in_subtree: List[RemoteEntity] = field(default_factory=list)

    @property
    def in_subtree_ids(self) -> Set[str]:
        return {entity.file_id for entity in self.in_subtree}

    @property
    def not_in_subtree_ids(self) -> Set[str]:
        return {entity.file_id for entity in self.not_in_subtree}
