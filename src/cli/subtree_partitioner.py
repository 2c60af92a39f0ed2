"""Subtree partitioning of a flat Drive listing.

Drive returns files as a flat, unordered list in which each file only knows
its parents. This module computes which of those files hang below the sync
root, following first parents only, and which do not.

The computation indexes files by first parent in one pass and then walks the
tree breadth-first from the root. Each ID is visited at most once, so parent
cycles and orphaned chains end the walk instead of looping; anything the walk
never reaches is outside the subtree.
"""

import logging
from collections import deque
from typing import Dict, Iterable, List

from ..models.partition_result import PartitionResult
from ..models.remote_entity import RemoteEntity

logger = logging.getLogger(__name__)


class SubtreePartitioner:
    """Splits a file listing into the sync root's subtree and the rest.

    Files with several parents are placed using their first parent only.

    Example:
        >>> result = SubtreePartitioner().partition(root, files)
        >>> print(len(result.in_subtree), len(result.not_in_subtree))
    """

    def partition(self, root: RemoteEntity, files: Iterable[RemoteEntity]) -> PartitionResult:
        """Partition ``files`` relative to ``root``.

        The root's own entry in the listing is dropped; the root is carried
        in ``PartitionResult.root`` instead. Duplicate IDs keep their first
        occurrence.

        Args:
            root: The resolved sync root
            files: Full listing, in any order

        Returns:
            PartitionResult with members in breadth-first order from the root
            and non-members in listing order
        """
        unique = self._deduplicate(files, root.file_id)
        children = self._index_children(unique)

        members: List[RemoteEntity] = []
        visited = {root.file_id}
        queue = deque([root.file_id])

        while queue:
            parent_id = queue.popleft()
            for child in children.get(parent_id, []):
                if child.file_id in visited:
                    continue
                visited.add(child.file_id)
                members.append(child)
                queue.append(child.file_id)

        outside = [entity for entity in unique if entity.file_id not in visited]

        logger.debug(
            f"Partitioned {len(unique)} file(s) under root {root.file_id}: "
            f"{len(members)} inside, {len(outside)} outside"
        )
        return PartitionResult(root=root, in_subtree=members, not_in_subtree=outside)

    def _deduplicate(self, files: Iterable[RemoteEntity], root_id: str) -> List[RemoteEntity]:
        unique: List[RemoteEntity] = []
        seen = {root_id}
        for entity in files:
            if entity.file_id in seen:
                if entity.file_id != root_id:
                    logger.debug(f"Skipping duplicate listing entry {entity.file_id}")
                continue
            seen.add(entity.file_id)
            unique.append(entity)
        return unique

    def _index_children(self, files: List[RemoteEntity]) -> Dict[str, List[RemoteEntity]]:
        children: Dict[str, List[RemoteEntity]] = {}
        for entity in files:
            parent_id = entity.first_parent
            if parent_id is None:
                continue
            children.setdefault(parent_id, []).append(entity)
        return children
