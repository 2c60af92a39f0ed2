"""Data models for Drive files and subtree partitions."""

from src.models.remote_entity import RemoteEntity
from src.models.partition_result import PartitionResult

__all__ = ['RemoteEntity', 'PartitionResult']
