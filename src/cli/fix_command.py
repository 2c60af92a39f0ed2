"""Fix command orchestration for CLI.

This module provides the FixCommand class that repairs the syncRootId markers
of a Drive. It resolves the sync root, lists every file the user owns,
partitions the listing into the root's subtree and the rest, and writes the
syncRootId corrections (unless running dry).
"""

import logging
import time
from typing import List, Optional

from src.cli.errors import CLIError, CorrectionError, ListingError
from src.cli.models import Correction, ExitCode, FixSummary
from src.cli.output import OutputHandler
from src.cli.root_resolver import RootResolver
from src.cli.subtree_partitioner import SubtreePartitioner
from src.drive_client.api_wrapper import APIWrapper
from src.drive_client.auth import Authenticator
from src.drive_client.errors import (
    APIAccessError,
    APIUnreachableError,
    DriveError,
    InvalidCredentialsError,
    RemoteFileNotFoundError,
    SyncError,
)
from src.models.partition_result import PartitionResult
from src.models.remote_entity import SYNC_ROOT_ID_KEY, RemoteEntity

logger = logging.getLogger(__name__)

LIST_QUERY = "trashed = false and 'me' in owners"
LIST_FIELDS = [
    "nextPageToken",
    "files(id,name,parents,md5Checksum,mimeType,size,modifiedTime,appProperties)",
]
UPDATE_FIELDS = ["id", "name", "mimeType", "appProperties"]


class FixCommand:
    """Orchestrates a sync hierarchy fix run.

    The fix workflow:
        1. Resolve and validate the sync root
        2. List all non-trashed files owned by the user
        3. Partition the listing into the root's subtree and the rest
        4. Plan syncRootId corrections for both sides
        5. Apply them (skipped on dry run) and report a summary

    Any failure aborts the run. Corrections already written stay written.

    Example:
        >>> output = OutputHandler(verbosity=1)
        >>> cmd = FixCommand(output_handler=output)
        >>> exit_code = cmd.run("1AbCdEf", dry_run=True)
    """

    def __init__(
        self,
        api: Optional[APIWrapper] = None,
        output_handler: Optional[OutputHandler] = None,
        root_resolver: Optional[RootResolver] = None,
        partitioner: Optional[SubtreePartitioner] = None,
    ):
        """Initialize fix command with dependencies.

        Args:
            api: APIWrapper for Drive access (created on first run if None)
            output_handler: OutputHandler for terminal output (optional)
            root_resolver: RootResolver (built from the api if None)
            partitioner: SubtreePartitioner (optional)
        """
        self.api = api
        self.output_handler = output_handler or OutputHandler()
        self.root_resolver = root_resolver
        self.partitioner = partitioner or SubtreePartitioner()

    def run(self, root_id: str, dry_run: bool = False) -> ExitCode:
        """Execute the fix and translate failures to exit codes.

        Args:
            root_id: Drive ID of the sync root folder
            dry_run: If True, plan and report corrections without writing

        Returns:
            ExitCode indicating success or specific failure type
        """
        try:
            self.fix(root_id, dry_run=dry_run)
            return ExitCode.SUCCESS

        except InvalidCredentialsError as e:
            logger.error(f"Authentication failed: {e}")
            self.output_handler.error(f"Authentication failed: {e}")
            self.output_handler.print("Check DRIVE_CREDENTIALS_FILE and DRIVE_TOKEN_FILE")
            return ExitCode.AUTH_ERROR

        except RemoteFileNotFoundError as e:
            logger.error(f"Failed to find root dir: {e}")
            self.output_handler.error(f"Failed to find root dir: {e}")
            return ExitCode.NOT_FOUND

        except (APIUnreachableError, APIAccessError) as e:
            logger.error(f"Drive API error: {e}")
            self.output_handler.error(f"Drive API error: {e}")
            return ExitCode.NETWORK_ERROR

        except ListingError as e:
            logger.error(str(e))
            self.output_handler.error(str(e))
            return self._exit_code_for_cause(e)

        except CorrectionError as e:
            logger.error(str(e))
            self.output_handler.error(str(e))
            return self._exit_code_for_cause(e)

        except (CLIError, SyncError, ValueError) as e:
            logger.error(f"Fix failed: {e}")
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            logger.exception("Unexpected error during fix")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR

    def fix(self, root_id: str, dry_run: bool = False) -> FixSummary:
        """Run the fix workflow and return its summary.

        Raises:
            RemoteFileNotFoundError: If the root does not exist
            RootNotADirectoryError: If the root is not a folder
            NotASyncRootError: If the root lacks the syncRoot marker
            ListingError: If the listing fails
            CorrectionError: If a correction write fails
            DriveError: For authentication and transport failures on the root fetch
        """
        output = self.output_handler
        output.print("Starting fixing the sync hierarchy...")
        if dry_run:
            output.warning("This is a dry run!")
        started = time.monotonic()

        self._ensure_dependencies()

        output.info("Searching for the given root id...")
        root = self.root_resolver.resolve(root_id)
        output.info(f"Found sync root '{root.name}' [{root.file_id}]")

        output.info("Collecting a list of all files in the drive...")
        files = self._list_files()

        output.print(
            f"Found {len(files)} files. Filtering files in the sync dir hierarchy..."
        )
        partition = self.partitioner.partition(root, files)
        corrections = self.plan_corrections(partition)

        summary = FixSummary(
            total_files=len(files),
            in_subtree_count=len(partition.in_subtree),
            not_in_subtree_count=len(partition.not_in_subtree),
            dry_run=dry_run,
        )
        self.apply_corrections(corrections, dry_run=dry_run, summary=summary)

        summary.elapsed_seconds = time.monotonic() - started
        logger.info(
            f"Fix finished: {summary.assigned_count} assigned, "
            f"{summary.cleared_count} cleared in {summary.elapsed_seconds:.2f}s"
        )
        output.print_summary(summary)
        return summary

    def plan_corrections(self, partition: PartitionResult) -> List[Correction]:
        """Work out which syncRootId values are wrong.

        Files inside the subtree must name the root; files outside must carry
        no syncRootId or an empty one. The partition holds the root apart, so
        it is never corrected.

        Args:
            partition: Result of partitioning the listing

        Returns:
            Corrections for subtree files first, then for outside files
        """
        root_id = partition.root.file_id
        corrections: List[Correction] = []

        for entity in partition.in_subtree:
            if entity.sync_root_id == root_id:
                continue
            corrections.append(self._correction(entity, root_id))

        for entity in partition.not_in_subtree:
            if not entity.sync_root_id:
                continue
            corrections.append(self._correction(entity, ""))

        logger.debug(f"Planned {len(corrections)} correction(s)")
        return corrections

    def apply_corrections(
        self,
        corrections: List[Correction],
        dry_run: bool = False,
        summary: Optional[FixSummary] = None,
    ) -> FixSummary:
        """Report each correction and write it to Drive unless dry running.

        Args:
            corrections: Corrections from plan_corrections
            dry_run: If True, only report
            summary: Summary to accumulate counts into (new one if None)

        Returns:
            The summary with assigned/cleared counts updated

        Raises:
            CorrectionError: On the first failed write
        """
        summary = summary if summary is not None else FixSummary(dry_run=dry_run)

        if dry_run or not corrections:
            for correction in corrections:
                self.output_handler.print_correction(correction)
                self._count(summary, correction)
            return summary

        with self.output_handler.progress_bar(len(corrections), "Updating syncRootId") as progress:
            task = progress.add_task("Updating syncRootId", total=len(corrections))
            for correction in corrections:
                self.output_handler.print_correction(correction)
                self._write(correction)
                self._count(summary, correction)
                progress.update(task, advance=1)

        return summary

    def _ensure_dependencies(self) -> None:
        if self.api is None:
            self.api = APIWrapper(Authenticator())
        if self.root_resolver is None:
            self.root_resolver = RootResolver(self.api)

    def _list_files(self) -> List[RemoteEntity]:
        try:
            with self.output_handler.spinner("Listing files..."):
                raw_files = self.api.list_all_files(LIST_QUERY, LIST_FIELDS)
        except DriveError as e:
            raise ListingError(str(e)) from e
        return [RemoteEntity.from_api(data) for data in raw_files]

    def _write(self, correction: Correction) -> None:
        body = {"appProperties": {SYNC_ROOT_ID_KEY: correction.target_value}}
        try:
            self.api.update_file(correction.file_id, body, UPDATE_FIELDS)
        except (DriveError, ValueError) as e:
            raise CorrectionError(correction.file_id, correction.name, str(e)) from e
        logger.debug(
            f"Set syncRootId of {correction.file_id} to '{correction.target_value}'"
        )

    @staticmethod
    def _correction(entity: RemoteEntity, target_value: str) -> Correction:
        return Correction(
            file_id=entity.file_id,
            name=entity.name,
            current_value=entity.sync_root_id,
            target_value=target_value,
        )

    @staticmethod
    def _count(summary: FixSummary, correction: Correction) -> None:
        if correction.kind == "assign":
            summary.assigned_count += 1
        else:
            summary.cleared_count += 1

    @staticmethod
    def _exit_code_for_cause(error: Exception) -> ExitCode:
        """Map a wrapped failure to the exit code of its underlying cause."""
        cause = error.__cause__
        if isinstance(cause, InvalidCredentialsError):
            return ExitCode.AUTH_ERROR
        if isinstance(cause, (APIUnreachableError, APIAccessError)):
            return ExitCode.NETWORK_ERROR
        return ExitCode.GENERAL_ERROR
