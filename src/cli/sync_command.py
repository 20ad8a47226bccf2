"""Sync command orchestration for CLI.

This module provides the SyncCommand class that orchestrates a complete
run: load configuration, validate credentials, then run the document and
image pipelines in order against one shared storage client, translating
fatal errors into exit codes.
"""

import logging
from typing import List, Optional

from src.asset_sync.config_loader import ConfigLoader
from src.asset_sync.errors import ConfigError, LocalListError, RemoteListError
from src.asset_sync.models import PipelineReport
from src.asset_sync.pipeline import run_all
from src.cli.models import ExitCode, SyncSummary
from src.cli.output import OutputHandler
from src.storage_client.api_wrapper import StorageAPIWrapper
from src.storage_client.auth import Authenticator
from src.storage_client.errors import (
    APIUnreachableError,
    InvalidCredentialsError,
    StorageError,
)

logger = logging.getLogger(__name__)


class SyncCommand:
    """Orchestrates the complete sync workflow for the CLI.

    The sync workflow:
        1. Load pipeline configuration from the environment
        2. Validate storage credentials
        3. Run each pipeline to completion, printing its summary as it ends
        4. Print the overall status and return an exit code

    Per-file failures are reported but still return ExitCode.SUCCESS; only
    fatal errors (configuration, credentials, listings) change the code.

    Example:
        >>> output = OutputHandler(verbosity=1)
        >>> sync_cmd = SyncCommand(output_handler=output)
        >>> exit_code = sync_cmd.run(dry_run=False)
        >>> sys.exit(exit_code)
    """

    def __init__(
        self,
        env_file: Optional[str] = None,
        only: Optional[List[str]] = None,
        output_handler: Optional[OutputHandler] = None,
        authenticator: Optional[Authenticator] = None,
        api: Optional[StorageAPIWrapper] = None,
    ):
        """Initialize sync command with dependencies.

        Args:
            env_file: Optional .env file to load
            only: Optional subset of pipeline names to run
            output_handler: OutputHandler for terminal output (optional)
            authenticator: Authenticator for the storage API (optional)
            api: Storage client shared by all pipelines (optional)
        """
        self.env_file = env_file
        self.only = only
        self.output_handler = output_handler or OutputHandler()
        self.authenticator = authenticator
        self.api = api

    def run(self, dry_run: bool = False) -> ExitCode:
        """Execute the sync.

        Args:
            dry_run: If True, list and reconcile but do not mutate the store

        Returns:
            ExitCode indicating success or the kind of fatal failure
        """
        try:
            config = ConfigLoader.load(env_file=self.env_file, only=self.only)
            names = ', '.join(p.name for p in config.pipelines)
            logger.info(f"Loaded {len(config.pipelines)} pipeline(s): {names}")
            self.output_handler.info(
                f"Syncing {names}" + (" (dry run, nothing will be changed)" if dry_run else "")
            )

            if not self.authenticator:
                self.authenticator = Authenticator(env_file=self.env_file)
            # Fail on missing credentials before any listing
            self.authenticator.get_credentials()

            if not self.api:
                self.api = StorageAPIWrapper(self.authenticator)

            reports = run_all(
                config.pipelines,
                self.api,
                dry_run=dry_run,
                on_report=self._print_report,
            )

            self.output_handler.print_summary(SyncSummary.from_reports(reports))
            return ExitCode.SUCCESS

        except ConfigError as e:
            logger.error(str(e))
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        except LocalListError as e:
            logger.error(f"Aborting run: {e}")
            self.output_handler.error(f"Aborting run: {e}")
            return ExitCode.GENERAL_ERROR

        except RemoteListError as e:
            logger.error(f"Aborting run: {e}")
            self.output_handler.error(f"Aborting run: {e}")
            return self._exit_code_for(e.__cause__)

        except StorageError as e:
            logger.error(str(e))
            self.output_handler.error(str(e))
            return self._exit_code_for(e)

    def _print_report(self, report: PipelineReport) -> None:
        if report.dry_run:
            self.output_handler.print_dryrun_summary(report)
        else:
            self.output_handler.print_pipeline_summary(report)

    @staticmethod
    def _exit_code_for(error: Optional[BaseException]) -> ExitCode:
        if isinstance(error, InvalidCredentialsError):
            return ExitCode.AUTH_ERROR
        if isinstance(error, APIUnreachableError):
            return ExitCode.NETWORK_ERROR
        return ExitCode.GENERAL_ERROR
