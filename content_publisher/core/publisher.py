"""Publish orchestration: validate, discover, refresh, fan out, report."""

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Set

from content_publisher.core.config import PublisherSettings, load_settings
from content_publisher.core.discovery import Vault, VaultDiscovery
from content_publisher.core.models import (
    DocumentRef,
    MetadataContext,
    RunInProgressError,
    RunReport,
    RunState,
)
from content_publisher.core.notify import LONG, SHORT, ConsoleNotifier, Notifier
from content_publisher.core.paths import PathResolver, write_content
from content_publisher.core.processor import ContentRenderer
from content_publisher.core.template import TemplateProcessorManager
from content_publisher.core.tracker import TaskTracker
from content_publisher.core.updater import FrontmatterUpdater

logger = logging.getLogger(__name__)

Writer = Callable[[Path, str, Optional[Callable[[], None]]], Awaitable[None]]


class PublishOrchestrator:
    """Coordinates publish runs over the notes of a vault.

    A run moves through RunState from IDLE back to IDLE. Only one run may be
    active at a time; the template cache and the task tracker belong to the
    active run.
    """

    def __init__(
        self,
        settings: PublisherSettings,
        vault: Optional[Vault] = None,
        notifier: Optional[Notifier] = None,
        updater: Optional[FrontmatterUpdater] = None,
        processors: Optional[TemplateProcessorManager] = None,
        renderer: Optional[ContentRenderer] = None,
        resolver: Optional[PathResolver] = None,
        writer: Writer = write_content,
    ):
        self.settings = settings
        self.vault = vault or Vault(Path(settings.vault_path).expanduser())
        self.notifier = notifier or ConsoleNotifier()
        self.updater = updater or FrontmatterUpdater()
        self.processors = processors or TemplateProcessorManager(settings=settings)
        self.renderer = renderer or ContentRenderer(self.processors, settings)
        self.resolver = resolver or PathResolver(settings)
        self.writer = writer
        self.discovery = VaultDiscovery(self.vault, settings.source_root)
        self.state = RunState.IDLE
        self.tracker: Optional[TaskTracker] = None
        self._tasks: Set[asyncio.Task] = set()

    def validate_path(self, notice_valid: bool = False) -> bool:
        """Check the destination root, notifying when it is invalid."""
        root = self.settings.publish_to_ab_folder
        if not self.resolver.validate_root():
            logger.warning("Destination folder does not exist: %s", root)
            self._notify(f"Invalid path: {root}", SHORT)
            return False
        if notice_valid:
            self._notify(f"Valid path: {root}", SHORT)
        return True

    def check_note_in_source(self, document: DocumentRef) -> bool:
        if self.resolver.matches_source_scope(document):
            return True
        self._notify(
            f"Not in Source Folder: {self.settings.note_folder} Or Not a Markdown File",
            SHORT,
        )
        return False

    async def publish_current(self, wait: bool = True) -> Optional[RunReport]:
        """Publish the vault's active note.

        Returns:
            RunReport once the note is published (None if rejected before
            seeding, or when ``wait`` is False)
        """
        self._begin()
        try:
            if not self.validate_path():
                return self._abort()

            self.state = RunState.DISCOVERING
            document = self.vault.get_active_document()
            if document is None:
                self._notify("No active note to publish", SHORT)
                return self._abort()
            if not self.check_note_in_source(document):
                return self._abort()

            self.state = RunState.REFRESHING
            contexts = await self.refresh_content_frontmatter([document])
            if not contexts:
                return self._abort()

            root = self.settings.publish_to_ab_folder
            tracker = self._seed(1)
            self._dispatch(
                contexts[0],
                tracker,
                lambda: self._notify(f"Your note has been published! At {root}", SHORT),
            )
        except BaseException:
            self.state = RunState.IDLE
            raise

        return await tracker.wait() if wait else None

    async def publish_note(self, path: str, wait: bool = True) -> Optional[RunReport]:
        """Make ``path`` the active note and publish it."""
        self._ensure_idle()
        self.vault.set_active_document(path)
        return await self.publish_current(wait=wait)

    async def publish_all(self, wait: bool = True) -> Optional[RunReport]:
        """Publish every note under the source folder.

        Returns:
            RunReport once every dispatched note finished (None if the
            destination is invalid, or when ``wait`` is False)
        """
        self._begin()
        try:
            if not self.validate_path():
                return self._abort()

            self._notify("Preparing to publish all...", SHORT)
            self.state = RunState.DISCOVERING
            documents = self.discovery.discover_all()

            self.state = RunState.REFRESHING
            contexts = await self.refresh_content_frontmatter(documents)

            self._notify(f"Got {len(contexts)} notes for publishing...", LONG)
            tracker = self._seed(len(contexts))
            for context in contexts:
                self._dispatch(context, tracker)
        except BaseException:
            self.state = RunState.IDLE
            raise

        return await tracker.wait() if wait else None

    async def refresh_content_frontmatter(self, documents: List[DocumentRef]) -> List[MetadataContext]:
        """Refresh headers one note at a time and pre-warm the template cache.

        Notes whose header cannot be refreshed are skipped.
        """
        contexts = []
        for document in documents:
            try:
                context = await self.updater.update_frontmatter(document)
                self.processors.get_processor(context)
            except Exception as e:
                logger.warning("Refreshing %s frontmatter failed: %s", document.path, e)
                self._notify(f"refreshing {document.basename} frontmatter failed, skip it.", SHORT)
                continue
            contexts.append(context)
        return contexts

    async def just_publish_content(
        self,
        context: MetadataContext,
        tracker: TaskTracker,
        on_success: Optional[Callable[[], None]] = None,
    ) -> None:
        """Render, resolve and write one note, then record its outcome.

        Failures are logged and counted; they never propagate.
        """
        document = context.document
        if on_success is None:
            root = self.settings.publish_to_ab_folder
            on_success = lambda: self._notify(f"publish {document.basename} to {root}", SHORT)  # noqa: E731

        try:
            header = self.renderer.get_published_yaml(context)
            content = await self.renderer.get_published_text(document)
            destination = self.resolver.resolve_destination(document)
            await self.writer(destination, header + '\n' + content, on_success)
            ok = True
        except Exception as e:
            logger.error("publish %s failed: %s", document.basename, e)
            ok = False

        try:
            tracker.record_outcome(ok)
        except Exception:
            logger.exception("Completing the run after %s failed", document.basename)

    def close(self) -> None:
        """Release run-scoped caches."""
        self.processors.clear()

    def _ensure_idle(self) -> None:
        if self.state is not RunState.IDLE:
            raise RunInProgressError(f"A publish run is already {self.state.value}")

    def _begin(self) -> None:
        self._ensure_idle()
        self.state = RunState.VALIDATING

    def _notify(self, message: str, duration: int = SHORT) -> None:
        try:
            self.notifier.notify(message, duration)
        except Exception as e:
            logger.warning("Notification failed (%s): %s", message, e)

    def _abort(self) -> None:
        self.state = RunState.IDLE
        return None

    def _seed(self, task: int) -> TaskTracker:
        self.state = RunState.SEEDING
        tracker = TaskTracker(on_complete=self._on_run_complete)
        self.tracker = tracker
        self.state = RunState.FAN_OUT
        tracker.set_task(task)
        return tracker

    def _dispatch(
        self,
        context: MetadataContext,
        tracker: TaskTracker,
        on_success: Optional[Callable[[], None]] = None,
    ) -> None:
        task = asyncio.create_task(self.just_publish_content(context, tracker, on_success))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _on_run_complete(self, report: RunReport) -> None:
        self.processors.clear()
        self.state = RunState.IDLE
        self._notify(report.message, LONG)


def create_publisher_from_config(
    config_path: Optional[Path] = None,
    notifier: Optional[Notifier] = None,
) -> PublishOrchestrator:
    """Build an orchestrator from a settings file."""
    settings = load_settings(config_path)
    return PublishOrchestrator(settings, notifier=notifier)
