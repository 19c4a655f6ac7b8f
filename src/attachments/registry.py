"""Registry tracking the lifecycle of every uploaded file.

Each upload becomes its own asyncio task. Results are applied by attachment
id, so a result arriving after the attachment was removed is dropped instead
of reviving it. All mutation happens on the event loop thread, one dict
assignment per transition.
"""

import asyncio
import itertools
import logging
from collections.abc import Awaitable, Callable

from src.attachments.models import Attachment, AttachmentStatus, Failed, Processing, Ready
from src.models.errors import ExtractionTimeout, SafeChatError
from src.parsing.extractor import ExtractionResult, extract

logger = logging.getLogger(__name__)

Extractor = Callable[[str, bytes, str | None], Awaitable[ExtractionResult]]
Listener = Callable[[], None]


async def extract_in_thread(name: str, data: bytes, content_type: str | None) -> ExtractionResult:
    """Run the extraction engine off the event loop."""
    return await asyncio.to_thread(extract, data, name, content_type)


class AttachmentRegistry:
    """Owns the attachments of one chat session.

    Args:
        extractor: Async callable turning (name, data, content_type) into an
            ExtractionResult. Defaults to the local extraction engine.
        timeout: Seconds before an extraction is failed with kind ``timeout``.
            None waits indefinitely.
    """

    def __init__(self, extractor: Extractor | None = None, timeout: float | None = None) -> None:
        self._extractor = extractor or extract_in_thread
        self._timeout = timeout
        self._attachments: dict[str, Attachment] = {}
        self._tasks: set[asyncio.Task[None]] = set()
        self._listeners: list[Listener] = []
        self._ids = itertools.count(1)

    def add(self, name: str, data: bytes, content_type: str | None = None) -> Attachment:
        """Register an upload and start extracting it.

        Must be called from a running event loop.

        Returns:
            The new attachment, already in ``processing``.
        """
        attachment_id = f"file-{next(self._ids)}"
        self._attachments[attachment_id] = Attachment(id=attachment_id, name=name)
        attachment = self._apply(attachment_id, Processing())

        task = asyncio.get_running_loop().create_task(
            self._process(attachment_id, name, data, content_type),
            name=f"extract-{attachment_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        logger.info(f"Processing attachment {attachment_id}: {name}")
        return attachment

    async def _process(
        self, attachment_id: str, name: str, data: bytes, content_type: str | None
    ) -> None:
        try:
            result = await asyncio.wait_for(
                self._extractor(name, data, content_type), timeout=self._timeout
            )
        except TimeoutError:
            self._fail(
                attachment_id,
                ExtractionTimeout(f"Extraction of {name} exceeded {self._timeout}s"),
            )
        except SafeChatError as e:
            self._fail(attachment_id, e)
        except Exception as e:
            logger.exception(f"Unexpected failure extracting {name}")
            self._fail(attachment_id, SafeChatError(f"Failed to process file: {e}"))
        else:
            if self._apply(attachment_id, Ready(content=result.text)) is not None:
                logger.info(f"Attachment {attachment_id} ready ({result.length} chars)")

    def _fail(self, attachment_id: str, error: SafeChatError) -> None:
        logger.warning(f"File extraction failed for {attachment_id}: {error.message}")
        self._apply(attachment_id, Failed(kind=error.kind, message=error.message))

    def _apply(self, attachment_id: str, state: Processing | Ready | Failed) -> Attachment | None:
        current = self._attachments.get(attachment_id)
        if current is None:
            logger.debug(f"Discarding {state.status} result for removed attachment {attachment_id}")
            return None
        updated = current.advance(state)
        self._attachments[attachment_id] = updated
        self._notify()
        return updated

    def remove(self, attachment_id: str) -> bool:
        """Delete an attachment in any state. In-flight extraction keeps running.

        Returns:
            True if the attachment existed.
        """
        removed = self._attachments.pop(attachment_id, None) is not None
        if removed:
            self._notify()
        return removed

    def clear(self) -> None:
        """Drop every attachment, including ones still processing."""
        self._attachments.clear()
        self._notify()

    def get(self, attachment_id: str) -> Attachment | None:
        return self._attachments.get(attachment_id)

    def snapshot(self) -> list[Attachment]:
        """Current attachments in the order they were added."""
        return list(self._attachments.values())

    def ready(self) -> list[Attachment]:
        return [a for a in self._attachments.values() if a.status is AttachmentStatus.READY]

    async def wait(self) -> None:
        """Wait for every outstanding extraction to settle."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def subscribe(self, listener: Listener) -> None:
        """Call ``listener`` after every change to the collection."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()

    def __len__(self) -> int:
        return len(self._attachments)

    def __contains__(self, attachment_id: object) -> bool:
        return attachment_id in self._attachments
