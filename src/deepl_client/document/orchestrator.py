# SPDX-License-Identifier: Apache-2.0
"""Document translation workflow: upload, poll until done, download."""

from __future__ import annotations

import asyncio
import logging
import shutil
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import IO, TYPE_CHECKING, Protocol, runtime_checkable

from deepl_client.core.models import (
    DocumentHandle,
    DocumentStatus,
    DocumentStatusCode,
    DocumentTranslateOptions,
)
from deepl_client.document.file_io import (
    DocumentInput,
    DocumentOutput,
    PathInput,
    PathOutput,
    StreamOutput,
)
from deepl_client.document.minifier import DocumentMinifier
from deepl_client.errors import DeepLError, DocumentTranslationError, ErrorKind

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

# The service's seconds_remaining estimate is unreliable, so poll at a fixed pace.
DEFAULT_POLL_INTERVAL = 5.0


class DocumentState(str, Enum):
    """Lifecycle state of one document translation."""

    CREATED = "created"
    MINIFIED = "minified"
    UPLOADED = "uploaded"
    QUEUED = "queued"
    TRANSLATING = "translating"
    DONE = "done"
    ERRORED = "errored"


@runtime_checkable
class DocumentService(Protocol):
    """Document endpoints the workflow depends on."""

    async def upload_document(
        self,
        document: DocumentInput,
        source_lang: str | None,
        target_lang: str,
        options: DocumentTranslateOptions | None = None,
    ) -> DocumentHandle: ...

    async def get_document_status(self, handle: DocumentHandle) -> DocumentStatus: ...

    async def download_document(
        self, handle: DocumentHandle, output: DocumentOutput
    ) -> None: ...


async def wait_until_document_translation_complete(
    service: DocumentService,
    handle: DocumentHandle,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    on_status: Callable[[DocumentStatus], None] | None = None,
) -> DocumentStatus:
    """Poll the document status until the translation is done or has failed.

    Returns:
        The final ``done`` status.

    Raises:
        DeepLError: If the translation failed, carrying the server's message.
    """
    status = await service.get_document_status(handle)
    if on_status is not None:
        on_status(status)
    while status.ok() and not status.done():
        logger.info(
            "Rechecking document translation status after sleeping for %.1f seconds.",
            poll_interval,
        )
        await sleep(poll_interval)
        status = await service.get_document_status(handle)
        if on_status is not None:
            on_status(status)

    if not status.ok():
        raise DeepLError(status.error_message or "unknown error")
    return status


class DocumentTranslation:
    """Drives one document through upload, polling and download.

    Create one instance per document; :meth:`run` may only be called once.
    When the output is a path, the file is created exclusively before any
    request is sent and deleted again if anything fails. Failures after the
    output is opened are raised as :class:`DocumentTranslationError`, which
    carries the document handle once the upload has succeeded. Minification
    errors happen before the upload and keep their own type.
    """

    def __init__(
        self,
        service: DocumentService,
        document: DocumentInput,
        output: DocumentOutput,
        source_lang: str | None,
        target_lang: str,
        options: DocumentTranslateOptions | None = None,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
        minifier_factory: Callable[[], DocumentMinifier] = DocumentMinifier,
    ) -> None:
        self._service = service
        self._document = document
        self._output = output
        self._source_lang = source_lang
        self._target_lang = target_lang
        self._options = options or DocumentTranslateOptions()
        self._poll_interval = poll_interval
        self._sleep = sleep
        self._minifier_factory = minifier_factory
        self._minifier: DocumentMinifier | None = None
        self._output_file: IO[bytes] | None = None

        self.state = DocumentState.CREATED
        self.handle: DocumentHandle | None = None
        self.status: DocumentStatus | None = None

    @property
    def will_minify(self) -> bool:
        """Minify only path-to-path translations of supported document types."""
        return (
            self._options.enable_document_minification
            and isinstance(self._document, PathInput)
            and DocumentMinifier.can_minify_file(self._document.path)
            and isinstance(self._output, PathOutput)
        )

    async def run(self) -> DocumentStatus:
        """Translate the document and write the result to the output.

        Returns:
            Final document status; ``billed_characters`` is set by the server.

        Raises:
            FileExistsError: If the output path already exists.
            DocumentMinificationError: If the input could not be minified.
            DocumentTranslationError: If upload, translation, download or media
                reinsertion failed. The phase error is kept as ``cause``.
        """
        if self.state is not DocumentState.CREATED:
            raise DeepLError(f"Document translation already {self.state.value}")

        await self._open_output()
        try:
            document = await self._minify_if_enabled()
            handle = await self._service.upload_document(
                document, self._source_lang, self._target_lang, self._options
            )
            self.handle = handle
            self._transition(DocumentState.UPLOADED)

            self.status = await wait_until_document_translation_complete(
                self._service,
                handle,
                poll_interval=self._poll_interval,
                sleep=self._sleep,
                on_status=self._on_status,
            )

            await self._download(handle)
            await self._deminify_if_enabled()
        except asyncio.CancelledError:
            await self._fail()
            raise
        except DeepLError as exc:
            await self._fail()
            if exc.kind is ErrorKind.DOCUMENT_MINIFICATION:
                raise
            raise self._wrap(exc) from exc
        except Exception as exc:
            await self._fail()
            raise self._wrap(exc) from exc

        self._transition(DocumentState.DONE)
        return self.status

    async def _open_output(self) -> None:
        if isinstance(self._output, PathOutput):
            self._output_file = await asyncio.to_thread(open, self._output.path, "xb")

    async def _minify_if_enabled(self) -> DocumentInput:
        document = self._document
        if not self.will_minify or not isinstance(document, PathInput):
            return document

        self._minifier = self._minifier_factory()
        minified_path = await asyncio.to_thread(
            self._minifier.minify_document, document.path, True
        )
        self._transition(DocumentState.MINIFIED)
        return PathInput(minified_path)

    async def _download(self, handle: DocumentHandle) -> None:
        if self._output_file is not None:
            await self._service.download_document(handle, StreamOutput(self._output_file))
            await asyncio.to_thread(self._output_file.close)
        else:
            await self._service.download_document(handle, self._output)

    async def _deminify_if_enabled(self) -> None:
        if self._minifier is None or not isinstance(self._output, PathOutput):
            return
        output_path = self._output.path
        await asyncio.to_thread(
            self._minifier.deminify_document, output_path, output_path, True
        )
        self._minifier = None

    def _on_status(self, status: DocumentStatus) -> None:
        self.status = status
        if status.status == DocumentStatusCode.QUEUED:
            self._transition(DocumentState.QUEUED)
        elif status.status == DocumentStatusCode.TRANSLATING:
            self._transition(DocumentState.TRANSLATING)

    def _transition(self, state: DocumentState) -> None:
        if state is not self.state:
            logger.debug("Document translation %s -> %s", self.state.value, state.value)
            self.state = state

    def _wrap(self, exc: BaseException) -> DocumentTranslationError:
        message = str(exc) or type(exc).__name__
        return DocumentTranslationError(
            f"Error occurred while translating document: {message}", self.handle, exc
        )

    async def _fail(self) -> None:
        """Remove the partially written output and any minification leftovers."""
        self._transition(DocumentState.ERRORED)
        if self._output_file is not None:
            output_path = self._output.path if isinstance(self._output, PathOutput) else None
            await asyncio.to_thread(_remove_output, self._output_file, output_path)
            self._output_file = None
        if self._minifier is not None:
            await asyncio.to_thread(shutil.rmtree, self._minifier.temp_dir, True)
            self._minifier = None


def _remove_output(output_file: IO[bytes], output_path: Path | None) -> None:
    output_file.close()
    if output_path is not None:
        output_path.unlink(missing_ok=True)
