"""Result sinks: where search results, progress and final states are pushed."""

import json
import logging
import os
import sys
from typing import List, Optional, TextIO

from figma_references.models import FigmaReferenceResult
from figma_references.reference_service import FigmaReferenceService

logger = logging.getLogger(__name__)

NO_FILE_MESSAGE = "No file is currently open"
NO_RESULTS_MESSAGE = "No Figma references found for this file"
ERROR_PREFIX = "Error finding Figma references"


class ResultSink:
    """Receives search output. The search never reads anything back."""

    def start(self, file_name: str) -> None:
        pass

    def add_result(self, result: FigmaReferenceResult) -> None:
        pass

    def update_progress(self, processed: int, total: int) -> None:
        pass

    def finish(self, results: List[FigmaReferenceResult]) -> None:
        pass

    def show_no_results(self, message: str) -> None:
        pass

    def show_error(self, message: str) -> None:
        pass


class ConsoleSink(ResultSink):
    """Writes results to a text stream, as plain text or JSON lines."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        error_stream: Optional[TextIO] = None,
        as_json: bool = False,
    ):
        self._stream = stream or sys.stdout
        self._error_stream = error_stream or sys.stderr
        self._as_json = as_json
        self._file_name = ""

    def _write(self, text: str) -> None:
        self._stream.write(text + "\n")
        self._stream.flush()

    def start(self, file_name: str) -> None:
        self._file_name = file_name
        if not self._as_json:
            self._write(f"Searching git history of {file_name} for Figma references...")

    def add_result(self, result: FigmaReferenceResult) -> None:
        if self._as_json:
            self._write(json.dumps(result.to_dict()))
            return

        self._write(f"\n{result.pr_url} (by {result.author})")
        for url in result.figma_urls:
            self._write(f"  - {url}")

    def update_progress(self, processed: int, total: int) -> None:
        logger.debug(f"Processed {processed}/{total} commit(s)")
        # Results own stdout
        if not self._as_json:
            self._error_stream.write(f"Processed {processed}/{total} commit(s)\n")
            self._error_stream.flush()

    def finish(self, results: List[FigmaReferenceResult]) -> None:
        if results and not self._as_json:
            self._write(f"\nFound {len(results)} PR(s) with Figma references in {self._file_name}")

    def show_no_results(self, message: str) -> None:
        if self._as_json:
            return
        self._write(message)

    def show_error(self, message: str) -> None:
        self._error_stream.write(message + "\n")


async def run_search(
    service: FigmaReferenceService,
    file_path: Optional[str],
    sink: ResultSink,
) -> bool:
    """Run a search and push everything it produces to a sink.

    Args:
        service: Configured reference service.
        file_path: File to search; empty or None means nothing is open.
        sink: Destination for results, progress and terminal states.

    Returns:
        True unless the search failed.
    """
    if not file_path:
        sink.show_no_results(NO_FILE_MESSAGE)
        return True

    sink.start(os.path.basename(file_path) or file_path)
    try:
        results = await service.find_figma_references(
            file_path,
            on_result_found=sink.add_result,
            on_progress=sink.update_progress,
        )
    except Exception as e:
        logger.error(f"Search failed for {file_path}: {e}")
        sink.show_error(f"{ERROR_PREFIX}: {e}")
        return False

    sink.finish(results)
    if not results:
        sink.show_no_results(NO_RESULTS_MESSAGE)
    return True
