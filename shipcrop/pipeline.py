"""
One label run: load or merge, then crop / filter, then serialize.

Each run builds its documents from scratch and drops them afterwards.
A LabelPipeline accepts one run at a time.
"""

import enum
import logging
import threading
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Sequence

from .cords import CropAction, FilterAction, Passthrough, resolve_action
from .crop import crop_pages
from .errors import NoInputDocuments, PipelineBusy
from .loader import load_document, open_text_document, serialize
from .pages import filter_pages, merge_documents

LOGGER = logging.getLogger(__name__)


class Mode(str, enum.Enum):
    CROP = "crop"
    MERGE = "merge"


class RunState(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    MERGING = "merging"
    FILTERING = "filtering"
    CROPPING = "cropping"
    SERIALIZING = "serializing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class LabelRequest:
    buffers: Sequence[bytes]
    mode: Mode = Mode.CROP
    platform: Optional[str] = None
    variant: Optional[str] = None
    extract_sku: bool = False
    options: FrozenSet[str] = field(default_factory=frozenset)


class LabelPipeline:
    def __init__(self, registry=None):
        self.registry = registry
        self.state = RunState.IDLE
        self._lock = threading.Lock()

    def _enter(self, state):
        LOGGER.debug("%s -> %s", self.state.value, state.value)
        self.state = state

    def run(self, request: LabelRequest) -> bytes:
        if not self._lock.acquire(blocking=False):
            raise PipelineBusy("A label run is already in progress")
        try:
            result = self._run(request)
            self._enter(RunState.DONE)
        except Exception:
            self._enter(RunState.FAILED)
            LOGGER.error("Label run failed", exc_info=True)
            raise
        finally:
            self._lock.release()
        return result

    def _run(self, request: LabelRequest) -> bytes:
        self._enter(RunState.IDLE)
        # reject bad ids before touching any input
        action = resolve_action(
            request.platform, request.variant, request.options, self.registry
        )
        if not request.buffers:
            raise NoInputDocuments("No input PDFs given")

        self._enter(RunState.LOADING)
        if request.mode == Mode.MERGE or len(request.buffers) > 1:
            self._enter(RunState.MERGING)
            working = serialize(merge_documents(request.buffers))
        else:
            working = request.buffers[0]
        source = load_document(working)

        if isinstance(action, Passthrough) and not request.extract_sku:
            self._enter(RunState.SERIALIZING)
            LOGGER.info("Passed through %d pages", source.page_count)
            return working

        text_doc = open_text_document(working) if request.extract_sku else None
        try:
            if isinstance(action, CropAction):
                self._enter(RunState.CROPPING)
                output = crop_pages(source, action.region, action.keep, text_doc)
            elif isinstance(action, FilterAction) and text_doc is None:
                self._enter(RunState.FILTERING)
                output = filter_pages(source, action.keep)
            else:
                # filter or passthrough that still needs SKU stamps
                self._enter(RunState.FILTERING)
                keep = action.keep if isinstance(action, FilterAction) else None
                output = crop_pages(source, None, keep, text_doc)
        finally:
            if text_doc is not None:
                text_doc.close()

        self._enter(RunState.SERIALIZING)
        data = serialize(output)
        LOGGER.info(
            "Prepared %d label pages from %d input(s)",
            len(output.pages),
            len(request.buffers),
        )
        return data


def process_labels(
    buffers: Sequence[bytes],
    mode=Mode.CROP,
    platform=None,
    variant=None,
    extract_sku=False,
    options=(),
    registry=None,
) -> bytes:
    """Run one request on a fresh pipeline."""
    request = LabelRequest(
        buffers=tuple(buffers),
        mode=Mode(mode),
        platform=platform,
        variant=variant,
        extract_sku=extract_sku,
        options=frozenset(options),
    )
    return LabelPipeline(registry).run(request)
