"""SpellCheckEngine - incremental spell-check annotations for a live document."""

import logging
import time
from concurrent.futures import Future
from typing import TYPE_CHECKING, Callable, Iterable, List, Optional, Sequence

if TYPE_CHECKING:
    from proofmark.engine_builder import SpellCheckEngineBuilder

from proofmark.annotation.annotations import AnnotationSet
from proofmark.annotation.debounce import Debouncer
from proofmark.annotation.lifecycle import AcceptedResult, CheckRequestManager
from proofmark.annotation.resolver import SpanResolver
from proofmark.checking.checker import SpellChecker
from proofmark.checking.service import CheckerService, CheckOutcome
from proofmark.core.config import EngineConfig
from proofmark.core.delta import EditDelta, StepMap
from proofmark.core.dictionary import CustomWordSet
from proofmark.core.exceptions import CheckerError, CheckerUnavailableError
from proofmark.core.types import ErrorSpan, ResolvedAnnotation
from proofmark.document.model import EditorDocument
from proofmark.document.projector import TextProjector
from proofmark.observability.logging import correlation_context

logger = logging.getLogger(__name__)


class SpellCheckEngine:
    """Keeps spell-check annotations aligned with a document that keeps changing.

    The engine owns everything scoped to one editor session: the pending check
    requests with their accumulated edit deltas, the debounce timer and the
    rendered annotation set. All of its methods are meant to be called from a
    single control thread. Checks run on the checker service's worker threads
    and their outcomes are only applied when the control thread calls
    ``process_results`` or ``tick``.

    Checker failures never escape to the caller: an initialization failure is
    logged once and leaves the engine unavailable (no annotations) until a
    later ``initialize`` succeeds.

    Examples:
        # Drive the engine from an editor loop
        engine = SpellCheckEngine(SymSpellChecker())
        engine.initialize()
        engine.attach(document)
        ...
        document, step = document.insert_text(5, "x")
        engine.on_transaction(document, [step])
        engine.tick()

        # One-shot check
        engine.attach(document)
        engine.wait_for_results(timeout=10)
        for annotation in engine.annotations:
            print(annotation.word, annotation.document_start)
    """

    def __init__(
        self,
        checker: SpellChecker,
        config: Optional[EngineConfig] = None,
        custom_words: Optional[Iterable[str]] = None,
        service: Optional[CheckerService] = None,
        clock: Callable[[], float] = time.monotonic,
        projector: Optional[TextProjector] = None,
    ):
        """Initialize the engine.

        Args:
            checker: Spell checker backend; its custom word set becomes the
                engine's custom word set
            config: Engine configuration, defaults to ``EngineConfig()``
            custom_words: Words to seed the custom word set with
            service: Checker service to dispatch through; one owning a thread
                pool of ``config.max_workers`` is created when omitted
            clock: Monotonic clock driving debounce and eviction
            projector: Plain-text projector, defaults to ``TextProjector()``
        """
        self.config = config or EngineConfig()
        self._checker = checker
        self.custom_words: CustomWordSet = checker.custom_words
        for word in custom_words or ():
            self.custom_words.add(word)

        self._owns_service = service is None
        self._service = service or CheckerService(checker, max_workers=self.config.max_workers)
        self._clock = clock
        self._projector = projector or TextProjector()
        self._resolver = SpanResolver()
        self._requests = CheckRequestManager(
            self._service, clock=clock, max_pending_age=self.config.max_pending_age
        )
        self._debouncer = Debouncer(self.config.debounce_seconds, clock=clock)
        self._annotations = AnnotationSet.empty()
        self._document: Optional[EditorDocument] = None
        self._available = checker.is_initialized
        self._closed = False

    @classmethod
    def builder(cls) -> "SpellCheckEngineBuilder":
        """Create a builder for advanced configuration.

        Examples:
            engine = SpellCheckEngine.builder()
                .with_debounce(0.25)
                .with_custom_words(["Kevin"])
                .build()
        """
        from proofmark.engine_builder import SpellCheckEngineBuilder

        return SpellCheckEngineBuilder()

    # -- checker availability ------------------------------------------------

    def initialize(
        self, affix_path: Optional[str] = None, dictionary_path: Optional[str] = None
    ) -> bool:
        """Initialize the checker with the custom words.

        Paths default to the ones derived from the configuration. Returns
        whether the checker is now available.
        """
        if affix_path is None and dictionary_path is None:
            affix_path, dictionary_path = self.config.resolve_dictionary_paths()

        # Checks issued against the previous dictionary are stale, and any that
        # run while the checker reloads fail as unavailable.
        self._debouncer.cancel()
        self._requests.clear()
        try:
            self._service.init(affix_path, dictionary_path, self.custom_words.words)
        except CheckerError as e:
            logger.error(f"Spell checker initialization failed: {e.message}")
            self._mark_unavailable()
            return False

        self._available = True
        logger.info(f"Spell checker available ({self._checker.backend_name})")
        if self._document is not None:
            self.request_check()
        return True

    def _mark_unavailable(self) -> None:
        self._available = False
        self._debouncer.cancel()
        self._requests.clear()
        self._annotations = AnnotationSet.empty()

    # -- document events -----------------------------------------------------

    def attach(self, document: EditorDocument) -> None:
        """Start tracking ``document``, discarding state from any previous one."""
        self._document = document
        self._requests.clear()
        self._debouncer.cancel()
        self._annotations = AnnotationSet.empty()
        if self._available:
            self.request_check()

    def on_transaction(self, document: EditorDocument, step_maps: Sequence[StepMap]) -> None:
        """Record one document transaction.

        Must be called synchronously, in order, for every transaction applied
        to the attached document. ``document`` is the state after the
        transaction.
        """
        steps = [step for step in step_maps if not step.is_identity]
        self._document = document
        if not steps:
            return

        self._requests.on_edits(steps)
        if self._annotations:
            delta = EditDelta.empty().extend_all(steps)
            self._annotations = self._annotations.map_delta(delta, document.content_size)
        if self._available:
            self._debouncer.arm()

    def request_check(self) -> Optional[int]:
        """Project the current document and issue a check immediately."""
        if self._closed or not self._available or self._document is None:
            return None

        self._debouncer.cancel()
        projection = self._projector.project(self._document)
        try:
            return self._requests.issue(projection)
        except CheckerError as e:
            logger.warning(f"Spell check not issued: {e.message}")
            return None

    # -- results -------------------------------------------------------------

    def on_result(self, request_id: int, spans: Iterable[ErrorSpan]) -> bool:
        """Apply a check result if its request is still pending.

        Returns whether the result replaced the annotation set.
        """
        accepted = self._requests.on_result(request_id, spans)
        if accepted is None:
            return False
        self._apply(accepted)
        return True

    def _apply(self, accepted: AcceptedResult) -> None:
        if self._document is None:
            return
        with correlation_context(f"check-{accepted.request_id}"):
            annotations = self._resolver.resolve(
                accepted.spans,
                accepted.delta,
                accepted.request.projection,
                self._document.content_size,
            )
            self._annotations = AnnotationSet(annotations)
            logger.debug(
                f"Applied check {accepted.request_id}: {len(annotations)} annotations "
                f"after {len(accepted.delta)} edits"
            )

    def _handle_outcome(self, outcome: CheckOutcome) -> bool:
        if outcome.ok:
            return self.on_result(outcome.request_id, outcome.spans)

        if not self._requests.discard(outcome.request_id):
            logger.debug(f"Ignoring failure of stale check {outcome.request_id}")
            return False

        if isinstance(outcome.error, CheckerUnavailableError):
            if self._available:
                logger.error(f"Spell checker became unavailable: {outcome.error}")
            self._mark_unavailable()
        else:
            logger.warning(f"Check {outcome.request_id} failed: {outcome.error!r}")
        return False

    def process_results(self) -> int:
        """Apply outcomes delivered by the checker since the last call.

        Returns the number of results that replaced the annotation set.
        """
        applied = 0
        for outcome in self._service.drain():
            if self._handle_outcome(outcome):
                applied += 1
        return applied

    def tick(self, now: Optional[float] = None) -> int:
        """Run one control-loop iteration.

        Applies delivered results, evicts requests pending for longer than
        ``config.max_pending_age`` and issues the debounced check when due.
        """
        now = self._clock() if now is None else now
        applied = self.process_results()
        self._requests.evict_expired(now)
        if self._debouncer.fire_if_due(now):
            self.request_check()
        return applied

    def wait_for_results(self, timeout: Optional[float] = None) -> int:
        """Block until no check is pending or ``timeout`` elapses."""
        deadline = None if timeout is None else time.monotonic() + timeout
        applied = self.process_results()
        while len(self._requests):
            remaining = None if deadline is None else deadline - time.monotonic()
            if remaining is not None and remaining <= 0:
                logger.warning(f"Timed out waiting for {len(self._requests)} pending checks")
                break
            outcome = self._service.next_outcome(timeout=remaining)
            if outcome is None:
                continue
            if self._handle_outcome(outcome):
                applied += 1
        return applied

    # -- custom words and suggestions ----------------------------------------

    def add_word(self, word: str) -> bool:
        """Accept ``word`` and re-check immediately so its annotations go away.

        Returns whether the word was new.
        """
        added = self._service.add_custom_word(word)
        if added:
            logger.info(f"Added custom word {word!r}")
        self.request_check()
        return added

    def suggest(self, word: str) -> "Future[List[str]]":
        """Look up replacements off-thread."""
        if not self._available or self._closed:
            future: "Future[List[str]]" = Future()
            future.set_result([])
            return future
        return self._service.submit_suggest(word)

    # -- state ---------------------------------------------------------------

    @property
    def available(self) -> bool:
        return self._available

    @property
    def document(self) -> Optional[EditorDocument]:
        return self._document

    @property
    def annotations(self) -> AnnotationSet:
        return self._annotations

    @property
    def error_count(self) -> int:
        return len(self._annotations)

    def annotation_at(self, position: int) -> Optional[ResolvedAnnotation]:
        return self._annotations.at(position)

    @property
    def pending_request_ids(self) -> List[int]:
        return self._requests.pending_ids

    @property
    def check_scheduled(self) -> bool:
        return self._debouncer.armed

    def close(self) -> None:
        """Tear down the session; pending results are dropped."""
        if self._closed:
            return
        self._closed = True
        self._debouncer.cancel()
        self._requests.clear()
        self._document = None
        if self._owns_service:
            self._service.shutdown(wait=False)

    def __enter__(self) -> "SpellCheckEngine":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
