"""
CounselCare Composition Root

Wires settings, logging, monitoring, storage and the conversation
services into a ready-to-use Runtime:
- Logging and Sentry initialization
- Storage backend selection
- Companion and chatbot orchestrators sharing one lexicon and one
  crisis log
- Contact-form triage

Presentation layers call bootstrap() once at startup and keep the
returned Runtime for the lifetime of the process.
"""

import random
from dataclasses import dataclass
from typing import Optional

from counselcare import __version__
from counselcare.config import Settings, get_settings
from counselcare.config.logging_config import configure_logging, get_logger
from counselcare.domain.clock import Clock, utc_now
from counselcare.domain.enums.conversation import ChatSurface
from counselcare.infrastructure.metrics import update_system_info
from counselcare.infrastructure.monitoring import init_sentry
from counselcare.infrastructure.storage import (
    ConversationHistoryRepository,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
)
from counselcare.services.detection import SentimentClassifier, load_lexicon
from counselcare.services.orchestration import ConversationOrchestrator, EscalationHandler
from counselcare.services.responses import CHATBOT_PROFILE, COMPANION_PROFILE, ResponseSelector
from counselcare.services.safety import (
    ContactTriageService,
    CrisisEventLogger,
    CrisisResourceDirectory,
    RiskAssessor,
)

logger = get_logger(__name__)


@dataclass
class Runtime:
    """
    Fully wired services for one process.

    Attributes:
        settings: Settings the runtime was built from
        store: Key-value persistence backend
        crisis_logger: Crisis log shared by every surface
        companion: AI companion orchestrator
        chatbot: Site chatbot orchestrator
        contact_triage: Contact-form triage service
    """

    settings: Settings
    store: KeyValueStore
    crisis_logger: CrisisEventLogger
    companion: ConversationOrchestrator
    chatbot: ConversationOrchestrator
    contact_triage: ContactTriageService

    def orchestrator_for(self, surface: ChatSurface) -> ConversationOrchestrator:
        """
        Get the orchestrator serving a chat surface.

        Raises:
            ValueError: If the surface is not conversational
        """
        if surface == ChatSurface.COMPANION:
            return self.companion
        if surface == ChatSurface.CHATBOT:
            return self.chatbot
        raise ValueError(f"No conversation orchestrator for surface '{surface}'")


def build_store(settings: Settings) -> KeyValueStore:
    """Create the configured storage backend."""
    if settings.storage.backend == "file":
        return JsonFileKeyValueStore(settings.storage.directory)
    return InMemoryKeyValueStore()


def bootstrap(
    settings: Optional[Settings] = None,
    store: Optional[KeyValueStore] = None,
    rng: Optional[random.Random] = None,
    clock: Clock = utc_now,
    escalation_handler: Optional[EscalationHandler] = None,
) -> Runtime:
    """
    Build the application runtime.

    Args:
        settings: Application settings (defaults to get_settings())
        store: Storage backend override
        rng: Random source for template choice
        clock: Timestamp source
        escalation_handler: Presentation callback for crisis turns

    Returns:
        Runtime with every service wired
    """
    settings = settings or get_settings()
    configure_logging(settings)

    init_sentry(
        dsn=settings.monitoring.dsn.get_secret_value(),
        environment=settings.env,
        release=f"counselcare@{__version__}",
        sample_rate=settings.monitoring.sample_rate,
        traces_sample_rate=settings.monitoring.traces_sample_rate,
    )
    update_system_info(settings.env, version=__version__)

    if store is None:
        store = build_store(settings)
    rng = rng or random.Random()

    # Lexicon errors are fatal misconfiguration and propagate
    lexicon = load_lexicon(settings.lexicon_path)
    classifier = SentimentClassifier(lexicon)
    risk_assessor = RiskAssessor(lexicon)
    resources = CrisisResourceDirectory(settings.resources_path)

    crisis_logger = CrisisEventLogger(
        store,
        log_key=settings.storage.crisis_log_key,
        context_size=settings.chat.crisis_context_size,
        clock=clock,
    )
    history_repository = ConversationHistoryRepository(
        store,
        key_prefix=settings.storage.history_key_prefix,
        max_size=settings.chat.history_retention,
    )

    def build_orchestrator(selector: ResponseSelector) -> ConversationOrchestrator:
        return ConversationOrchestrator(
            classifier=classifier,
            risk_assessor=risk_assessor,
            selector=selector,
            crisis_logger=crisis_logger,
            history_repository=history_repository,
            resource_directory=resources,
            escalation_handler=escalation_handler,
            clock=clock,
            crisis_context_size=settings.chat.crisis_context_size,
            history_max_size=settings.chat.history_retention,
            default_country=settings.chat.default_country,
        )

    companion = build_orchestrator(
        ResponseSelector(
            COMPANION_PROFILE,
            rng=rng,
            follow_up_lookback=settings.chat.follow_up_lookback,
        )
    )
    chatbot = build_orchestrator(ResponseSelector(CHATBOT_PROFILE, rng=rng))

    runtime = Runtime(
        settings=settings,
        store=store,
        crisis_logger=crisis_logger,
        companion=companion,
        chatbot=chatbot,
        contact_triage=ContactTriageService(classifier, risk_assessor, crisis_logger),
    )

    logger.info(
        "CounselCare core initialized",
        env=settings.env,
        version=__version__,
        storage_backend=settings.storage.backend,
        custom_lexicon=settings.lexicon_path is not None,
    )
    return runtime
