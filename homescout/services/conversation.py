"""
Conversation log and the caller-owned state behind the search form and
assistant panel. Nothing here is global: the presentation layer creates a
SearchState and an AssistantSession per user and passes them around.
"""
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .narrative import compose
from .resolver import PlaceResolver, Resolution
from ..core.config import settings
from ..core.utils import split_place_key
from ..data.base import MetricsRecord

logger = logging.getLogger(__name__)

GREETING = "Ask me about schools, safety, walkability, or resale outlook."

class Speaker(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"

@dataclass(frozen=True)
class Message:
    speaker: Speaker
    text: str

class ConversationLog:
    """Append-only, ordered message history."""
    def __init__(self, messages: Optional[List[Message]] = None):
        self._messages: List[Message] = list(messages or [])

    def append(self, message: Message) -> None:
        self._messages.append(message)

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)

    def __len__(self) -> int:
        return len(self._messages)

DEFAULT_PLACE = "Fullerton, CA"

@dataclass
class SearchState:
    """
    Search form inputs plus the current selection. ``selected_key`` and
    ``record`` are only ever set together, by search() or pick(); a bare
    SearchState() has no selection yet. Use initial() for the landing state.
    """
    city_input: str = ""
    region_input: str = ""
    selected_key: Optional[str] = None
    record: Optional[Resolution] = None

    @classmethod
    def initial(cls, resolver: PlaceResolver, key: str = DEFAULT_PLACE) -> "SearchState":
        """State with ``key`` already selected and resolved."""
        state = cls()
        state.pick(key, resolver)
        return state

    @property
    def found(self) -> bool:
        return isinstance(self.record, MetricsRecord)

    def search(self, resolver: PlaceResolver) -> Resolution:
        """Resolve whatever is currently typed into the city/region inputs."""
        self.selected_key = resolver.key_for(self.city_input, self.region_input)
        self.record = resolver.resolve(self.city_input, self.region_input)
        return self.record

    def pick(self, key: str, resolver: PlaceResolver) -> Resolution:
        """Select a quick-pick key and mirror it back into the inputs."""
        self.city_input, self.region_input = split_place_key(key)
        self.selected_key = key
        self.record = resolver.resolve_key(key)
        return self.record

class AssistantSession:
    """
    Posts a question to the log and the quick-take reply after a short,
    cosmetic delay. A new question supersedes a reply still waiting to be
    delivered; the superseded reply is dropped.
    """
    def __init__(self, state: SearchState, log: Optional[ConversationLog] = None, delay_ms: Optional[int] = None):
        self.state = state
        self.log = log if log is not None else ConversationLog([Message(Speaker.ASSISTANT, GREETING)])
        self.delay_ms = settings.ASSISTANT_REPLY_DELAY_MS if delay_ms is None else delay_ms
        self._pending: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def ask(self, question: str) -> Optional[asyncio.Task]:
        """Must be called from a running event loop. Blank questions are ignored."""
        text = question.strip()
        if not text:
            return None
        loop = asyncio.get_running_loop()
        self.cancel_pending()
        self.log.append(Message(Speaker.USER, text))
        # Reply reflects the selection at the time of asking
        reply = compose(self.state.selected_key or "", self.state.record, text)
        self._pending = loop.create_task(self._deliver(reply))
        return self._pending

    async def _deliver(self, reply: str) -> None:
        await asyncio.sleep(self.delay_ms / 1000)
        self.log.append(Message(Speaker.ASSISTANT, reply))

    def cancel_pending(self) -> bool:
        if not self.pending:
            return False
        self._pending.cancel()
        logger.debug("pending assistant reply discarded")
        return True

    async def wait(self) -> None:
        """Wait for the pending reply, if any. A cancelled reply is not an error."""
        task = self._pending
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise
