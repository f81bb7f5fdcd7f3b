"""Caller-owned dashboard state: dataset, profile, charts and chat history.

The profiling engine holds no state of its own. This session object threads
engine results through one dashboard, replaces them wholesale when a new
dataset is loaded, and appends charts extracted from agent replies with
copy-on-append semantics. Only one conversational turn runs at a time;
questions submitted while a turn is in flight are ignored.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from langchain_core.language_models.chat_models import BaseChatModel

from agent.prompts import build_chart_prompt, build_data_context
from agent.viz.extraction import ExtractionResult, extract_chart_spec
from profiling.engine import DatasetProfile, profile_dataset, resolve_columns
from profiling.models import KPI, ChartSpec, append_chart

logger = logging.getLogger(__name__)

ASSISTANT_ERROR_MESSAGE = "Sorry, I encountered an error processing your request."


@dataclass(frozen=True)
class ChatMessage:
    role: str
    content: str


@dataclass(frozen=True)
class ChatTurn:
    """One completed question/answer exchange."""

    question: str
    reply: ChatMessage
    extraction: Optional[ExtractionResult] = None


def _message_text(content: Any) -> str:
    # Some providers return a list of content blocks instead of a plain string.
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return str(content)


class DashboardSession:
    """Application state for one dashboard."""

    def __init__(self):
        self.dataset_name = ""
        self.records: List[Mapping[str, Any]] = []
        self.columns: List[str] = []
        self.profile = DatasetProfile()
        self.charts: List[ChartSpec] = []
        self.messages: List[ChatMessage] = []
        self._turn_lock = threading.Lock()

    @property
    def kpis(self) -> List[KPI]:
        return self.profile.kpis

    @property
    def busy(self) -> bool:
        return self._turn_lock.locked()

    def load_dataset(
        self,
        records: Sequence[Mapping[str, Any]],
        columns: Optional[Iterable[str]] = None,
        name: str = "",
    ) -> DatasetProfile:
        """Profile a dataset and replace the dashboard's KPIs and charts."""
        column_names = resolve_columns(records, columns)
        profile = profile_dataset(records, column_names)

        self.dataset_name = name
        self.records = list(records)
        self.columns = column_names
        self.profile = profile
        self.charts = list(profile.charts)
        return profile

    def add_chart(self, chart: ChartSpec) -> List[ChartSpec]:
        self.charts = append_chart(self.charts, chart)
        return self.charts

    def _append_message(self, role: str, content: str) -> ChatMessage:
        message = ChatMessage(role=role, content=content)
        self.messages = [*self.messages, message]
        return message

    def _invoke_agent(self, question: str, llm: BaseChatModel) -> str:
        context = build_data_context(self.dataset_name, self.records, self.columns, self.charts)
        chain = build_chart_prompt() | llm
        response = chain.invoke({"data_context": context, "question": question})
        return _message_text(response.content)

    def ask(self, question: str, llm: BaseChatModel) -> Optional[ChatTurn]:
        """Send a question to the agent and fold any returned chart into the dashboard.

        Returns None when the question is blank or another turn is running.
        Agent failures are reported to the user as an assistant message.
        """
        if not question or not question.strip():
            return None
        if not self._turn_lock.acquire(blocking=False):
            logger.info("Ignoring question while a previous turn is in flight")
            return None

        try:
            self._append_message("user", question)
            try:
                reply_text = self._invoke_agent(question, llm)
            except Exception as e:
                logger.error(f"Error calling chat model: {e}")
                reply = self._append_message("assistant", ASSISTANT_ERROR_MESSAGE)
                return ChatTurn(question=question, reply=reply)

            extraction = extract_chart_spec(reply_text)
            if extraction.chart is not None:
                self.add_chart(extraction.chart)
            reply = self._append_message("assistant", extraction.display_text)
            return ChatTurn(question=question, reply=reply, extraction=extraction)
        finally:
            self._turn_lock.release()
