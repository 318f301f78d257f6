"""
Department Assistant.

Sends a question plus the department's concatenated documents to the
hosted chat model and returns the generated text. Failures never reach
the caller as exceptions: they are logged and turned into a fixed
apology string for the chat window.
"""
from langchain_core.output_parsers import StrOutputParser
from langchain_core.runnables import Runnable
from langchain_openai import ChatOpenAI
import logging

from cliniq.config import settings
from cliniq.models import Department, Document
from cliniq.services.prompt_builder import ASSISTANT_PROMPT, build_prompt

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_TEXT = "I'm sorry, I couldn't process that query."
UPSTREAM_ERROR_TEXT = (
    "Error communicating with the private LLM node. Please check server status."
)


class UpstreamError(Exception):
    """The remote model call failed or is not configured."""


class HealthcareAssistant:
    """
    Wraps the remote model. Pass `llm` to substitute any LangChain
    runnable (tests use an echoing RunnableLambda).
    """

    def __init__(self, llm: Runnable = None):
        self._llm = llm

    @property
    def llm(self) -> Runnable:
        if self._llm is None:
            if not settings.openai_api_key:
                raise UpstreamError("OPENAI_API_KEY is not set")
            self._llm = ChatOpenAI(
                model=settings.openai_model,
                temperature=settings.llm_temperature,
                openai_api_key=settings.openai_api_key,
                max_tokens=settings.max_tokens,
            )
        return self._llm

    def _chain(self) -> Runnable:
        try:
            return ASSISTANT_PROMPT | self.llm | StrOutputParser()
        except UpstreamError:
            raise
        except Exception as e:
            raise UpstreamError(f"Could not build the model client: {e}") from e

    def generate(self, question: str, department: Department, documents: list[Document]) -> str:
        """Invoke the model. Raises UpstreamError on any failure."""
        chain = self._chain()
        try:
            return chain.invoke(build_prompt(question, department, documents))
        except Exception as e:
            raise UpstreamError(str(e)) from e

    async def agenerate(self, question: str, department: Department, documents: list[Document]) -> str:
        """Async variant of generate(); the event loop stays free during the call."""
        chain = self._chain()
        try:
            return await chain.ainvoke(build_prompt(question, department, documents))
        except Exception as e:
            raise UpstreamError(str(e)) from e

    def ask(self, question: str, department: Department, documents: list[Document]) -> str:
        try:
            answer = self.generate(question, department, documents)
        except UpstreamError as e:
            logger.error(f"AI assistant error for {department.value}: {e}")
            return UPSTREAM_ERROR_TEXT
        return answer or EMPTY_RESPONSE_TEXT

    async def aask(self, question: str, department: Department, documents: list[Document]) -> str:
        try:
            answer = await self.agenerate(question, department, documents)
        except UpstreamError as e:
            logger.error(f"AI assistant error for {department.value}: {e}")
            return UPSTREAM_ERROR_TEXT
        return answer or EMPTY_RESPONSE_TEXT
