"""
Bulk Text Parsing Service
Extracts employee candidates from unstructured text with Azure OpenAI.
"""
import logging
from typing import List, Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_core.output_parsers import JsonOutputParser
from langchain_openai import AzureChatOpenAI

from staff_roster.config.settings import (
    AZURE_OPENAI_API_KEY,
    AZURE_OPENAI_API_VERSION,
    AZURE_OPENAI_ENDPOINT,
    BULK_PARSE_PROMPT_PATH,
    CHAT_MODEL,
)
from staff_roster.exceptions import ExternalServiceError, ValidationError
from staff_roster.models.employee_schema import ParsedEmployee
from staff_roster.utils.prompt_loader import load_prompt

logger = logging.getLogger(__name__)

# JSON parser for structured output (tolerates ```json fences)
json_parser = JsonOutputParser()


def _get_llm() -> BaseChatModel:
    if not AZURE_OPENAI_API_KEY:
        logger.error("Azure OpenAI API key missing")
        raise ExternalServiceError("API Key is not configured.")
    return AzureChatOpenAI(
        model=CHAT_MODEL,
        api_key=AZURE_OPENAI_API_KEY,
        azure_endpoint=AZURE_OPENAI_ENDPOINT,
        api_version=AZURE_OPENAI_API_VERSION,
        temperature=0.1,  # Low temperature for consistent extraction
    )


async def parse_bulk_employee_data(
    text: str,
    llm: Optional[BaseChatModel] = None,
    prompt: Optional[str] = None,
) -> List[ParsedEmployee]:
    """
    Parse free text into partial employee candidates.

    Args:
        text: Unstructured employee list pasted by the user
        llm: Chat model to use (defaults to the configured Azure OpenAI deployment)
        prompt: System prompt (defaults to the bulk parse prompt file)

    Returns:
        Candidates that carry at least a name

    Raises:
        ValidationError: text is empty
        ExternalServiceError: no API key, request failure or unusable response
    """
    if not text or not text.strip():
        raise ValidationError("Paste some employee text to parse.")

    if llm is None:
        llm = _get_llm()
    if prompt is None:
        prompt = load_prompt(BULK_PARSE_PROMPT_PATH)

    messages = [
        SystemMessage(content=prompt),
        HumanMessage(content=f'Text to parse:\n"{text}"'),
    ]

    try:
        response = await llm.ainvoke(messages)
        result = json_parser.parse(response.content)
        if not isinstance(result, list):
            raise TypeError(f"Expected a JSON array, got {type(result).__name__}")
        parsed = [
            ParsedEmployee.model_validate(item)
            for item in result
            if isinstance(item, dict) and item.get("name")
        ]
    except Exception as e:
        logger.error("AI parse error: %s", e)
        raise ExternalServiceError("Failed to parse employee data using AI.") from e

    logger.info("AI parser returned %d candidates", len(parsed))
    return parsed
