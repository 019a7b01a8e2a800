"""
Definition Service
Looks up word definitions through Groq's OpenAI-compatible chat API and
provides templated fallback definitions when the service is unavailable.
"""
import json
import logging
from typing import Optional

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from speedread.config import Settings, get_settings
from speedread.core.exceptions import DefinitionLookupError
from speedread.models.vocabulary import WordDefinition

logger = logging.getLogger(__name__)


# Offline entries used by the fallback path
BUILTIN_DEFINITIONS: dict[str, WordDefinition] = {
    "magnificent": WordDefinition(
        definition="Extremely beautiful, elaborate, or impressive",
        part_of_speech="adjective",
        pronunciation="/mæɡˈnɪfɪsənt/",
        etymology="From Latin magnificus, from magnus (great) + facere (to make)",
        examples=[
            "The cathedral has a magnificent Gothic architecture.",
            "She gave a magnificent performance at the concert.",
            "The view from the mountain top was absolutely magnificent."
        ],
        synonyms=["splendid", "superb", "glorious", "spectacular"],
        antonyms=["ordinary", "modest", "plain", "simple"]
    ),
    "elaborate": WordDefinition(
        definition="Involving many carefully arranged parts or details; detailed and complicated in design",
        part_of_speech="adjective",
        pronunciation="/ɪˈlæbərət/",
        etymology="From Latin elaboratus, past participle of elaborare (to work out)",
        examples=[
            "The wedding had an elaborate ceremony.",
            "She created an elaborate plan for the project.",
            "The cake had elaborate decorations."
        ],
        synonyms=["complex", "intricate", "detailed", "ornate"],
        antonyms=["simple", "plain", "basic", "minimal"]
    ),
}


def fallback_definition(word: str) -> WordDefinition:
    """Built-in entry for word, or a generic templated definition."""
    builtin = BUILTIN_DEFINITIONS.get(word.lower())
    if builtin:
        return builtin.model_copy(deep=True)

    return WordDefinition(
        definition=f'A word with specific meaning in context: "{word}"',
        part_of_speech="unknown",
        pronunciation=f"/{word}/",
        examples=[
            f"The {word} was notable in the sentence.",
            f"Understanding {word} helps with comprehension.",
            f"{word[:1].upper()}{word[1:]} appears in academic texts."
        ]
    )


class DefinitionService:
    """Service for dictionary lookups via the Groq chat completions API"""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.model = self.settings.GROQ_MODEL
        self.max_tokens = self.settings.GROQ_MAX_TOKENS
        self.temperature = self.settings.GROQ_TEMPERATURE
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        """Lazily built client; requires GROQ_API_KEY."""
        if self._client is None:
            if not self.settings.GROQ_API_KEY:
                raise OpenAIError("GROQ_API_KEY is not configured")
            self._client = AsyncOpenAI(
                api_key=self.settings.GROQ_API_KEY,
                base_url=self.settings.GROQ_BASE_URL,
                timeout=self.settings.GROQ_TIMEOUT_SECONDS
            )
        return self._client

    async def chat_completion(
        self,
        messages: list[dict],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None
    ) -> str:
        """
        Send a chat completion request.

        Args:
            messages: List of message dicts with 'role' and 'content'
            max_tokens: Override default max_tokens
            temperature: Override default temperature

        Returns:
            The assistant's response text

        Raises:
            OpenAIError: request failed
            ValueError: the completion carried no choices
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=max_tokens or self.max_tokens,
                temperature=temperature if temperature is not None else self.temperature
            )
            if not response.choices:
                raise ValueError("Groq returned a completion with no choices")
            return response.choices[0].message.content or ""
        except OpenAIError as e:
            logger.error(f"Groq chat completion error: {e}")
            raise

    async def lookup_definition(self, word: str, context_sentence: str) -> WordDefinition:
        """
        Look up a word as used in a context sentence.

        Args:
            word: The vocabulary word
            context_sentence: Sentence the word was found in

        Returns:
            WordDefinition

        Raises:
            DefinitionLookupError: service unreachable or response malformed
        """
        prompt = f"""Define the word "{word}" as it is used in this sentence:
"{context_sentence}"

Respond in JSON format:
{{
    "definition": "clear definition",
    "part_of_speech": "noun, verb, adjective, ...",
    "pronunciation": "IPA transcription",
    "etymology": "short origin note",
    "examples": ["example sentence 1", "example sentence 2", "example sentence 3"],
    "synonyms": ["synonym1", "synonym2"],
    "antonyms": ["antonym1", "antonym2"]
}}"""

        messages = [
            {"role": "system", "content": "You are a concise English dictionary. Always respond with valid JSON."},
            {"role": "user", "content": prompt}
        ]

        try:
            response = await self.chat_completion(messages)
        except (OpenAIError, ValueError) as e:
            raise DefinitionLookupError(word, str(e)) from e

        try:
            return WordDefinition.model_validate(self._parse_json(response))
        except (ValueError, ValidationError) as e:
            raise DefinitionLookupError(word, f"malformed response: {e}") from e

    @staticmethod
    def _parse_json(response: str) -> dict:
        try:
            return json.loads(response)
        except json.JSONDecodeError:
            # Try to extract JSON from response
            start = response.find('{')
            end = response.rfind('}') + 1
            if start != -1 and end > start:
                return json.loads(response[start:end])
            raise ValueError("Failed to parse definition JSON from response")
