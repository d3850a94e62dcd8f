import logging
import re

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.actor import Actor
from core.errors import ParseFailure, UpstreamFailure, ValidationFailure
from models.enums import CefrLevel, Role
from models.vocabulary import Vocabulary
from repositories.vocabulary_repo import VocabularyRepository
from schemas.vocabulary import GeneratedWord
from services.generation_gateway import JSON_ARRAY_RE, GenerationGateway, extract_json_array, split_lines

logger = logging.getLogger(__name__)

MAX_GENERATED_WORDS = 20
MAX_EXAMPLES = 3
AUDIO_URL_TEMPLATE = "https://api.dictionaryapi.dev/media/pronunciations/en/{word}-us.mp3"
PRONUNCIATION_RE = re.compile(r"/[^/]+/")


def words_prompt(level: CefrLevel, count: int, topic: str | None = None) -> str:
    prompt = f"Generate {count} vocabulary words at CEFR level {level.value}"
    if topic:
        prompt += f" related to the topic of {topic}"
    prompt += f""". For each word, provide the following in JSON format:
    1. word: the vocabulary word
    2. cefr: the CEFR level ({level.value})
    3. part_of_speech: the part of speech (noun, verb, adjective, etc.)
    4. pronunciation: the IPA pronunciation
    5. definition: a clear definition of the word
    6. examples: an array of 2-3 example sentences using the word

    Return the result as a JSON array of objects."""
    return prompt


def examples_prompt(word: str) -> str:
    return (
        f'Generate 3 example sentences using the word "{word}" in different contexts. '
        "Each sentence should clearly demonstrate the meaning of the word. "
        "Return only the sentences as a JSON array of strings."
    )


def pronunciation_prompt(word: str) -> str:
    return (
        f'Generate the IPA pronunciation for the English word "{word}". '
        "Return only the IPA pronunciation in the format /pronunciation/ "
        "without any additional text or explanation."
    )


def parse_generated_words(text: str) -> list[GeneratedWord]:
    """Strict parse of a bulk word response; anything malformed is a ParseFailure."""
    items = extract_json_array(text)
    if items is None:
        raise ParseFailure("No JSON array found in generation response")
    if not items:
        raise ParseFailure("Generation response contained no words")
    try:
        return [GeneratedWord.model_validate(item) for item in items]
    except ValidationError as exc:
        raise ParseFailure(f"Generated word records are incomplete: {exc.error_count()} problem(s)") from exc


def parse_examples(text: str, word: str) -> list[str]:
    """Up to three sentences: the JSON array when there is one, else lines."""
    items = extract_json_array(text)
    if items is not None:
        sentences = [item.strip() for item in items if isinstance(item, str)]
        return [s for s in sentences if s][:MAX_EXAMPLES]
    if JSON_ARRAY_RE.search(text or ""):
        # an array was there but did not decode; keep every non-empty line
        return split_lines(text)[:MAX_EXAMPLES]
    needle = word.lower()
    return [line for line in split_lines(text) if needle in line.lower()][:MAX_EXAMPLES]


def parse_pronunciation(text: str, word: str) -> str:
    match = PRONUNCIATION_RE.search(text or "")
    return match.group(0) if match else f"/{word}/"


class CatalogGenerationService:
    def __init__(self, db: Session, gateway: GenerationGateway):
        self.repo = VocabularyRepository(db)
        self.db = db
        self.gateway = gateway

    async def generate_words(self, level: CefrLevel, count: int, topic: str | None = None) -> list[GeneratedWord]:
        if not 1 <= count <= MAX_GENERATED_WORDS:
            raise ValidationFailure(f"Count must be between 1 and {MAX_GENERATED_WORDS}")
        text = await self.gateway.generate(words_prompt(level, count, topic), temperature=0.7, max_tokens=2048)
        try:
            return parse_generated_words(text)
        except ParseFailure as exc:
            logger.error("Error parsing vocabulary: %s", exc)
            raise

    async def generate_examples(self, word: str) -> list[str]:
        text = await self.gateway.generate(examples_prompt(word), temperature=0.7, max_tokens=1024)
        return parse_examples(text, word)

    async def generate_pronunciation(self, word: str) -> dict[str, str]:
        text = await self.gateway.generate(pronunciation_prompt(word), temperature=0.2, max_tokens=100)
        return {
            "pronunciation": parse_pronunciation(text, word),
            "audio_url": AUDIO_URL_TEMPLATE.format(word=word.lower()),
        }

    async def generate_and_store(
        self,
        *,
        actor: Actor,
        level: CefrLevel,
        count: int,
        topic: str | None = None,
    ) -> list[Vocabulary]:
        actor.require(Role.ADMIN)
        generated = await self.generate_words(level, count, topic)
        rows = [
            {
                "word": item.word,
                "cefr": level,
                "part_of_speech": item.part_of_speech,
                "pronunciation": item.pronunciation,
                "definition": item.definition,
                "examples": list(item.examples),
                "audio_url": None,
                "created_by": actor.id,
            }
            for item in generated
        ]
        try:
            stored = self.repo.add_many(rows)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Storing generated vocabulary failed: %s", exc)
            raise UpstreamFailure("Could not store generated vocabulary") from exc
        logger.info("%s vocabulary words generated by admin %s", len(stored), actor.id)
        return stored
