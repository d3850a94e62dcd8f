import logging

from sqlalchemy.orm import Session

from core.config import settings
from core.database import init_db
from core.security import hash_password
from models.enums import CefrLevel, Role
from repositories.user_repo import UserRepository
from repositories.vocabulary_repo import VocabularyRepository

logger = logging.getLogger(__name__)

SAMPLE_VOCABULARY = [
    {
        "word": "ubiquitous",
        "cefr": CefrLevel.C1,
        "part_of_speech": "adjective",
        "pronunciation": "/juːˈbɪkwɪtəs/",
        "definition": "present, appearing, or found everywhere",
        "examples": [
            "Mobile phones are now ubiquitous in modern society.",
            "The ubiquitous presence of technology has changed how we live.",
        ],
    },
    {
        "word": "ephemeral",
        "cefr": CefrLevel.C1,
        "part_of_speech": "adjective",
        "pronunciation": "/ɪˈfem(ə)rəl/",
        "definition": "lasting for a very short time",
        "examples": [
            "The ephemeral nature of fashion trends makes them difficult to follow.",
            "Their happiness was ephemeral, lasting only a few hours.",
        ],
    },
    {
        "word": "pragmatic",
        "cefr": CefrLevel.B2,
        "part_of_speech": "adjective",
        "pronunciation": "/præɡˈmætɪk/",
        "definition": "dealing with things sensibly and realistically",
        "examples": [
            "We need a pragmatic approach to solving this problem.",
            "She's known for her pragmatic decision-making style.",
        ],
    },
    {
        "word": "serendipity",
        "cefr": CefrLevel.C1,
        "part_of_speech": "noun",
        "pronunciation": "/ˌser.ənˈdɪp.ə.ti/",
        "definition": "the fact of finding interesting or valuable things by chance",
        "examples": [
            "It was serendipity that I met my wife at that coffee shop.",
            "The discovery of penicillin was a case of serendipity.",
        ],
    },
    {
        "word": "meticulous",
        "cefr": CefrLevel.B2,
        "part_of_speech": "adjective",
        "pronunciation": "/məˈtɪk.jə.ləs/",
        "definition": "very careful and precise about small details",
        "examples": [
            "She is meticulous about keeping records.",
            "The work requires meticulous attention to detail.",
        ],
    },
]


class BootstrapService:
    """Creates the schema and the starter accounts and words on an empty install."""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)
        self.vocabulary_repo = VocabularyRepository(db)

    def initialize(self) -> dict[str, int]:
        init_db(self.db.get_bind())
        created = {"users": 0, "vocabulary": 0}
        if self.user_repo.count() == 0:
            created["users"] = self._seed_users()
        if self.vocabulary_repo.count() == 0:
            admin = self.user_repo.get_by_username(settings.SEED_ADMIN_USERNAME)
            created_by = admin.id if admin else None
            rows = [dict(row, created_by=created_by) for row in SAMPLE_VOCABULARY]
            created["vocabulary"] = len(self.vocabulary_repo.add_many(rows))
        logger.info("Database initialised: %s", created)
        return created

    def _seed_users(self) -> int:
        self.user_repo.create(
            username=settings.SEED_ADMIN_USERNAME,
            password_hash=hash_password(settings.SEED_ADMIN_PASSWORD),
            name="Admin User",
            role=Role.ADMIN,
            words_per_day=10,
        )
        self.user_repo.create(
            username=settings.SEED_USER_USERNAME,
            password_hash=hash_password(settings.SEED_USER_PASSWORD),
            name="Regular User",
            role=Role.USER,
            words_per_day=settings.DEFAULT_WORDS_PER_DAY,
        )
        return 2
