"""A2 (elementary) tier policy."""

from lesson_forge.constants.levels import LEVEL_A2, LEVEL_RANKS
from lesson_forge.levels.base import LEARNER, LevelPolicy
from lesson_forge.models import VocabularyItem

VOCABULARY_GUIDE = """A2/ELEMENTARY VOCABULARY:
- Expanded everyday vocabulary
- Simple phrasal verbs (basic two-word verbs)
- Basic collocations (common verb+noun combinations)
- Past tense forms
- Still avoid advanced professional jargon
Structure: Single words or basic phrasal verbs from expanded everyday vocabulary."""

ACCEPTABLE_VOCABULARY = frozenset(
    {
        "get up", "wake up", "go out", "come back", "look for", "turn on", "turn off",
        "make a call", "have breakfast", "take a bus", "do homework",
        "weekend", "holiday", "weather", "ticket", "station", "airport", "hotel",
        "kitchen", "bedroom", "market", "restaurant", "menu", "price",
        "doctor", "teacher", "office", "meeting", "colleague",
        "yesterday", "tomorrow", "usually", "sometimes", "never", "always",
        "cheap", "expensive", "busy", "tired", "hungry", "favorite",
        "travel", "visit", "buy", "pay", "cook", "study", "watch", "listen",
    }
)


class A2Policy(LevelPolicy):
    level = LEVEL_A2
    rank = LEVEL_RANKS[LEVEL_A2]
    grammar_focus = "Present Simple vs Present Continuous"
    grammar_explanation = "Review the difference between present simple and present continuous."
    grammar_examples = (
        "I eat breakfast every day. (Present Simple)",
        "I am eating breakfast now. (Present Continuous)",
    )
    grammar_practice = (
        ("She ___ (read) a book now.", "is reading"),
        ("He ___ (go) to school every day.", "goes"),
    )
    vocabulary_description = "Practice key vocabulary for the topic '{title}'."
    dialogue_description = "Practice a simple conversation using target vocabulary."
    dialogue_instructions = "Read the dialogue and practice with a partner."
    dialogue_lines = (
        (LEARNER, "Hello! I go to work every day. What do you do every day?"),
        ("Teacher", "I teach English. Are you studying English now?"),
        (LEARNER, "Yes, I am studying English now."),
        ("Teacher", "Great! What are you learning today?"),
        (LEARNER, "I am learning new words for my job."),
    )
    discussion_questions = (
        "What does the student do every day?",
        "Is the student studying English now?",
    )
    minutes = (8, 10, 10, 7)

    def generate_vocabulary_items(self) -> list[VocabularyItem]:
        return [
            VocabularyItem(
                word="get up",
                part_of_speech="Phrasal verb",
                phonetics="/ɡet ʌp/",
                definition="To leave your bed in the morning.",
                example="I get up at seven o'clock.",
                synonym="rise",
                expressions=["get up early", "get up late"],
            ),
            VocabularyItem(
                word="weekend",
                part_of_speech="Noun",
                phonetics="/ˌwiːkˈend/",
                definition="Saturday and Sunday.",
                example="What did you do at the weekend?",
                expressions=["at the weekend", "a long weekend"],
            ),
            VocabularyItem(
                word="expensive",
                part_of_speech="Adjective",
                phonetics="/ɪkˈspensɪv/",
                definition="Costing a lot of money.",
                example="This hotel is very expensive.",
                synonym="costly",
                expressions=["too expensive"],
            ),
        ]

    def get_vocabulary_guide(self) -> str:
        return VOCABULARY_GUIDE

    def get_acceptable_vocabulary(self) -> frozenset[str]:
        return ACCEPTABLE_VOCABULARY
