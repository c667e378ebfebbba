"""C1 (advanced) tier policy."""

from lesson_forge.constants.levels import LEVEL_C1, LEVEL_RANKS
from lesson_forge.levels.base import LEARNER, LevelPolicy
from lesson_forge.models import VocabularyItem

VOCABULARY_GUIDE = """C1/ADVANCED VOCABULARY:
- Sophisticated idiomatic expressions
- Complex phrasal verbs and collocations
- Nuanced vocabulary for subtle distinctions
- Academic and professional register at expert level
- Metaphorical language and advanced concepts
CRITICAL: NO basic professional terms (computer, email, hospital, court, etc.)
Focus on: Specialized jargon, advanced concepts, nuanced communication
Structure: Advanced single words (specialized terminology), sophisticated idioms,
complex collocations appropriate for expert-level communication."""

# Basic professional terms that are never on-tier for advanced learners
BASIC_PROFESSIONAL_TERMS = frozenset(
    {
        "computer", "email", "hospital", "court", "office", "meeting", "doctor",
        "patient", "lawyer", "manager", "report", "phone", "customer", "money",
    }
)

ACCEPTABLE_VOCABULARY = frozenset(
    {
        "stakeholder alignment", "cut corners", "get to the bottom of", "bear in mind",
        "iron out", "play it by ear", "a blessing in disguise", "by and large",
        "paradigm shift", "due diligence", "benchmark", "leverage", "mitigate",
        "unprecedented", "ambiguous", "meticulous", "pragmatic", "inherent",
        "scrutinize", "substantiate", "undermine", "reconcile", "facilitate",
        "implication", "discrepancy", "rationale", "contingency", "nuance",
    }
)


class C1Policy(LevelPolicy):
    level = LEVEL_C1
    rank = LEVEL_RANKS[LEVEL_C1]
    grammar_focus = "Advanced Conditionals"
    grammar_explanation = "Review advanced conditionals and their uses."
    grammar_examples = (
        "If I had known, I would have come.",
        "Were I to see him, I would say hello.",
    )
    grammar_practice = (("If you ___ (be) there, you would have seen it.", "had been"),)
    vocabulary_description = "Practice advanced vocabulary for '{title}'."
    dialogue_description = "Practice a conversation using advanced vocabulary."
    dialogue_lines = (
        (LEARNER, "If I had the chance, I would travel the world. Would you?"),
        ("Teacher", "Were I given a year off, I would. Where would you go first?"),
        (LEARNER, "Had I known how expensive it was, I would have started saving earlier."),
    )
    discussion_questions = (
        "If you had the chance, what would you do?",
        "What is your dream destination?",
    )
    minutes = (8, 10, 10, 7)
    denylist = BASIC_PROFESSIONAL_TERMS

    def generate_vocabulary_items(self) -> list[VocabularyItem]:
        return [
            VocabularyItem(
                word="due diligence",
                part_of_speech="Noun phrase",
                phonetics="/djuː ˈdɪlɪdʒəns/",
                definition="Careful investigation carried out before a decision or agreement.",
                example="The investors did their due diligence before signing.",
                synonym="scrutiny",
                expressions=["conduct due diligence", "a due diligence report"],
            ),
            VocabularyItem(
                word="iron out",
                part_of_speech="Phrasal verb",
                phonetics="/ˈaɪən aʊt/",
                definition="To resolve remaining minor problems or differences.",
                example="We need to iron out a few details before launch.",
                synonym="resolve",
                expressions=["iron out the differences", "iron out the kinks"],
            ),
            VocabularyItem(
                word="pragmatic",
                part_of_speech="Adjective",
                phonetics="/præɡˈmætɪk/",
                definition="Dealing with problems in a practical rather than theoretical way.",
                example="She took a pragmatic approach to the budget cuts.",
                synonym="practical",
                expressions=["a pragmatic solution", "pragmatic approach"],
            ),
        ]

    def get_vocabulary_guide(self) -> str:
        return VOCABULARY_GUIDE

    def get_acceptable_vocabulary(self) -> frozenset[str]:
        return ACCEPTABLE_VOCABULARY
