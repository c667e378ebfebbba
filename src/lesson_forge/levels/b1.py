"""B1 (intermediate) tier policy."""

from lesson_forge.constants.levels import LEVEL_B1, LEVEL_RANKS
from lesson_forge.levels.base import LEARNER, LevelPolicy
from lesson_forge.models import VocabularyItem

VOCABULARY_GUIDE = """B1/INTERMEDIATE VOCABULARY:
- Common phrasal verbs and their meanings
- Basic idioms and expressions
- Professional vocabulary at intermediate level
- Complex sentence structures
For professionals: Field-specific but not too advanced
Example: "put up with", "break the ice", "time management", "constructive feedback"."""

ACCEPTABLE_VOCABULARY = frozenset(
    {
        "put up with", "break the ice", "look forward to", "find out", "give up",
        "get along with", "run out of", "take care of", "set up",
        "time management", "constructive feedback", "deadline", "schedule",
        "experience", "opportunity", "responsibility", "decision", "advice",
        "abroad", "journey", "culture", "tradition", "environment",
        "improve", "achieve", "manage", "suggest", "compare", "explain",
        "confident", "reliable", "flexible", "stressful", "convenient",
    }
)


class B1Policy(LevelPolicy):
    level = LEVEL_B1
    rank = LEVEL_RANKS[LEVEL_B1]
    grammar_focus = "Past Simple vs Present Perfect"
    grammar_explanation = "Review the difference between past simple and present perfect."
    grammar_examples = ("I saw the movie.", "I have seen the movie.")
    grammar_practice = (("She ___ (finish) her homework.", "has finished"),)
    dialogue_lines = (
        (LEARNER, "Have you ever traveled abroad?"),
        ("Teacher", "Yes, I have been to Japan twice. What about you?"),
        (LEARNER, "Yes, I have been to France. I went there last summer."),
    )
    discussion_questions = ("Have you ever traveled abroad?", "Where have you been?")
    minutes = (8, 10, 10, 7)

    def generate_vocabulary_items(self) -> list[VocabularyItem]:
        return [
            VocabularyItem(
                word="put up with",
                part_of_speech="Phrasal verb",
                phonetics="/pʊt ʌp wɪð/",
                definition="To accept something unpleasant without complaining.",
                example="I can't put up with the noise any longer.",
                synonym="tolerate",
                expressions=["put up with someone", "have to put up with"],
            ),
            VocabularyItem(
                word="break the ice",
                part_of_speech="Idiom",
                phonetics="/breɪk ðə aɪs/",
                definition="To make people feel relaxed when they first meet.",
                example="He told a joke to break the ice.",
                expressions=["a good way to break the ice"],
            ),
            VocabularyItem(
                word="deadline",
                part_of_speech="Noun",
                phonetics="/ˈdedlaɪn/",
                definition="The time by which something must be finished.",
                example="The deadline for the report is Friday.",
                synonym="due date",
                expressions=["meet a deadline", "miss a deadline", "tight deadline"],
            ),
        ]

    def get_vocabulary_guide(self) -> str:
        return VOCABULARY_GUIDE

    def get_acceptable_vocabulary(self) -> frozenset[str]:
        return ACCEPTABLE_VOCABULARY
