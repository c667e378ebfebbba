"""B2 (upper-intermediate) tier policy."""

from lesson_forge.constants.levels import LEVEL_B2, LEVEL_RANKS
from lesson_forge.levels.base import LEARNER, LevelPolicy
from lesson_forge.models import VocabularyItem

VOCABULARY_GUIDE = """B2/UPPER-INTERMEDIATE VOCABULARY:
- Advanced phrasal verbs with multiple meanings
- Idiomatic expressions and collocations
- Nuanced vocabulary for opinions and arguments
- Abstract concepts and formal language
For professionals: Sophisticated field terminology
Example: "come across as", "in the long run", "food for thought", "a double-edged sword"."""

ACCEPTABLE_VOCABULARY = frozenset(
    {
        "come across as", "in the long run", "food for thought", "a double-edged sword",
        "bring up", "carry out", "turn down", "point out", "account for",
        "on the other hand", "to some extent", "as far as i'm concerned",
        "drawback", "benefit", "consequence", "assumption", "perspective",
        "negotiate", "persuade", "justify", "emphasize", "evaluate",
        "reluctant", "significant", "controversial", "sustainable", "efficient",
    }
)


class B2Policy(LevelPolicy):
    level = LEVEL_B2
    rank = LEVEL_RANKS[LEVEL_B2]
    grammar_focus = "Modal Verbs"
    grammar_explanation = "Review modal verbs and their uses."
    grammar_examples = ("You should study.", "He might come.")
    grammar_practice = (("You ___ (can) speak English.", "can"),)
    vocabulary_description = "Practice advanced vocabulary for '{title}'."
    dialogue_description = "Practice a conversation using advanced vocabulary."
    dialogue_lines = (
        (LEARNER, "I want to improve my English. What should I do?"),
        ("Teacher", "You should practice every day. What might stop you?"),
        (LEARNER, "I might not have time, but I could study on the train."),
    )
    discussion_questions = (
        "What should you do to improve your English?",
        "How often do you practice?",
    )
    minutes = (8, 10, 10, 7)

    def generate_vocabulary_items(self) -> list[VocabularyItem]:
        return [
            VocabularyItem(
                word="in the long run",
                part_of_speech="Idiom",
                phonetics="/ɪn ðə lɒŋ rʌn/",
                definition="Over a long period of time; eventually.",
                example="Investing in training saves money in the long run.",
                synonym="eventually",
                expressions=["pay off in the long run"],
            ),
            VocabularyItem(
                word="come across as",
                part_of_speech="Phrasal verb",
                phonetics="/kʌm əˈkrɒs æz/",
                definition="To seem to have a particular quality to other people.",
                example="She comes across as very confident in meetings.",
                synonym="appear",
                expressions=["come across as rude", "come across as friendly"],
            ),
            VocabularyItem(
                word="drawback",
                part_of_speech="Noun",
                phonetics="/ˈdrɔːbæk/",
                definition="A disadvantage or problem.",
                example="The main drawback of the plan is its cost.",
                synonym="disadvantage",
                expressions=["a major drawback", "benefits and drawbacks"],
            ),
        ]

    def get_vocabulary_guide(self) -> str:
        return VOCABULARY_GUIDE

    def get_acceptable_vocabulary(self) -> frozenset[str]:
        return ACCEPTABLE_VOCABULARY
