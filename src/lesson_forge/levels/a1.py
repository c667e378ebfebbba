"""A1 (beginner) tier policy."""

from lesson_forge.constants.levels import LEVEL_A1, LEVEL_RANKS
from lesson_forge.levels.base import LEARNER, LevelPolicy
from lesson_forge.models import VocabularyItem

VOCABULARY_GUIDE = """A1/BEGINNER VOCABULARY:
- Basic everyday words they don't know yet (family, colors, numbers, food)
- Simple verbs (be, have, go, like)
- Common adjectives (big, small, good, bad)
- Present tense focus
- Only use basic professional terms if the student is NEW to the profession
Structure: Single-word nouns, verbs, adjectives from basic everyday vocabulary.
In the definition of the vocabulary, do not use any word an A1 student would not know."""

ACCEPTABLE_VOCABULARY = frozenset(
    {
        "hello", "goodbye", "please", "thank you", "yes",
        "family", "mother", "father", "sister", "brother", "friend", "baby",
        "name", "home", "house", "room", "school", "work", "job",
        "food", "water", "bread", "milk", "coffee", "tea", "apple",
        "red", "blue", "green", "black", "white", "color",
        "one", "two", "three", "number", "day", "week", "time",
        "big", "small", "good", "bad", "happy", "new", "old",
        "have", "like", "eat", "drink", "play", "read", "live", "come",
        "car", "bus", "book", "phone", "city", "shop",
    }
)


class A1Policy(LevelPolicy):
    level = LEVEL_A1
    rank = LEVEL_RANKS[LEVEL_A1]
    grammar_focus = "Present Simple"
    grammar_explanation = "Review the present simple tense."
    grammar_examples = ("I eat.", "She works.")
    grammar_practice = (("He ___ (play) football.", "plays"),)
    vocabulary_description = "Practice basic vocabulary for '{title}'."
    dialogue_description = "Practice a simple conversation."
    dialogue_lines = (
        (LEARNER, "Hello! How are you?"),
        ("Teacher", "I am fine, thank you. And you?"),
        (LEARNER, "I am fine, thank you."),
    )
    discussion_description = "Answer simple questions about the dialogue."
    discussion_questions = ("How are you?", "What do you do every day?")
    minutes = (7, 8, 8, 5)

    def generate_vocabulary_items(self) -> list[VocabularyItem]:
        # No expressions at A1
        return [
            VocabularyItem(
                word="hello",
                part_of_speech="Interjection",
                phonetics="/həˈləʊ/",
                definition="A word you say when you meet someone.",
                example="Hello! My name is Anna.",
                synonym="hi",
            ),
            VocabularyItem(
                word="family",
                part_of_speech="Noun",
                phonetics="/ˈfæməli/",
                definition="Your mother, father, brothers and sisters.",
                example="I love my family.",
            ),
            VocabularyItem(
                word="food",
                part_of_speech="Noun",
                phonetics="/fuːd/",
                definition="Things that you eat.",
                example="I like Italian food.",
            ),
            VocabularyItem(
                word="happy",
                part_of_speech="Adjective",
                phonetics="/ˈhæpi/",
                definition="Feeling good.",
                example="She is happy today.",
                synonym="glad",
            ),
        ]

    def get_vocabulary_guide(self) -> str:
        return VOCABULARY_GUIDE

    def get_acceptable_vocabulary(self) -> frozenset[str]:
        return ACCEPTABLE_VOCABULARY
