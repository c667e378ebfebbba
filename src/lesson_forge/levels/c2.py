"""C2 (proficiency) tier policy."""

from lesson_forge.constants.levels import LEVEL_C2, LEVEL_RANKS
from lesson_forge.levels.base import LEARNER, LevelPolicy
from lesson_forge.levels.c1 import BASIC_PROFESSIONAL_TERMS
from lesson_forge.models import VocabularyItem

VOCABULARY_GUIDE = """C2/PROFICIENCY VOCABULARY:
- Highly sophisticated expressions and idioms
- Complex metaphorical language
- Specialized terminology across domains at expert level
- Subtle semantic distinctions
- Native-like expressions and cultural references
CRITICAL: NEVER use basic terms from student's profession
Focus on: Expert-level jargon, sophisticated communication, nuanced language
Example Professional Terms:
- Software: "abstraction layer", "design patterns", "scalability bottlenecks", "technical debt"
- Medical: "pathogenesis", "iatrogenic", "comorbidity", "nosocomial infection"
- Legal: "res judicata", "habeas corpus", "voir dire", "amicus curiae"
- Business: "value proposition canvas", "blue ocean strategy", "disruptive innovation"
Example: "jump the shark", "move the goalposts", "a Pyrrhic victory",
"throw the baby out with the bathwater"."""

ACCEPTABLE_VOCABULARY = frozenset(
    {
        "abstraction layer", "design patterns", "scalability bottlenecks", "technical debt",
        "pathogenesis", "iatrogenic", "comorbidity", "nosocomial infection",
        "res judicata", "habeas corpus", "voir dire", "amicus curiae",
        "value proposition canvas", "blue ocean strategy", "disruptive innovation",
        "jump the shark", "move the goalposts", "a pyrrhic victory",
        "throw the baby out with the bathwater", "a double-edged sword",
        "quintessential", "ineffable", "obfuscate", "equivocate", "idiosyncratic",
        "sine qua non", "zeitgeist", "juxtaposition", "ubiquitous",
    }
)


class C2Policy(LevelPolicy):
    level = LEVEL_C2
    rank = LEVEL_RANKS[LEVEL_C2]
    grammar_focus = "Advanced Idioms & Nuanced Structures"
    grammar_explanation = "Analyze idiomatic and nuanced structures in context."
    grammar_examples = (
        "Were it not for his help, I would have failed.",
        "No sooner had she arrived than the meeting started.",
    )
    grammar_practice = (
        (
            'Rewrite: "As soon as he finished, he left." using "No sooner..."',
            "No sooner had he finished than he left.",
        ),
    )
    vocabulary_description = "Practice highly advanced vocabulary for the topic '{title}'."
    dialogue_description = (
        "Engage in a sophisticated conversation using advanced vocabulary and idioms."
    )
    dialogue_instructions = "Analyze and discuss the dialogue in depth."
    partner_name = "Expert"
    default_role = "Professional"
    dialogue_lines = (
        (LEARNER, "How do you perceive the impact of globalization on linguistic diversity?"),
        ("Expert", "It is a double-edged sword: it fosters communication but threatens minority languages."),
        (LEARNER, "Were it not for deliberate preservation efforts, many would already have vanished."),
    )
    discussion_description = "Debate and reflect on complex topics from the dialogue."
    discussion_questions = (
        "What are the pros and cons of globalization for language?",
        "How can minority languages be preserved in a globalized world?",
    )
    minutes = (10, 12, 12, 10)
    denylist = BASIC_PROFESSIONAL_TERMS

    def generate_vocabulary_items(self) -> list[VocabularyItem]:
        return [
            VocabularyItem(
                word="move the goalposts",
                part_of_speech="Idiom",
                phonetics="/muːv ðə ˈɡəʊlpəʊsts/",
                definition="To change the rules or targets unfairly once a process has begun.",
                example="Every time we near agreement, they move the goalposts.",
                expressions=["keep moving the goalposts"],
            ),
            VocabularyItem(
                word="technical debt",
                part_of_speech="Noun phrase",
                phonetics="/ˈteknɪkəl det/",
                definition="The future cost of choosing an expedient solution over a sound one.",
                example="Years of rushed releases left the team buried in technical debt.",
                expressions=["pay down technical debt", "accrue technical debt"],
            ),
            VocabularyItem(
                word="a Pyrrhic victory",
                part_of_speech="Idiom",
                phonetics="/ə ˈpɪrɪk ˈvɪktəri/",
                definition="A win that costs the victor so much that it is tantamount to defeat.",
                example="Winning the lawsuit proved a Pyrrhic victory after the legal fees.",
                expressions=["prove a Pyrrhic victory"],
            ),
        ]

    def get_vocabulary_guide(self) -> str:
        return VOCABULARY_GUIDE

    def get_acceptable_vocabulary(self) -> frozenset[str]:
        return ACCEPTABLE_VOCABULARY
