"""Prompt templates and prompt configuration data.

Prompt wording is configuration, not logic: the builders only interpolate the
learner profile, the topic, the tier vocabulary guide (from the LevelPolicy),
occupation-keyed exclusions and role hints, and the continuity context.
"""

from __future__ import annotations

import json

from lesson_forge.constants.levels import (
    DEFAULT_LEARNER_NAME,
    EXERCISE_DIALOGUE,
    EXERCISE_FINAL_PREP,
    EXERCISE_PREPARATION,
    EXERCISE_VOCABULARY,
    LESSON_TYPE_INSTANT,
)
from lesson_forge.continuity import ContinuityContext
from lesson_forge.models import LearnerProfile, LearningTopic


# Prompt version for tracking
PROMPT_VERSION_LESSON = "v2.0"
PROMPT_VERSION_LEARNING_PLAN = "v1.1"
PROMPT_VERSION_GRAMMAR_LESSON = "v1.0"
PROMPT_VERSION_INSTANT_LESSON = "v1.0"

LEARNING_PLAN_TOPIC_COUNT = 10

# =============================================================================
# Occupation data
# =============================================================================

# Occupation keyword -> basic terms a practitioner already knows; these must
# not be taught as new vocabulary.
OCCUPATION_EXCLUSIONS: dict[str, tuple[str, ...]] = {
    "software": ("computer", "code", "program", "software", "email", "bug", "website", "app"),
    "developer": ("computer", "code", "program", "software", "email", "bug", "website", "app"),
    "engineer": ("engineer", "design", "project", "machine", "computer", "plan"),
    "doctor": ("doctor", "hospital", "patient", "nurse", "medicine", "sick", "health"),
    "nurse": ("nurse", "hospital", "patient", "doctor", "medicine", "injection"),
    "lawyer": ("lawyer", "court", "judge", "law", "contract", "case", "client"),
    "teacher": ("teacher", "student", "class", "school", "homework", "lesson", "exam"),
    "accountant": ("money", "tax", "budget", "invoice", "account", "bank"),
    "manager": ("meeting", "team", "manager", "office", "email", "report", "deadline"),
    "sales": ("customer", "sell", "price", "product", "deal", "client"),
    "chef": ("kitchen", "cook", "food", "recipe", "restaurant", "menu"),
}

# Occupation keyword -> scenario/role hint used for dialogues and role plays
OCCUPATION_ROLE_HINTS: dict[str, str] = {
    "software": "code reviews, sprint planning, incident post-mortems, architecture discussions",
    "developer": "code reviews, sprint planning, incident post-mortems, architecture discussions",
    "engineer": "design reviews, client briefings, site inspections, safety assessments",
    "doctor": "case consultations, explaining diagnoses, multidisciplinary team meetings",
    "nurse": "shift handovers, reassuring anxious patients, coordinating with physicians",
    "lawyer": "client consultations, negotiating settlements, briefing colleagues on precedent",
    "teacher": "parent-teacher conferences, curriculum planning, professional development workshops",
    "accountant": "audit findings, explaining variances to management, client tax planning",
    "manager": "performance reviews, stakeholder updates, conflict resolution, strategy sessions",
    "sales": "discovery calls, handling objections, closing negotiations, account reviews",
    "chef": "menu planning, supplier negotiations, briefing kitchen staff, food critics",
}

METHODOLOGY_PRINCIPLES: dict[str, str] = {
    "CLT": "Emphasize real-life communication, dialogues, role-plays, discussions",
    "TBLT": "Focus on meaningful tasks and practical applications",
    "PPP": "Structure with clear presentation, controlled practice, then production",
    "TTT": "Balance teacher input with guided student discovery",
}


def _match_occupation(occupation: str | None, table: dict) -> list:
    if not occupation:
        return []
    occupation = occupation.lower()
    return [value for keyword, value in table.items() if keyword in occupation]


def get_occupation_exclusions(occupation: str | None) -> list[str]:
    """Basic terms to exclude for an occupation, in first-seen order."""
    terms: list[str] = []
    for group in _match_occupation(occupation, OCCUPATION_EXCLUSIONS):
        for term in group:
            if term not in terms:
                terms.append(term)
    return terms


def get_occupation_role_hint(occupation: str | None) -> str | None:
    hints = _match_occupation(occupation, OCCUPATION_ROLE_HINTS)
    return hints[0] if hints else None


def _format_exclusions(occupation: str | None) -> str:
    terms = get_occupation_exclusions(occupation)
    if not terms:
        return "- No occupation-specific exclusions."
    return (
        f"- Do NOT teach these basic {occupation} terms as new vocabulary: {', '.join(terms)}\n"
        f"- The student already uses them daily; choose terms beyond them."
    )


def _format_continuity(continuity: ContinuityContext | None) -> str:
    if continuity is None or not continuity.should_reuse or not continuity.previous_vocabulary:
        return "- This lesson has no previous vocabulary to reuse."
    words = ", ".join(item.word for item in continuity.previous_vocabulary)
    return (
        f'- Previous lesson: "{continuity.previous_lesson_title}"\n'
        f"- Naturally reuse some of these previously taught words in the dialogue: {words}\n"
        f"- Do NOT re-teach them in the vocabulary exercise; all vocabulary items must be new."
    )


# =============================================================================
# Lesson prompt
# =============================================================================

LESSON_SYSTEM_PROMPT = """You are an expert ESL curriculum designer. You create speaking-focused lessons
whose vocabulary and grammar complexity match the student's CEFR level exactly.

## Rules

1. Every required vocabulary word MUST be actively used throughout the exercises
   (dialogue, discussion questions, practice sentences), not just listed.
2. Vocabulary definitions and synonyms must be simpler than the word they explain.
3. DIALOGUE TURN-TAKING: the student's character speaks FIRST, and speaks
   immediately after every other character. Never write two consecutive lines
   for characters other than the student.
4. Return ONLY a JSON object. No markdown, no explanations.
"""

LESSON_OUTPUT_FORMAT = """
## Output format (JSON only)

{
  "title": "string",
  "lessonType": "business|grammar|article|conversation|mixed",
  "difficulty": 1-8,
  "duration": number,
  "objective": "string",
  "skills": ["speaking", "listening"],
  "vocabulary": ["word1", "word2"],
  "context": "string",
  "exercises": [
    {
      "type": "vocabulary",
      "title": "Exercise 1: Vocabulary",
      "description": "string",
      "content": {
        "vocabulary": [
          {
            "word": "string",
            "partOfSpeech": "Noun",
            "phonetics": "/IPA/",
            "definition": "string",
            "example": "string",
            "synonym": "string",
            "expressions": ["string"]
          }
        ]
      },
      "timeMinutes": number
    },
    {
      "type": "dialogue",
      "title": "string",
      "description": "string",
      "content": {
        "context": "string",
        "characters": [{"name": "string", "role": "string"}],
        "dialogue": [{"character": "string", "text": "string"}],
        "instructions": "string"
      },
      "timeMinutes": number
    },
    {
      "type": "discussion",
      "title": "string",
      "description": "string",
      "content": {"questions": ["string"]},
      "timeMinutes": number
    }
  ],
  "homework": "string",
  "materials": ["string"],
  "teachingNotes": "string"
}
"""


def build_lesson_prompt(
    profile: LearnerProfile,
    topic: LearningTopic,
    duration: int,
    vocabulary_guide: str,
    continuity: ContinuityContext | None = None,
) -> str:
    """Build the full lesson-generation prompt.

    Args:
        profile: Learner profile.
        topic: Topic to teach; its vocabulary is mandatory.
        duration: Session length in minutes.
        vocabulary_guide: Tier guide text from the learner's LevelPolicy.
        continuity: Optional continuity context for vocabulary reuse.

    Returns:
        Full prompt string
    """
    learner = profile.name or DEFAULT_LEARNER_NAME
    role_hint = get_occupation_role_hint(profile.occupation)
    scenario_line = f"\n- Preferred scenarios: {role_hint}" if role_hint else ""
    grammar_line = f"\nGRAMMAR FOCUS: {topic.grammar_focus}" if topic.grammar_focus else ""

    dynamic_prompt = f"""
## Student profile

- Name: {learner} (use exactly this name for the student's dialogue character)
- Level: {profile.level}
- Age group: {profile.age_group}
- Native language: {profile.native_language}
- Target language: {profile.target_language}
- Goals: {profile.goals}
- Occupation: {profile.occupation or 'General learner'}{scenario_line}
- Weaknesses: {profile.weaknesses or 'Not specified'}
- Interests: {profile.interests or 'Not specified'}

## Lesson

- Duration: {duration} minutes (exercise timeMinutes must add up to {duration})
- Topic: {topic.title}
- Objective: {topic.objective}
- Context: {topic.context}
- Methodology: {topic.methodology}{grammar_line}
- REQUIRED VOCABULARY (must all be used): {', '.join(topic.vocabulary)}

## Level-appropriate vocabulary

{vocabulary_guide}

## Vocabulary exclusions

{_format_exclusions(profile.occupation)}

## Vocabulary continuity

{_format_continuity(continuity)}
"""
    return LESSON_SYSTEM_PROMPT + dynamic_prompt + LESSON_OUTPUT_FORMAT


# =============================================================================
# Learning plan prompt
# =============================================================================


def build_learning_plan_prompt(profile: LearnerProfile, methodology: str, reasoning: str) -> str:
    """Build the prompt for a ten-topic learning plan.

    Returns:
        Full prompt string
    """
    principle = METHODOLOGY_PRINCIPLES.get(methodology, "")
    example_topic = {
        "lessonNumber": 1,
        "title": "Topic title",
        "objective": "What the student will learn/achieve",
        "vocabulary": ["word1", "word2", "phrase1"],
        "grammarFocus": "Grammar point if applicable",
        "skills": ["speaking", "listening", "reading", "writing"],
        "context": "Real-world scenario or domain context",
        "methodology": methodology,
    }
    return f"""Generate a {LEARNING_PLAN_TOPIC_COUNT}-lesson learning plan for a {profile.level} {profile.target_language} student.

STUDENT PROFILE:
- Name: {profile.name}
- Target Language: {profile.target_language}
- Native Language: {profile.native_language}
- Age Group: {profile.age_group}
- Level: {profile.level}
- Goals: {profile.goals}
- Occupation: {profile.occupation or 'Not specified'}
- Weaknesses: {profile.weaknesses or 'Not specified'}
- Interests: {profile.interests or 'Not specified'}

SELECTED METHODOLOGY: {methodology}
{reasoning}

REQUIREMENTS:
1. Create exactly {LEARNING_PLAN_TOPIC_COUNT} learning topics
2. Each topic should be relevant to the student's goals and context
3. Focus on speaking-based materials
4. Use {methodology} methodology principles: {principle}
5. Make content domain-specific to their occupation/interests when relevant
6. Progress logically from simpler to more complex topics

FORMAT YOUR RESPONSE AS VALID JSON ONLY (no markdown, no explanations):
{json.dumps({"topics": [example_topic]}, indent=2)}
"""


# =============================================================================
# Grammar lesson prompt
# =============================================================================

# Tier -> tone, explanation length and exercise item counts
GRAMMAR_LEVEL_SCALING: dict[str, str] = {
    "A1": (
        "One-clause sentences with high-frequency words; minimal grammar terminology; "
        "2 simple examples per section; explanation of 60-100 words. "
        "Items: 4-6 model sentences, 6-8 dialogue lines, 4-6 blanks, 3-4 multiple-choice "
        "questions, 2-3 sentence-building tasks."
    ),
    "A2": (
        'Simple sentences; limited terminology (e.g. "form: subject + verb"); 3-4 everyday '
        "examples; explanation of 80-120 words. "
        "Items: 6-8 model sentences, 6-8 dialogue lines, 6-8 blanks, 4-6 multiple-choice "
        "questions, 2-3 sentence-building tasks."
    ),
    "B1": (
        "Mix simple and compound sentences; highlight basic contrasts; add 1-2 common mistakes; "
        "explanation of 120-180 words. "
        "Items: 8-10 model sentences, 8-10 dialogue lines, 6-8 blanks, 4-6 multiple-choice "
        "questions, 3-4 sentence-building tasks."
    ),
    "B2": (
        "Richer work, study and news contexts; at least 2 contrasts and 3 common mistakes; "
        "transformation hints; explanation of 180-240 words. "
        "Items: 10-12 model sentences, 10-14 dialogue lines, 8-10 blanks, 6-8 multiple-choice "
        "questions, 4-5 sentence-building tasks."
    ),
    "C1": (
        "Nuanced usage with register notes and exceptions; 3-5 common mistakes with rationales; "
        "explanation of 240-400 words. "
        "Items: 12-15 model sentences, 10-14 dialogue lines, 8-10 blanks, 6-8 multiple-choice "
        "questions, 4-5 sentence-building tasks."
    ),
    "C2": (
        "Nuanced usage with register and genre notes and exceptions; 3-5 common mistakes with "
        "rationales; explanation of 240-400 words. "
        "Items: 12-15 model sentences, 10-14 dialogue lines, 8-10 blanks, 6-8 multiple-choice "
        "questions, 4-5 sentence-building tasks."
    ),
}

GRAMMAR_OUTPUT_FORMAT = """
## Output format (JSON only)

{
  "title": "string",
  "grammarTopic": "string",
  "context": "Real-world context where this grammar is used",
  "explanation": {"definition": "string", "usage": "string", "examples": ["string"]},
  "exercises": [
    {"type": "grammar-focus", "title": "Understanding the Rule",
     "content": {"explanation": "string", "keyPoints": ["string"], "examples": ["string"],
                 "commonMistakes": [{"incorrect": "string", "correct": "string", "why": "string"}]}},
    {"type": "sentence-practice", "title": "Model Sentences",
     "content": {"sentences": [{"sentence": "string", "context": "string"}]}},
    {"type": "dialogue-practice", "title": "Conversation Practice",
     "content": {"context": "string", "dialogue": [{"character": "string", "text": "string"}]}},
    {"type": "fill-blanks", "title": "Fill in the Blanks",
     "content": {"sentences": [{"sentence": "sentence with _____", "answer": "string", "hint": "string"}]}},
    {"type": "multiple-choice", "title": "Grammar Check",
     "content": {"questions": [{"question": "string", "options": ["a", "b", "c", "d"],
                                "correctAnswer": 0, "explanation": "string"}]}},
    {"type": "sentence-building", "title": "Create Sentences",
     "content": {"exercises": [{"instruction": "string", "words": ["string"], "correct": "string"}]}}
  ]
}
"""


def build_grammar_lesson_prompt(profile: LearnerProfile, grammar_topic: str) -> str:
    """Build the prompt for a grammar lesson contextualized to the learner.

    Returns:
        Full prompt string
    """
    learner = profile.name or DEFAULT_LEARNER_NAME
    scaling = GRAMMAR_LEVEL_SCALING.get(profile.level, "")
    return f"""You are an expert ESL grammar teacher. Generate a grammar lesson for a {profile.level} student learning {profile.target_language}.

## Student profile

- Name: {learner}
- Native language: {profile.native_language}
- Age group: {profile.age_group}
- Level: {profile.level}
- Goals: {profile.goals}
- Occupation: {profile.occupation or 'Not specified'}
- Weaknesses: {profile.weaknesses or 'Not specified'}
- Interests: {profile.interests or 'Not specified'}

## Grammar topic

{grammar_topic}

## Rules

1. The whole lesson teaches "{grammar_topic}".
2. Contextualize every explanation and example to the student's goals, occupation and interests.
3. Keep vocabulary and sentence complexity at {profile.level} level.
4. Progress from explanation to controlled practice to free application.
5. In the dialogue, {learner} speaks first and after every other character.
6. Return ONLY a JSON object. No markdown, no explanations.

## Level scaling ({profile.level})

{scaling}
{GRAMMAR_OUTPUT_FORMAT}"""


# =============================================================================
# Instant lesson prompt
# =============================================================================


def instant_lesson_minutes(duration: int) -> dict[str, int]:
    """Minutes per instant lesson exercise type for a session length."""
    return {
        EXERCISE_VOCABULARY: 8,
        EXERCISE_PREPARATION: 7,
        EXERCISE_DIALOGUE: duration // 2,
        EXERCISE_FINAL_PREP: duration * 3 // 10,
    }


def build_instant_lesson_prompt(
    profile: LearnerProfile,
    situation: str,
    focus: str,
    duration: int,
    vocabulary_guide: str,
) -> str:
    """Build the prompt for a lesson preparing the learner for one concrete situation.

    Args:
        profile: Learner profile.
        situation: The learner's need, e.g. "Job interview tomorrow".
        focus: Primary skill focus (see INSTANT_FOCUSES).
        duration: Session length in minutes.
        vocabulary_guide: Tier guide text from the learner's LevelPolicy.

    Returns:
        Full prompt string
    """
    learner = profile.name or DEFAULT_LEARNER_NAME
    minutes = instant_lesson_minutes(duration)
    skills = ["Speaking", "Listening", "Vocabulary"] if focus == "mixed" else [focus]
    example = {
        "title": "Instant Lesson: <brief description of the need>",
        "lessonType": LESSON_TYPE_INSTANT,
        "duration": duration,
        "objective": f"Prepare for: {situation}",
        "skills": skills,
        "vocabulary": ["word1", "word2"],
        "context": f"Immediate preparation for: {situation}",
        "exercises": [
            {
                "type": EXERCISE_VOCABULARY,
                "title": "Essential Vocabulary for Your Situation",
                "description": "Key words and phrases you'll need",
                "content": {"vocabulary": ["6-8 items: word, partOfSpeech, phonetics, definition, example"]},
                "timeMinutes": minutes[EXERCISE_VOCABULARY],
            },
            {
                "type": EXERCISE_PREPARATION,
                "title": "Situation Preparation",
                "description": "Quick questions to prepare for your specific need",
                "content": {"questions": ["string"], "tips": ["string"]},
                "timeMinutes": minutes[EXERCISE_PREPARATION],
            },
            {
                "type": EXERCISE_DIALOGUE,
                "title": "Practice Scenario",
                "description": "Practice the exact situation you described",
                "content": {
                    "context": "string",
                    "characters": [{"name": learner, "role": "string"}],
                    "dialogue": [{"character": learner, "text": "string"}],
                    "instructions": "How to role-play the scenario",
                },
                "timeMinutes": minutes[EXERCISE_DIALOGUE],
            },
            {
                "type": EXERCISE_FINAL_PREP,
                "title": "Ready to Go",
                "description": "Final preparation and confidence building",
                "content": {"checklist": ["string"], "phrases": ["string"], "confidence": ["string"]},
                "timeMinutes": minutes[EXERCISE_FINAL_PREP],
            },
        ],
        "homework": "Review key phrases and practice the scenario",
        "materials": ["Situation-specific vocabulary cards"],
        "teachingNotes": "string",
    }
    return f"""You are an expert ESL teacher creating an INSTANT lesson for one specific student need.

## Student profile

- Name: {learner} (use exactly this name for the student's dialogue character)
- Level: {profile.level}
- Goals: {profile.goals}
- Occupation: {profile.occupation or 'General learner'}
- Weaknesses: {profile.weaknesses or 'General improvement'}

## Request

- Situation: "{situation}"
- Primary focus: {focus}
- Duration: {duration} minutes

## Level-appropriate vocabulary

{vocabulary_guide}

## Vocabulary exclusions

{_format_exclusions(profile.occupation)}

## Rules

1. Address the SPECIFIC situation in the request.
2. Teach vocabulary and phrases the student can use immediately in that situation.
3. Focus on {focus} skills while keeping the four exercises balanced.
4. DIALOGUE TURN-TAKING: {learner} speaks FIRST and immediately after every other character.
5. Use {profile.level}-level complexity throughout.
6. Return ONLY a JSON object. No markdown, no explanations.

## Output format (JSON only)

{json.dumps(example, indent=2)}
"""
