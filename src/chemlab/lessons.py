"""Lesson catalogue and lesson progress tracking."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from chemlab.models import Compound
from chemlab.workspace import Workspace

LESSON_STARTED = 0.5
LESSON_COMPLETED = 1.0


@dataclass(frozen=True)
class LessonModule:
    slug: str
    title: str
    description: str
    reaction_equation: str
    quiz_question: str
    quiz_options: Tuple[str, ...]
    correct_answer: str
    guided_title: Optional[str] = None
    guided_hint: Optional[str] = None

    def __post_init__(self) -> None:
        if self.correct_answer not in self.quiz_options:
            raise ValueError(
                f"Lesson {self.slug!r}: answer {self.correct_answer!r} is not an option"
            )

    @property
    def reactant_symbols(self) -> List[str]:
        """Symbols on the left-hand side of the lesson equation, in order."""
        left = self.reaction_equation.split("→")[0]
        symbols = []
        for term in left.split("+"):
            symbol = re.sub(r"^\s*\d*", "", term).strip()
            if symbol and symbol not in symbols:
                symbols.append(symbol)
        return symbols


DEFAULT_LESSONS = (
    LessonModule(
        slug="salt",
        title="Salt Reaction Lesson",
        description="Sodium (Na) and Chlorine (Cl) combine to form table salt (NaCl).",
        reaction_equation="Na + Cl → NaCl",
        quiz_question="Which two elements combine to form salt?",
        quiz_options=("Na and Cl", "H and O", "O and Cl"),
        correct_answer="Na and Cl",
        guided_title="Salt Reaction",
        guided_hint="Try dragging Sodium (Na) and Chlorine (Cl) together to form Salt (NaCl).",
    ),
    LessonModule(
        slug="water",
        title="Water Reaction Lesson",
        description="Form water (H₂O) from Hydrogen and Oxygen!",
        reaction_equation="2H + O → H₂O",
        quiz_question="What is the chemical formula for water?",
        quiz_options=("H₂O", "CO₂", "NaCl"),
        correct_answer="H₂O",
        guided_title="Water Reaction",
        guided_hint="Try dragging Hydrogen (H) and Oxygen (O) together to form Water (H₂O).",
    ),
    LessonModule(
        slug="oxygen-gas",
        title="Oxygen Gas Lesson",
        description="Discover how atomic O forms O₂ gas.",
        reaction_equation="2O → O₂",
        quiz_question="Which formula represents oxygen gas?",
        quiz_options=("O", "O₂", "O₃"),
        correct_answer="O₂",
    ),
    LessonModule(
        slug="hydrogen-gas",
        title="Hydrogen Gas Lesson",
        description="See how atomic Hydrogen forms H₂ gas.",
        reaction_equation="2H → H₂",
        quiz_question="How many hydrogen atoms are needed to form diatomic hydrogen (H₂)?",
        quiz_options=("1", "2", "3"),
        correct_answer="2",
    ),
    LessonModule(
        slug="hydroxyl",
        title="Hydroxyl Radical Lesson (OH)",
        description="Explore how Hydrogen and Oxygen can form the OH radical.",
        reaction_equation="H + O → OH",
        quiz_question="Which elements combine to create the hydroxyl radical?",
        quiz_options=("H and Cl", "Na and O", "H and O"),
        correct_answer="H and O",
    ),
    LessonModule(
        slug="salt-hydroxyl",
        title="Salt + Hydroxyl Lesson",
        description="Experiment with NaCl (salt) and OH in the lab.",
        reaction_equation="NaCl + OH → NaOH + Cl",
        quiz_question="Which product might form from NaCl + OH in this model?",
        quiz_options=("NaOH + Cl", "NaOH + HCl", "H₂O", "Unknown"),
        correct_answer="NaOH + Cl",
    ),
)


class LessonProgress:
    """Per-lesson progress: 0 untouched, 0.5 opened, 1.0 quiz answered correctly."""

    def __init__(self) -> None:
        self._progress: Dict[str, float] = {}

    def progress(self, lesson: LessonModule) -> float:
        return self._progress.get(lesson.slug, 0.0)

    def start(self, lesson: LessonModule) -> None:
        self._progress[lesson.slug] = max(self.progress(lesson), LESSON_STARTED)

    def answer(self, lesson: LessonModule, option: str) -> bool:
        if option not in lesson.quiz_options:
            raise ValueError(f"{option!r} is not an option of lesson {lesson.slug!r}")
        correct = option == lesson.correct_answer
        if correct:
            self._progress[lesson.slug] = LESSON_COMPLETED
        else:
            self.start(lesson)
        return correct

    def overall(self, lessons: Sequence[LessonModule] = DEFAULT_LESSONS) -> float:
        """Mean progress across ``lessons`` as a percentage."""
        if not lessons:
            return 0.0
        return sum(self.progress(lesson) for lesson in lessons) / len(lessons) * 100.0


def lesson_hints(workspace: Workspace, lesson: LessonModule) -> Dict[str, List[Compound]]:
    """Advisory products for each element the lesson asks the learner to use."""
    return {
        symbol: workspace.possible_products_starting_with(symbol)
        for symbol in lesson.reactant_symbols
        if workspace.catalog.element_by_symbol(symbol) is not None
    }
