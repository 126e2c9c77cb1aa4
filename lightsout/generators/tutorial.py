"""
Tutorial lessons for Lights Out.

Each lesson is a list of presses applied to the solved board. While a lesson
is played, the pending set tracks which of those presses are still owed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple

import config
from ..core.grid import Grid, Coordinate, create_solved, apply_toggles, toggle, is_win
from ..core.validator import GridValidator
from ..core.utils import setup_logger


class HintMode(Enum):
    """How much of the pending set to reveal"""
    STEP = "step"  # pending cells in the hint row only
    FULL = "full"  # every pending cell


@dataclass(frozen=True)
class TutorialLesson:
    """A scripted lesson"""
    id: str
    title: str
    description: str
    toggles: Tuple[Coordinate, ...]
    category: str
    size: int = 5

    def derived_grid(self) -> Grid:
        """Solved board with every lesson press applied in order"""
        return apply_toggles(create_solved(self.size), self.toggles)


@dataclass(frozen=True)
class TutorialCategory:
    title: str
    lessons: Tuple[TutorialLesson, ...]


def _lesson(category: str, lesson_id: str, title: str, description: str,
            toggles: List[Coordinate]) -> TutorialLesson:
    return TutorialLesson(lesson_id, title, description, tuple(toggles), category)


BASICS = "Basics"
FORMULAS = "Common formulas"

TUTORIAL_CATEGORIES: Tuple[TutorialCategory, ...] = (
    TutorialCategory(BASICS, (
        _lesson(BASICS, 'basic', "Basic switch",
                "Pressing a light flips it together with the lights above, below, left and "
                "right of it. Press the dark light in the middle to turn it back on.",
                [(2, 2)]),
        _lesson(BASICS, 'chase-intro', "Chasing the lights",
                "The core technique: when a row has a dark light, press the light directly "
                "below it to change it. Press lights in the second row to fix the first row.",
                [(1, 1), (1, 3)]),
        _lesson(BASICS, 'corner', "Corners",
                "A corner light has only two neighbours, which matters at the edges of the "
                "board. Turn the dark corner lights back on.",
                [(4, 0), (4, 4)]),
        _lesson(BASICS, 'advanced-row', "Clearing a row",
                "Chase a whole row: get the first row fully lit without worrying about the "
                "second. Just keep pressing below each dark light.",
                [(1, 0), (1, 1), (1, 2), (1, 3), (1, 4)]),
    )),
    TutorialCategory(FORMULAS, (
        _lesson(FORMULAS, '01001', "Formula: dark lit dark dark lit",
                "After chasing to the last row it reads dark-lit-dark-dark-lit. It cannot be "
                "cleared directly; go back to the first row and press specific cells.",
                [(0, 4), (1, 3), (1, 4), (2, 2), (2, 4),
                 (3, 1), (3, 2), (3, 3), (4, 0)]),
        _lesson(FORMULAS, '10010', "Formula: lit dark dark lit dark",
                "The mirror image of the previous lesson: the last row reads "
                "lit-dark-dark-lit-dark.",
                [(0, 0), (1, 0), (1, 1), (2, 0), (2, 2),
                 (3, 1), (3, 2), (3, 3), (4, 4)]),
        _lesson(FORMULAS, '00100', "Formula: dark dark lit dark dark",
                "Only the middle light of the last row is lit. One of the easiest patterns "
                "to recognise.",
                [(0, 1), (0, 3), (1, 0), (1, 1), (1, 3),
                 (1, 4), (2, 1), (2, 3), (4, 1), (4, 3)]),
        _lesson(FORMULAS, '00011', "Formula: dark dark dark lit lit",
                "The two rightmost lights of the last row are lit.",
                [(0, 1), (1, 0), (1, 1), (1, 2), (2, 3),
                 (3, 0), (3, 1), (3, 3), (3, 4), (4, 3)]),
        _lesson(FORMULAS, '11000', "Formula: lit lit dark dark dark",
                "The mirror image of the previous lesson: the two leftmost lights of the "
                "last row are lit.",
                [(0, 3), (1, 2), (1, 3), (1, 4), (2, 1),
                 (3, 0), (3, 1), (3, 3), (3, 4), (4, 1)]),
        _lesson(FORMULAS, '10101', "Formula: lit dark lit dark lit",
                "The last row alternates lit and dark lights.",
                [(0, 0), (0, 1), (0, 2), (1, 1), (1, 3),
                 (2, 2), (2, 3), (2, 4), (4, 2), (4, 3), (4, 4)]),
        _lesson(FORMULAS, '01110', "Formula: dark lit lit lit dark",
                "The three middle lights of the last row are lit. The last of the basic "
                "formulas.",
                [(0, 0), (0, 2), (0, 3), (1, 0), (1, 4),
                 (2, 1), (2, 2), (2, 4), (4, 1), (4, 2), (4, 4)]),
    )),
)

LESSONS: Dict[str, TutorialLesson] = {
    lesson.id: lesson
    for category in TUTORIAL_CATEGORIES
    for lesson in category.lessons
}


def get_lesson(lesson_id: str) -> TutorialLesson:
    """
    Look up a lesson by id.

    Raises:
        KeyError: If no lesson has that id
    """
    try:
        return LESSONS[lesson_id]
    except KeyError:
        raise KeyError(f"Unknown lesson: {lesson_id}. Available: {list(LESSONS)}") from None


def list_lessons(category: Optional[str] = None) -> List[TutorialLesson]:
    """All lessons in catalogue order, optionally restricted to one category"""
    return [lesson for lesson in LESSONS.values()
            if category is None or lesson.category == category]


class TutorialSession:
    """Play state for one lesson, with hint tracking"""

    def __init__(self, lesson: TutorialLesson, log_level: str = config.LOG_LEVEL):
        validation = GridValidator.validate_toggles(lesson.toggles, lesson.size)
        if not validation:
            raise ValueError(f"Invalid lesson {lesson.id}: {'; '.join(validation.errors)}")

        self.lesson = lesson
        self.logger = setup_logger(self.__class__.__name__, level=log_level)
        self.reset()

    def reset(self):
        """Back to the lesson's starting board and pending set"""
        self.grid = self.lesson.derived_grid()
        self.pending: Set[Coordinate] = set(self.lesson.toggles)
        self.is_won = False

    def toggle(self, row: int, col: int) -> Grid:
        """Press a cell and update the pending set by parity"""
        if self.is_won:
            return self.grid

        self.grid = toggle(self.grid, row, col)
        self.pending ^= {(row, col)}

        if is_win(self.grid):
            self.is_won = True
            self.logger.info(f"Lesson '{self.lesson.id}' completed")
        return self.grid

    def hint_row(self) -> Optional[int]:
        """Topmost row that still has pending presses"""
        if not self.pending:
            return None
        return min(row for row, _ in self.pending)

    def hint_cells(self, mode: HintMode = HintMode.STEP) -> List[Coordinate]:
        """Cells to highlight, sorted row-major"""
        if mode is HintMode.FULL:
            return sorted(self.pending)

        row = self.hint_row()
        if row is None:
            return []
        return sorted(cell for cell in self.pending if cell[0] == row)
