from .drawing import draw_quiz
from .models import Flashcard

__all__ = [
    "Flashcard",
    "draw_quiz",
]
