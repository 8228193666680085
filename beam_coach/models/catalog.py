# catalog.py
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Exercise:
    name: str
    description: str
    muscle_groups: List[str] = field(default_factory=list)


EXERCISES = [
    Exercise("Barbell Bench Press",
             "A compound exercise targeting chest, shoulders, and triceps.",
             ["Chest", "Shoulders", "Triceps"]),
    Exercise("Dumbbell Shoulder Press",
             "An overhead press targeting shoulder development.",
             ["Shoulders", "Triceps"]),
    Exercise("Dumbbell Lateral Raises",
             "An isolation exercise for shoulder width.",
             ["Shoulders"]),
    Exercise("Bicep Curls",
             "An isolation exercise for bicep development.",
             ["Biceps"]),
    Exercise("Tricep Extensions",
             "An isolation exercise targeting tricep development.",
             ["Triceps"]),
]


def find_exercise(name: str) -> Optional[Exercise]:
    """Case-insensitive lookup by exercise name"""
    wanted = name.strip().lower()
    for exercise in EXERCISES:
        if exercise.name.lower() == wanted:
            return exercise
    return None
