# corpus.py - built-in sample search queries with known popularity

from typing import List, Tuple

DEFAULT_CORPUS: List[Tuple[str, int]] = [
    ("how to make pizza", 50),
    ("how to make pasta", 30),
    ("how to make pancakes", 20),
    ("how to tie a tie", 45),
    ("how to train your dragon", 5),
    ("home remedies for cold", 40),
    ("holiday packages", 25),
    ("how to make pizza dough", 35),
    ("how to make pizza at home", 28),
    ("how to make protein shake", 18),
    ("how to make money online", 55),
    ("how to make coffee", 22),
]
