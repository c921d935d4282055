from __future__ import annotations
import random
from typing import Callable, List, Optional

GREETINGS = ["Hello world!", "¡Hola Mundo!", "你好，世界！", "Bonjour le monde!"]


def pick_greeting(rng: Optional[random.Random] = None) -> str:
    return (rng or random).choice(GREETINGS)


def compose_world(f: Callable[[str], Callable[[str], str]]):
    return f("world")


def greet(name: str) -> Callable[[str], str]:
    return lambda punctuation: f"Hello {name}{punctuation}"


def add_happiness(item: str) -> str:
    return item + " 😂"


def composition_demo() -> List[str]:
    """Words of `compose_world(greet)("!")`, each with a laughing face appended."""
    return [add_happiness(word) for word in compose_world(greet)("!").split(" ")]


def show_composition_demo(notify: Callable[[str], object]) -> List[str]:
    words = composition_demo()
    for word in words:
        notify(word)
    return words
