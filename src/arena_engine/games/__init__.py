# Area: Games
"""
Game collaborators shipped with the engine.

Games are looked up by name so the CLI can pick one:

    from arena_engine.games import get_game
    rules = get_game("lightriders")
"""

from typing import Callable, Dict, List

from ..errors import ConfigurationError
from ..game import GameRules
from .lightriders import LightridersRules

GAMES: Dict[str, Callable[[], GameRules]] = {
    LightridersRules.name: LightridersRules,
}


def get_game(name: str) -> GameRules:
    """Return a fresh rules object for ``name``."""
    try:
        factory = GAMES[name.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown game: {name!r}", details=[f"available: {', '.join(sorted(GAMES))}"]
        ) from None
    return factory()


def available_games() -> List[str]:
    return sorted(GAMES)
