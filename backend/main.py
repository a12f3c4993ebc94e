import argparse
import functools
import json
import logging
import random
import threading
from typing import Any, Callable, Dict, List, Optional

from data_access import InMemoryKeyValueStore, KeyValueRepository, ScoreGateway, load_settings, save_settings
from domain.constants import AUTO_RESTART_DELAY_MS, EVENT_EATEN, EVENT_GAME_OVER, INITIAL_DIRECTION
from domain.engine import TickResult, new_game, tick
from domain.food import FoodSpawner
from domain.input_mapper import InputMapper, direction_for_key, is_pause_key
from domain.phase import Phase, PhaseMachine
from domain.settings import GameSettings
from players import RandomPlayer
from services.scheduler import ManualScheduler

logger = logging.getLogger(__name__)

Listener = Callable[[str, Dict[str, Any]], None]


class SnakeGame:
    """
    Manages:
      - Phase (START, PLAYING, PAUSED, GAME_OVER)
      - Engine state (snake, direction, food, score)
      - Pending input
      - Tick scheduling and auto restart
      - High score persistence
      - Event listeners (audio, logging)

    All public methods take the game lock, so the HTTP host and the tick
    thread never interleave. The engine itself only runs from on_tick()
    while PLAYING.
    """

    def __init__(
        self,
        store,
        scheduler,
        spawner: Optional[FoodSpawner] = None,
        settings: Optional[GameSettings] = None,
    ):
        self.store = store
        self.scheduler = scheduler
        self.spawner = spawner or FoodSpawner()
        self.settings = settings or load_settings(store)
        self.scores = ScoreGateway(store)
        self.phases = PhaseMachine()
        self.input = InputMapper(INITIAL_DIRECTION)

        # Raises ConfigurationError for setups the engine cannot play
        self.state = new_game(self.settings, self.spawner)

        self.game_over_reason: Optional[str] = None
        self.games_played = 0
        self.ticks = 0
        self._listeners: List[Listener] = []
        self._restart_handle = None
        # Bumped whenever the tick interval or auto restart is re-armed or dropped
        self._generation = 0
        self._in_tick = False
        self._lock = threading.RLock()

    @property
    def phase(self) -> Phase:
        return self.phases.current

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _emit(self, event: str, payload: Dict[str, Any]) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, payload)
            except Exception as e:
                logger.error(f"Listener failed on {event}: {e}")

    # -------------------------------------------------------------------------
    # Phase actions
    # -------------------------------------------------------------------------

    def start(self) -> bool:
        """Start a new game from START or GAME_OVER. Returns False if ignored."""
        with self._lock:
            if self.phase not in (Phase.START, Phase.GAME_OVER):
                return False
            self._begin()
            return True

    def restart(self) -> bool:
        """Start over from any phase except PAUSED."""
        with self._lock:
            if self.phase == Phase.PAUSED:
                return False
            self._begin()
            return True

    def _begin(self) -> None:
        self._cancel_auto_restart()
        self.state = new_game(self.settings, self.spawner)
        self.input.reset(self.state.direction)
        self.game_over_reason = None
        self.ticks = 0
        self.phases.transition(Phase.PLAYING)
        self.games_played += 1
        self._start_ticking()
        logger.info(f"Game {self.games_played} started at {self.settings.tick_interval_ms}ms per tick")

    def toggle_pause(self) -> bool:
        """Flip PLAYING <-> PAUSED. Ignored in other phases."""
        with self._lock:
            if self.phase == Phase.PLAYING:
                self.phases.transition(Phase.PAUSED)
                self._stop_ticking()
                return True
            if self.phase == Phase.PAUSED:
                self.phases.transition(Phase.PLAYING)
                self._start_ticking()
                return True
            return False

    def _game_over(self, reason: str) -> None:
        self.phases.transition(Phase.GAME_OVER)
        self._stop_ticking()
        self.game_over_reason = reason
        record = self.scores.record_score(self.state.score)
        logger.info(f"Game over ({reason}) with score {self.state.score}")

        self._emit(EVENT_GAME_OVER, {
            "reason": reason,
            "score": self.state.score,
            "highScore": record.high_score,
            "newHighScore": record.updated,
        })

        if self.settings.autoRestart:
            self._schedule_auto_restart()

    def _schedule_auto_restart(self) -> None:
        callback = functools.partial(self._auto_restart, self._generation)
        self._restart_handle = self.scheduler.call_later(AUTO_RESTART_DELAY_MS, callback)

    def _auto_restart(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._restart_handle = None
            if self.phase == Phase.GAME_OVER:
                self._begin()

    def _cancel_auto_restart(self) -> None:
        if self._restart_handle is not None:
            self.scheduler.cancel(self._restart_handle)
            self._restart_handle = None

    def teardown(self) -> None:
        """Stop ticking and drop any pending auto restart."""
        with self._lock:
            self._cancel_auto_restart()
            self._stop_ticking()

    def _start_ticking(self) -> None:
        self._generation += 1
        callback = functools.partial(self._scheduled_tick, self._generation)
        self.scheduler.start_interval(self.settings.tick_interval_ms, callback)

    def _stop_ticking(self) -> None:
        self._generation += 1
        self.scheduler.stop_interval()

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def handle_direction(self, direction: str) -> bool:
        """Queue a turn. Only accepted while PLAYING or PAUSED."""
        with self._lock:
            if self.phase not in (Phase.PLAYING, Phase.PAUSED):
                return False
            return self.input.submit(direction, self.state.direction)

    def handle_key(self, key: str) -> bool:
        """Route a browser key name to a turn or a pause toggle."""
        if is_pause_key(key):
            return self.toggle_pause()
        direction = direction_for_key(key)
        if direction is None:
            return False
        return self.handle_direction(direction)

    # -------------------------------------------------------------------------
    # Tick
    # -------------------------------------------------------------------------

    def _scheduled_tick(self, generation: int) -> Optional[TickResult]:
        """Interval callback. Ticks from an interval that has since been replaced are dropped."""
        with self._lock:
            if generation != self._generation:
                return None
            return self.on_tick()

    def on_tick(self) -> Optional[TickResult]:
        """Advance the engine one step if PLAYING."""
        with self._lock:
            if self.phase != Phase.PLAYING or self._in_tick:
                return None

            self._in_tick = True
            try:
                result = tick(self.state, self.input.pending, self.settings, self.spawner)
            finally:
                self._in_tick = False

            self.state = result.state
            self.ticks += 1

            if result.terminal:
                self._game_over(result.reason)
                return result

            if result.ate:
                record = self.scores.record_score(self.state.score)
                self._emit(EVENT_EATEN, {
                    "score": self.state.score,
                    "highScore": record.high_score,
                    "foodKind": self.state.food.kind if self.state.food else None,
                })
            elif result.shrunk_by:
                logger.debug(f"Snake bit itself and lost {result.shrunk_by} segments")

            return result

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    def update_settings(self, **changes) -> GameSettings:
        """
        Apply and persist a partial settings update.

        Raises:
            ConfigurationError: if any value is invalid (nothing is applied)
        """
        with self._lock:
            updated = self.settings.merged(**changes)
            speed_changed = updated.speed != self.settings.speed
            self.settings = updated
            save_settings(self.store, updated)

            if speed_changed and self.phase == Phase.PLAYING:
                self._start_ticking()
            if not updated.autoRestart:
                self._cancel_auto_restart()
            elif self.phase == Phase.GAME_OVER and self._restart_handle is None:
                self._schedule_auto_restart()
            return updated

    # -------------------------------------------------------------------------
    # Render contract
    # -------------------------------------------------------------------------

    def snapshot(self) -> Dict[str, Any]:
        """Read-only view of the game for a renderer."""
        with self._lock:
            food = self.state.food
            return {
                "snake": [{"x": x, "y": y} for x, y in self.state.snake],
                "food": {"x": food.cell[0], "y": food.cell[1]} if food else None,
                "foodKind": food.kind if food else None,
                "direction": self.state.direction,
                "phase": self.phase.value,
                "score": self.state.score,
                "highScore": self.scores.high_score,
                "gameOverReason": self.game_over_reason,
                "gridSize": self.state.grid_size,
            }

    def print_board(self):
        """
        Prints a visual representation of the current board state.
        """
        print("\n" + self.state.print_board() + "\n")


# -------------------------------
# Headless simulation
# -------------------------------

def run_simulation(settings: GameSettings, max_ticks: int, seed: Optional[int] = None,
                   store=None, quiet: bool = False) -> Dict[str, Any]:
    """
    Play with the random autopilot on a virtual clock.

    Args:
        settings: rules to play with
        max_ticks: stop after this many engine ticks in total
        seed: seeds both food placement and the autopilot
        store: key-value store for the high score (in-memory if None)
        quiet: don't print the board after each tick

    Returns:
        A dictionary summarizing the run.
    """
    rng = random.Random(seed)
    scheduler = ManualScheduler()
    game = SnakeGame(
        store if store is not None else InMemoryKeyValueStore(),
        scheduler,
        spawner=FoodSpawner(random.Random(rng.random())),
        settings=settings,
    )
    player = RandomPlayer(random.Random(rng.random()))

    results: List[Dict[str, Any]] = []

    def on_event(event: str, payload: Dict[str, Any]) -> None:
        if event == EVENT_GAME_OVER:
            results.append({"ticks": game.ticks, **payload})
            print(f"Game over: {payload['reason']} (score {payload['score']})")

    game.add_listener(on_event)
    game.start()

    total_ticks = 0
    while total_ticks < max_ticks:
        if game.phase == Phase.PLAYING:
            game.handle_direction(player.get_move(game.state, game.settings))
            scheduler.run_ticks(1)
            total_ticks += 1
            if not quiet:
                game.print_board()
        elif game.phase == Phase.GAME_OVER and settings.autoRestart:
            scheduler.advance(AUTO_RESTART_DELAY_MS)
        else:
            break

    game.teardown()
    return {
        "games": results,
        "games_played": game.games_played,
        "total_ticks": total_ticks,
        "final_score": game.state.score,
        "high_score": game.scores.high_score,
    }


def main():
    parser = argparse.ArgumentParser(
        description="Run Happy Snake headless with a random autopilot."
    )
    parser.add_argument("--ticks", type=int, default=200,
                        help="Maximum number of ticks to simulate")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for food placement and the autopilot")
    parser.add_argument("--speed", type=int, default=3, choices=range(1, 6),
                        help="Speed level (only affects the virtual clock)")
    parser.add_argument("--food-type", default="both", choices=["fruits", "insects", "both"])
    parser.add_argument("--no-teleport", action="store_true",
                        help="Walls end the game instead of wrapping around")
    parser.add_argument("--no-self-collision", action="store_true",
                        help="Biting yourself shrinks the snake instead of ending the game")
    parser.add_argument("--auto-restart", action="store_true",
                        help="Keep playing new games until --ticks is reached")
    parser.add_argument("--db", type=str, default=None,
                        help="SQLite file to keep the high score in (in-memory if omitted)")
    parser.add_argument("--quiet", action="store_true", help="Don't print the board each tick")

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)

    settings = GameSettings(
        teleportEnabled=not args.no_teleport,
        selfCollisionEnabled=not args.no_self_collision,
        foodType=args.food_type,
        speed=args.speed,
        autoRestart=args.auto_restart,
        soundEnabled=False,
    )
    store = KeyValueRepository(args.db) if args.db else None

    result = run_simulation(settings, args.ticks, seed=args.seed, store=store, quiet=args.quiet)

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
