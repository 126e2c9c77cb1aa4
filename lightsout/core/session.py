"""
Game session state machine and completed-session records.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional
import time
import uuid

import config
from .grid import Grid, toggle, is_win
from .validator import GridValidator
from .utils import setup_logger


class SessionState(Enum):
    """Lifecycle of a single game"""
    PLAYING = "playing"
    WON = "won"


@dataclass(frozen=True)
class SessionRecord:
    """One completed game"""
    id: str
    timestamp: int  # epoch milliseconds
    grid_size: int
    time_spent: float  # seconds
    moves: int
    initial_grid: Grid

    @classmethod
    def create(cls, initial_grid: Grid, time_spent: float, moves: int,
               timestamp: Optional[int] = None) -> 'SessionRecord':
        """Build a record with a fresh id and the current time"""
        if timestamp is None:
            timestamp = int(time.time() * 1000)
        return cls(
            id=uuid.uuid4().hex,
            timestamp=timestamp,
            grid_size=initial_grid.size,
            time_spent=float(time_spent),
            moves=moves,
            initial_grid=initial_grid,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary for serialization"""
        return {
            'id': self.id,
            'timestamp': self.timestamp,
            'grid_size': self.grid_size,
            'time_spent': self.time_spent,
            'moves': self.moves,
            'initial_grid': self.initial_grid.to_list(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SessionRecord':
        """
        Create record from dictionary.

        Raises:
            ValueError: If the payload is not a valid record
        """
        validation = GridValidator.validate_record(data)
        if not validation:
            raise ValueError(f"Invalid session record: {'; '.join(validation.errors)}")

        return cls(
            id=str(data['id']),
            timestamp=int(data['timestamp']),
            grid_size=int(data.get('grid_size', config.LEGACY_GRID_SIZE)),
            time_spent=float(data['time_spent']),
            moves=int(data['moves']),
            initial_grid=Grid.from_list(data['initial_grid']),
        )


WinListener = Callable[[SessionRecord], None]


@dataclass
class GameSession:
    """
    A single game from the first press to the win.

    The PLAYING -> WON transition happens once; the record for the game is
    built on that edge and handed to listeners. Replays (record_history=False)
    still reach WON but never produce a record.
    """
    initial_grid: Grid
    record_history: bool = True
    clock: Callable[[], float] = time.monotonic
    log_level: str = config.LOG_LEVEL
    grid: Grid = field(init=False)
    moves: int = field(init=False, default=0)
    state: SessionState = field(init=False, default=SessionState.PLAYING)
    record: Optional[SessionRecord] = field(init=False, default=None)
    _started_at: float = field(init=False, repr=False)
    _finished_at: Optional[float] = field(init=False, default=None, repr=False)
    _listeners: List[WinListener] = field(init=False, default_factory=list, repr=False)

    def __post_init__(self):
        self.logger = setup_logger(self.__class__.__name__, level=self.log_level)
        self.reset()

    @property
    def is_won(self) -> bool:
        return self.state is SessionState.WON

    @property
    def elapsed(self) -> float:
        """Seconds since the session (re)started, frozen once won"""
        end = self._finished_at if self._finished_at is not None else self.clock()
        return end - self._started_at

    def on_win(self, listener: WinListener):
        """Register a callback that receives the record when the game is won"""
        self._listeners.append(listener)

    def reset(self):
        """Restart from the initial grid"""
        self.grid = self.initial_grid
        self.moves = 0
        self.state = SessionState.PLAYING
        self.record = None
        self._started_at = self.clock()
        self._finished_at = None

    def toggle(self, row: int, col: int) -> Optional[SessionRecord]:
        """
        Press a cell.

        Returns:
            The new record if this press won the game, otherwise None
        """
        if self.state is SessionState.WON:
            self.logger.debug(f"Ignoring press ({row}, {col}) after win")
            return None

        self.grid = toggle(self.grid, row, col)
        self.moves += 1

        if is_win(self.grid):
            return self._win()
        return None

    def _win(self) -> Optional[SessionRecord]:
        self.state = SessionState.WON
        self._finished_at = self.clock()
        self.logger.info(f"Solved {self.grid.size}x{self.grid.size} in {self.moves} moves, {self.elapsed:.3f}s")

        if not self.record_history:
            return None

        self.record = SessionRecord.create(self.initial_grid, self.elapsed, self.moves)
        for listener in self._listeners:
            listener(self.record)
        return self.record
