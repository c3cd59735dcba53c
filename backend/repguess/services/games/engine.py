import logging
import random
import threading
from typing import Callable, Optional

from flask import current_app

from repguess.exceptions import InvalidInput
from repguess.models import Cue, Difficulty, HistoryEntry, Phase, RoundState, SessionState
from .scoring import compute_points, draw_target, parse_guess


TOO_LOW = 'Too low! 💪'
TOO_HIGH = 'Too high! 🔥'
CORRECT = 'Correct! 🎉 You hit the target in {attempts} attempts'
TIME_UP = "Time's up! ⏰"


class RoundEngine:
    """Owns the live round and the session, and is the only thing that changes them.

    Every command runs to completion under one lock and then hands a
    fresh snapshot to ``publish``. Timing is driven from outside: a clock
    calls :meth:`tick` once per second and ``scheduler`` runs the delayed
    restart after a won round.
    """

    def __init__(
        self,
        scheduler,
        publish: Optional[Callable[[dict], None]] = None,
        rng=None,
        logger=None,
        difficulty: Difficulty = Difficulty.MEDIUM,
        round_duration: int = 30,
        restart_delay: float = 1.0,
        reject_zero: bool = True,
        cue_duration_ms: int = 300,
    ):
        self.scheduler = scheduler
        self.publish = publish
        self.rng = rng or random.Random()
        self.logger = logger or logging.getLogger(__name__)
        self.round_duration = round_duration
        self.restart_delay = restart_delay
        self.reject_zero = reject_zero
        self.cue_duration_ms = cue_duration_ms
        self.session = SessionState()
        self.round: Optional[RoundState] = None
        self._lock = threading.RLock()
        self._round_seq = 0
        self._pending_restart = None
        self._start_round(Difficulty.parse(difficulty))

    @classmethod
    def from_config(cls, config, scheduler, publish=None, rng=None, logger=None):
        return cls(
            scheduler,
            publish=publish,
            rng=rng,
            logger=logger,
            difficulty=Difficulty.parse(config.get('DEFAULT_DIFFICULTY', 'medium')),
            round_duration=int(config.get('ROUND_DURATION_SEC', 30)),
            restart_delay=float(config.get('SUCCESS_RESTART_DELAY_SEC', 1)),
            reject_zero=bool(config.get('REJECT_ZERO_GUESS', True)),
            cue_duration_ms=int(config.get('CUE_DURATION_MS', 300)),
        )

    # ---- commands ----

    def select_difficulty(self, difficulty) -> dict:
        difficulty = Difficulty.parse(difficulty)
        with self._lock:
            self._start_round(difficulty)
            return self._publish()

    def reset_game(self, new_level=None) -> dict:
        with self._lock:
            level = Difficulty.parse(new_level) if new_level else self.round.difficulty
            self._start_round(level)
            return self._publish()

    def update_input(self, text) -> dict:
        with self._lock:
            self.round.input_text = '' if text is None else str(text)
            return self._publish()

    def submit_guess(self, raw=None) -> dict:
        """Evaluate a guess; ``raw`` defaults to the current input buffer.

        Raises :class:`InvalidInput` without consuming an attempt. The
        input buffer is cleared either way.
        """
        with self._lock:
            rnd = self.round
            text = rnd.input_text if raw is None else raw
            rnd.input_text = ''
            try:
                value = parse_guess(text, reject_zero=self.reject_zero)
            except InvalidInput:
                self.logger.info(f"[guess-invalid] round={rnd.round_id} raw={text!r}")
                self._publish()
                raise

            if rnd.phase is not Phase.ACTIVE:
                self.logger.info(f"[guess-ignored] round={rnd.round_id} phase={rnd.phase.value}")
                return self._publish()

            rnd.attempts += 1
            if value < rnd.target:
                rnd.feedback = TOO_LOW
                rnd.cue = Cue.INCORRECT
            elif value > rnd.target:
                rnd.feedback = TOO_HIGH
                rnd.cue = Cue.INCORRECT
            else:
                self._resolve_success()
            self.logger.info(
                f"[guess] round={rnd.round_id} value={value} attempts={rnd.attempts} phase={rnd.phase.value}"
            )
            return self._publish()

    def tick(self) -> dict:
        """Advance the countdown by one second; at zero the round times out."""
        with self._lock:
            rnd = self.round
            if rnd.phase is not Phase.ACTIVE:
                return self._publish()
            rnd.timer = max(rnd.timer - 1, 0)
            if rnd.timer == 0:
                self.logger.info(
                    f"[timeout] round={rnd.round_id} difficulty={rnd.difficulty.label} streak_lost={self.session.streak}"
                )
                self.session.streak = 0
                self._start_round(rnd.difficulty, feedback=TIME_UP)
            return self._publish()

    # ---- state ----

    def snapshot(self) -> dict:
        with self._lock:
            rnd = self.round
            return {
                'round_id': rnd.round_id,
                'phase': rnd.phase.value,
                'difficulty': rnd.difficulty.label,
                'range': rnd.difficulty.to_dict(),
                'attempts': rnd.attempts,
                'timer': rnd.timer,
                'feedback': rnd.feedback,
                'input': rnd.input_text,
                'cue': rnd.cue.value,
                'cue_duration_ms': self.cue_duration_ms,
                'score': self.session.score,
                'streak': self.session.streak,
                'history': [entry.to_dict() for entry in self.session.history],
                'difficulties': {d.label: d.to_dict() for d in Difficulty},
            }

    # ---- internals ----

    def _start_round(self, difficulty: Difficulty, feedback: str = '') -> None:
        if self._pending_restart is not None:
            self._pending_restart.cancel()
            self._pending_restart = None
        self._round_seq += 1
        target = draw_target(difficulty, self.rng)
        self.round = RoundState(
            round_id=self._round_seq,
            difficulty=difficulty,
            target=target,
            timer=self.round_duration,
            feedback=feedback,
        )
        self.logger.info(f"[round-start] round={self._round_seq} difficulty={difficulty.label}")

    def _resolve_success(self) -> None:
        rnd = self.round
        points = compute_points(rnd.attempts, rnd.timer)
        self.session.score += points
        self.session.streak += 1
        self.session.record(HistoryEntry(
            difficulty=rnd.difficulty,
            target=rnd.target,
            attempts=rnd.attempts,
            points=points,
            streak=self.session.streak,
        ))
        rnd.feedback = CORRECT.format(attempts=rnd.attempts)
        rnd.cue = Cue.CORRECT
        rnd.phase = Phase.RESOLVED
        self.logger.info(
            f"[success] round={rnd.round_id} attempts={rnd.attempts} timer={rnd.timer} "
            f"points={points} score={self.session.score} streak={self.session.streak}"
        )
        self._pending_restart = self.scheduler.call_later(self.restart_delay, self._auto_restart, rnd.round_id)
        self.logger.info(f"[restart-set] round={rnd.round_id} delay={self.restart_delay}s")

    def _auto_restart(self, round_id: int) -> None:
        with self._lock:
            rnd = self.round
            self.logger.info(f"[restart-fire] expected_round={round_id} actual_round={rnd.round_id}")
            if rnd.round_id != round_id or rnd.phase is not Phase.RESOLVED:
                self.logger.info(f"[restart-abort] round={round_id} superseded")
                return
            self._pending_restart = None
            self._start_round(rnd.difficulty)
            self._publish()

    def _publish(self) -> dict:
        snap = self.snapshot()
        if self.publish is not None:
            self.publish(snap)
        return snap


def get_engine(app=None) -> RoundEngine:
    app = app or current_app
    return app.extensions['repguess']['engine']
