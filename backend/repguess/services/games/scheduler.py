from typing import Callable, Optional


class ScheduledTask:
    """Handle for a delayed callback; a cancelled task never runs."""

    def __init__(self, delay: float, fn: Callable, args: tuple):
        self.delay = delay
        self.fn = fn
        self.args = args
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    def run(self) -> None:
        if self.cancelled or self.fired:
            return
        self.fired = True
        self.fn(*self.args)


class SocketIOScheduler:
    """Run delayed callbacks as Socket.IO background tasks.

    Works with whichever async mode the ``SocketIO`` instance picked
    (threading, eventlet, gevent) since it only relies on
    ``start_background_task`` and ``sleep``.
    """

    def __init__(self, socketio):
        self.socketio = socketio

    def call_later(self, delay: float, fn: Callable, *args) -> ScheduledTask:
        task = ScheduledTask(delay, fn, args)

        def _worker():
            self.socketio.sleep(delay)
            task.run()

        self.socketio.start_background_task(_worker)
        return task


def run_round_clock(app, engine, socketio, max_ticks: Optional[int] = None) -> int:
    """Tick ``engine`` every TICK_INTERVAL_SEC until ``max_ticks`` is reached.

    With ``max_ticks`` left as None the loop runs for the life of the
    process. Returns the number of ticks delivered.
    """
    interval = float(app.config.get('TICK_INTERVAL_SEC', 1))
    heartbeat = int(app.config.get('TIMER_HEARTBEAT_SEC', 0) or 0)
    ticks = 0
    since_heartbeat = 0.0
    while max_ticks is None or ticks < max_ticks:
        socketio.sleep(interval)
        engine.tick()
        ticks += 1
        if heartbeat > 0:
            since_heartbeat += interval
            if since_heartbeat >= heartbeat:
                since_heartbeat = 0.0
                snap = engine.snapshot()
                app.logger.info(f"[timer-heartbeat] round={snap['round_id']} remaining={snap['timer']}s")
    return ticks


def start_round_clock(app, engine, socketio):
    """Start the once-per-second clock for ``engine`` in the background.

    - No-ops in TESTING mode unless ENABLE_SCHEDULER_IN_TESTS is set
    - Starts at most one clock per application
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
        return None

    state = app.extensions.setdefault('repguess', {})
    if state.get('clock') is not None:
        app.logger.info("[clock-skip] clock already running")
        return state['clock']

    app.logger.info(f"[clock-set] interval={app.config.get('TICK_INTERVAL_SEC', 1)}s")
    state['clock'] = socketio.start_background_task(run_round_clock, app, engine, socketio)
    return state['clock']
