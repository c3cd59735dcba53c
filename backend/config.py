import os


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Round timing (seconds)
    ROUND_DURATION_SEC = int(os.environ.get('ROUND_DURATION_SEC', '30'))
    SUCCESS_RESTART_DELAY_SEC = float(os.environ.get('SUCCESS_RESTART_DELAY_SEC', '1'))
    TICK_INTERVAL_SEC = float(os.environ.get('TICK_INTERVAL_SEC', '1'))
    # Background cue animation length handed to renderers (ms)
    CUE_DURATION_MS = int(os.environ.get('CUE_DURATION_MS', '300'))
    DEFAULT_DIFFICULTY = os.environ.get('DEFAULT_DIFFICULTY', 'medium')
    # A typed "0" counts as an invalid guess unless disabled
    REJECT_ZERO_GUESS = _env_flag('REJECT_ZERO_GUESS', True)
    # Optional: heartbeat interval for clock worker logs (sec). 0 disables.
    TIMER_HEARTBEAT_SEC = int(os.environ.get('TIMER_HEARTBEAT_SEC', '0'))
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            'CORS_ORIGINS',
            'http://localhost:5173,http://127.0.0.1:5173,http://localhost:8081',
        ).split(',')
        if origin.strip()
    ]
