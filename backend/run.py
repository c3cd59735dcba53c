from repguess import create_app, socketio
from repguess.services.games.engine import get_engine
from repguess.services.games.scheduler import start_round_clock

app = create_app()

if __name__ == '__main__':
    start_round_clock(app, get_engine(app), socketio)
    # Use SocketIO server to enable websockets in dev
    socketio.run(app, debug=True, use_reloader=False)
