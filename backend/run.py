import os

from dotbox import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # Use SocketIO server to enable websockets in dev
    port = int(os.environ.get('PORT', '3001'))
    socketio.run(app, host='0.0.0.0', port=port, debug=True)
