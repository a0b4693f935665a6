import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./salon.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS - mobile apps connect from anywhere by default
ALLOWED_ORIGINS = [
    origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",") if origin.strip()
]

# Socket.IO endpoint path (clients connect to /socket.io by default)
SOCKETIO_PATH = os.getenv("SOCKETIO_PATH", "socket.io")
