import os

# Must be set before the app package creates its engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.database import Base, get_db  # noqa: E402
from app.domain.chat import RoomRouter  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Appointment, Message, User  # noqa: E402


class FakeSocketServer:
    """In-memory stand-in for socketio.AsyncServer that records every delivery"""

    def __init__(self):
        self.rooms: dict[str, set[str]] = {}
        self.delivered: list[tuple[str, str, dict]] = []

    async def enter_room(self, sid, room, namespace=None):
        self.rooms.setdefault(room, set()).add(sid)

    async def leave_room(self, sid, room, namespace=None):
        self.rooms.get(room, set()).discard(sid)

    async def emit(self, event, data=None, to=None, room=None, skip_sid=None, namespace=None):
        if room is not None:
            recipients = self.rooms.get(room, set())
        else:
            recipients = {to}
        for sid in sorted(recipients):
            if sid != skip_sid:
                self.delivered.append((sid, event, data))

    def received(self, sid, event=None) -> list[dict]:
        return [
            payload
            for target, name, payload in self.delivered
            if target == sid and (event is None or name == event)
        ]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def socket_server():
    return FakeSocketServer()


@pytest.fixture
def room_router(socket_server):
    return RoomRouter(socket_server)


@pytest.fixture
def client(session_factory, room_router):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    previous_router = app.state.room_router
    app.dependency_overrides[get_db] = override_get_db
    app.state.room_router = room_router
    yield TestClient(app)
    app.dependency_overrides.clear()
    app.state.room_router = previous_router


@pytest.fixture
def make_appointment(db):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "id": f"appt-{counter['n']}",
            "user_email": "ana@example.com",
            "service_name": "Corte Feminino",
            "date": date(2024, 7, 10),
            "time": "10:00",
            "status": "pending",
            "price": 80.0,
        }
        data.update(overrides)
        appointment = Appointment(**data)
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    return _make


@pytest.fixture
def make_message(db):
    def _make(user_email="ana@example.com", sender="user", content="oi", is_read=False):
        message = Message(user_email=user_email, sender=sender, content=content, is_read=is_read)
        db.add(message)
        db.commit()
        db.refresh(message)
        return message

    return _make


@pytest.fixture
def make_user(db):
    def _make(name="Ana", email="ana@example.com", role="user"):
        user = User(name=name, email=email, role=role)
        db.add(user)
        db.commit()
        return user

    return _make
