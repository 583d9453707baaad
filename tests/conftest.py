"""
In-memory stand-in for the Supabase client used by the API.

Only the query builder calls the services make are supported. Row level
security is not modelled: every client sees every row.
"""

import uuid
from copy import deepcopy
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from fitdash.core.dependencies import get_user_supabase
from fitdash.core.periods import parse_timestamp
from fitdash.database.supabase_client import get_supabase, get_service_supabase, get_session_supabase
from fitdash.main import app


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload = None
        self.filters = []
        self.orders = []
        self.window = None

    def select(self, columns="*"):
        self.op = "select"
        return self

    def insert(self, payload):
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.op = "update"
        self.payload = payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.db.in_filter_sizes.append(len(values))
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def gte(self, column, value):
        bound = parse_timestamp(value)
        self.filters.append(lambda row: row.get(column) is not None and parse_timestamp(row[column]) >= bound)
        return self

    def order(self, column, desc=False):
        self.orders.append((column, desc))
        return self

    def limit(self, size):
        self.window = (0, size)
        return self

    def range(self, start, end):
        self.window = (start, end - start + 1)
        return self

    def _matching(self):
        return [row for row in self.db.tables.setdefault(self.table, []) if all(f(row) for f in self.filters)]

    def execute(self):
        if self.op == "insert":
            if self.table in self.db.failing_tables:
                raise Exception(f"new row violates row-level security policy for table \"{self.table}\"")
            rows = self.payload if isinstance(self.payload, list) else [self.payload]
            created = []
            for row in rows:
                row = deepcopy(row)
                row.setdefault("id", str(uuid.uuid4()))
                row.setdefault("created_at", self.db.clock().isoformat())
                self.db.tables.setdefault(self.table, []).append(row)
                created.append(deepcopy(row))
            return SimpleNamespace(data=created)

        if self.op == "update":
            updated = []
            for row in self._matching():
                row.update(deepcopy(self.payload))
                updated.append(deepcopy(row))
            return SimpleNamespace(data=updated)

        if self.op == "delete":
            removed = self._matching()
            self.db.tables[self.table] = [r for r in self.db.tables[self.table] if r not in removed]
            return SimpleNamespace(data=deepcopy(removed))

        rows = self._matching()
        for column, desc in reversed(self.orders):
            rows = sorted(rows, key=lambda r: (r.get(column) is None, r.get(column)), reverse=desc)
        if self.window:
            start, size = self.window
            rows = rows[start:start + size]
        if self.db.max_rows is not None:
            rows = rows[:self.db.max_rows]
        return SimpleNamespace(data=deepcopy(rows))


class FakeBucket:
    def __init__(self, storage, name):
        self.storage = storage
        self.name = name

    def upload(self, path, file, file_options=None):
        self.storage.objects[(self.name, path)] = (file, file_options or {})
        return SimpleNamespace(path=path)

    def get_public_url(self, path):
        return f"https://fake.supabase.co/storage/v1/object/public/{self.name}/{path}"


class FakeStorage:
    def __init__(self):
        self.objects = {}

    def from_(self, bucket):
        return FakeBucket(self, bucket)


class FakeAuth:
    def __init__(self, db):
        self.db = db
        self.users = {}
        self.tokens = {}
        self.signed_out = 0

    def _user(self, user_id):
        record = self.users[user_id]
        return SimpleNamespace(
            id=user_id,
            email=record["email"],
            user_metadata={"name": record["name"]},
            app_metadata={},
            created_at=record["created_at"],
            updated_at=None
        )

    def sign_up(self, credentials):
        email = credentials["email"]
        if any(u["email"] == email for u in self.users.values()):
            raise Exception("User already registered")
        name = credentials.get("options", {}).get("data", {}).get("name") or email.split("@")[0]
        user_id = self.db.create_user(email, name, password=credentials["password"])
        return SimpleNamespace(user=self._user(user_id), session=None)

    def sign_in_with_password(self, credentials):
        for user_id, record in self.users.items():
            if record["email"] == credentials["email"] and record["password"] == credentials["password"]:
                return SimpleNamespace(
                    user=self._user(user_id),
                    session=SimpleNamespace(access_token=record["token"])
                )
        raise Exception("Invalid login credentials")

    def get_user(self, jwt=None):
        if jwt not in self.tokens:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=self._user(self.tokens[jwt]))

    def sign_out(self):
        self.signed_out += 1


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.now = None
        self.max_rows = None  # PostgREST max-rows cap, applied to every select
        self.failing_tables = set()
        self.in_filter_sizes = []
        self.auth = FakeAuth(self)
        self.storage = FakeStorage()

    def clock(self):
        return self.now or datetime.now(timezone.utc)

    def table(self, name):
        return FakeQuery(self, name)

    def create_user(self, email, name, password="secret123", roles=(), gym_id=None, weekly_goal=None, total_points=0):
        """Auth user plus the profile row the signup trigger would create"""
        user_id = str(uuid.uuid4())
        token = f"token-{user_id}"
        self.auth.users[user_id] = {
            "email": email,
            "name": name,
            "password": password,
            "token": token,
            "created_at": self.clock().isoformat()
        }
        self.auth.tokens[token] = user_id
        self.table("profiles").insert({
            "user_id": user_id,
            "name": name,
            "email": email,
            "gym_id": gym_id,
            "weekly_goal": weekly_goal,
            "total_points": total_points
        }).execute()
        for role in roles:
            self.table("user_roles").insert({"user_id": user_id, "role": role}).execute()
        return user_id

    def token_for(self, user_id):
        return self.auth.users[user_id]["token"]

    def headers(self, user_id):
        return {"Authorization": f"Bearer {self.token_for(user_id)}"}

    def create_gym(self, owner_id, name, tagline=None, city=None):
        return self.table("gyms").insert({
            "owner_id": owner_id,
            "name": name,
            "tagline": tagline,
            "city": city,
            "logo_url": None
        }).execute().data[0]["id"]

    def profile(self, user_id):
        return self.table("profiles").select("*").eq("user_id", user_id).execute().data[0]


@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_supabase] = lambda: db
    app.dependency_overrides[get_service_supabase] = lambda: db
    app.dependency_overrides[get_session_supabase] = lambda: db
    app.dependency_overrides[get_user_supabase] = lambda: db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def owner(db):
    """Owner with a gym; returns (user_id, gym_id)"""
    user_id = db.create_user("owner@ironhouse.pt", "Olivia Owner", roles=["owner"])
    gym_id = db.create_gym(user_id, "Iron House", tagline="Lift heavy, stay kind", city="Lisbon")
    return user_id, gym_id


@pytest.fixture
def member(db, owner):
    """Member of the owner's gym with a weekly goal of 3"""
    _, gym_id = owner
    return db.create_user("mia@ironhouse.pt", "Mia Member", roles=["member"], gym_id=gym_id, weekly_goal=3)
