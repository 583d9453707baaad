from datetime import datetime, timedelta, timezone

from fitdash.config import settings
from fitdash.modules.leaderboard.schemas import LeaderboardEntry
from fitdash.modules.leaderboard.service import rank_entries, tally, gym_label


def _visit(db, user_id, gym_id, points, created_at=None):
    row = {"user_id": user_id, "gym_id": gym_id, "points_earned": points}
    if created_at:
        row["created_at"] = created_at
    db.table("check_ins").insert(row).execute()


def _workout(db, user_id, gym_id, points):
    db.table("workouts").insert({
        "user_id": user_id, "gym_id": gym_id, "workout_type": "weights", "exercises": [],
        "total_duration_minutes": 10, "calories_burned": points * 10, "points_earned": points
    }).execute()


def test_rank_entries_is_stable():
    entries = [
        LeaderboardEntry(user_id="a", name="A", points=50),
        LeaderboardEntry(user_id="b", name="B", points=120),
        LeaderboardEntry(user_id="c", name="C", points=50),
    ]
    ranked = rank_entries(entries)
    assert [(e.user_id, e.rank) for e in ranked] == [("b", 1), ("a", 2), ("c", 3)]


def test_tally():
    totals = tally([
        {"user_id": "a", "points_earned": 50},
        {"user_id": "a", "points_earned": 150},
        {"user_id": "b", "points_earned": None},
    ])
    assert totals == {"a": {"points": 200, "count": 2}, "b": {"points": 0, "count": 1}}


def test_gym_label():
    names = {"g1": "Iron House"}
    assert gym_label("g1", names) == "Iron House"
    assert gym_label("g2", names) == "Unknown Gym"
    assert gym_label(None, names) == "No Gym"


def test_gym_leaderboard_this_week(client, db, owner, member):
    _, gym_id = owner
    ana = db.create_user("ana@ironhouse.pt", "Ana", gym_id=gym_id, weekly_goal=2)
    rui = db.create_user("rui@ironhouse.pt", "Rui", gym_id=gym_id, weekly_goal=2)
    other_owner = db.create_user("bob@pulse.pt", "Bob", roles=["owner"])
    other_gym = db.create_gym(other_owner, "Pulse Fitness")
    outsider = db.create_user("tia@pulse.pt", "Tia", gym_id=other_gym, weekly_goal=2)

    _visit(db, member, gym_id, 50)
    _workout(db, member, gym_id, 30)
    _visit(db, ana, gym_id, 200)
    _visit(db, rui, gym_id, 50)
    _workout(db, rui, gym_id, 30)
    _visit(db, outsider, other_gym, 500)
    long_ago = (datetime.now(timezone.utc) - timedelta(days=45)).isoformat()
    _visit(db, rui, gym_id, 1000, created_at=long_ago)

    response = client.get("/api/v1/leaderboard?scope=gym&period=week", headers=db.headers(member))
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Iron House"
    ranking = [(e["name"], e["points"], e["rank"]) for e in data["entries"]]
    assert ranking == [("Ana", 200, 1), ("Mia Member", 80, 2), ("Rui", 80, 3)]
    assert data["current_user_entry"]["rank"] == 2
    assert data["current_user_entry"]["visits"] == 1


def test_all_gyms_leaderboard(client, db, owner, member):
    other_owner = db.create_user("bob@pulse.pt", "Bob", roles=["owner"])
    other_gym = db.create_gym(other_owner, "Pulse Fitness")
    outsider = db.create_user("tia@pulse.pt", "Tia", gym_id=other_gym, weekly_goal=2)
    _visit(db, outsider, other_gym, 150)
    _visit(db, member, owner[1], 50)

    response = client.get("/api/v1/leaderboard?scope=all&period=month", headers=db.headers(member))
    data = response.json()
    assert data["title"] == "All Gyms"
    assert data["entries"][0]["name"] == "Tia"
    assert data["entries"][0]["gym_name"] == "Pulse Fitness"
    assert data["current_user_entry"]["points"] == 50


def test_leaderboard_without_gym(client, db):
    user_id = db.create_user("drifter@gmail.com", "Drifter")
    response = client.get("/api/v1/leaderboard", headers=db.headers(user_id))
    assert response.status_code == 200
    assert response.json()["title"] == "No gym"
    assert response.json()["entries"] == []


def test_leaderboard_rejects_unknown_scope(client, db, member):
    response = client.get("/api/v1/leaderboard?scope=city", headers=db.headers(member))
    assert response.status_code == 422


def test_all_gyms_labels_members_without_a_known_gym(client, db, member):
    drifter = db.create_user("drifter@gmail.com", "Drifter")
    ghost = db.create_user("ghost@gmail.com", "Ghost", gym_id="00000000-0000-0000-0000-000000000000")
    _visit(db, drifter, None, 30)
    _visit(db, ghost, None, 20)

    response = client.get("/api/v1/leaderboard?scope=all&period=week", headers=db.headers(member))
    labels = {e["name"]: e["gym_name"] for e in response.json()["entries"]}
    assert labels["Drifter"] == "No Gym"
    assert labels["Ghost"] == "Unknown Gym"
    assert labels["Mia Member"] == "Iron House"
    assert labels["Olivia Owner"] == "No Gym"


def test_gym_leaderboard_reads_every_page(client, db, owner, member, monkeypatch):
    monkeypatch.setattr(settings, "supabase_page_size", 2)
    monkeypatch.setattr(settings, "supabase_in_chunk_size", 2)
    _, gym_id = owner
    regulars = {}
    for name, points in [("Ana", 10), ("Rui", 20), ("Leo", 30), ("Eva", 40)]:
        regulars[name] = db.create_user(f"{name.lower()}@ironhouse.pt", name, gym_id=gym_id, weekly_goal=2)
        for _ in range(3):
            _visit(db, regulars[name], gym_id, points)
    _visit(db, member, gym_id, 5)
    _workout(db, regulars["Ana"], gym_id, 7)
    db.max_rows = 2

    response = client.get("/api/v1/leaderboard?scope=gym&period=week", headers=db.headers(member))
    assert response.status_code == 200
    ranking = [(e["name"], e["points"], e["visits"]) for e in response.json()["entries"]]
    assert ranking == [("Eva", 120, 3), ("Leo", 90, 3), ("Rui", 60, 3), ("Ana", 37, 3), ("Mia Member", 5, 1)]
    assert max(db.in_filter_sizes) <= 2


def test_all_gyms_leaderboard_reads_every_page(client, db, owner, member, monkeypatch):
    monkeypatch.setattr(settings, "supabase_page_size", 3)
    other_owner = db.create_user("bob@pulse.pt", "Bob", roles=["owner"])
    other_gym = db.create_gym(other_owner, "Pulse Fitness")
    tia = db.create_user("tia@pulse.pt", "Tia", gym_id=other_gym, weekly_goal=2)
    for _ in range(4):
        _visit(db, tia, other_gym, 25)
        _visit(db, member, owner[1], 10)
    db.max_rows = 3

    response = client.get("/api/v1/leaderboard?scope=all&period=week", headers=db.headers(member))
    data = response.json()
    assert len(data["entries"]) == 4
    assert data["entries"][0]["name"] == "Tia"
    assert data["entries"][0]["points"] == 100
    assert data["current_user_entry"]["points"] == 40
    assert data["current_user_entry"]["rank"] == 2
