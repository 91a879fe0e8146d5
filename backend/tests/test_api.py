from pathtrace.db.models import DijkstraRun

# -----------------------------
# Graph endpoint
# -----------------------------

def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "message" in response.json()


def test_get_graph(client):
    response = client.get("/graph")
    assert response.status_code == 200
    body = response.json()
    assert [n["id"] for n in body["nodes"]] == list("ABCDEFG")
    assert body["nodes"][0] == {"id": "A", "x": 120, "y": 80}
    assert len(body["edges"]) == 10
    assert body["edges"][0] == {"a": "A", "b": "B", "weight": 4.0}

# -----------------------------
# Run endpoint
# -----------------------------

def test_run_sample(client):
    response = client.post("/dijkstra/run", json={"source": "A", "target": "G"})
    assert response.status_code == 200
    body = response.json()

    assert body["distance"] == 5.0
    assert body["total_distance"] == 5.0
    assert body["path"] == ["A", "D", "E", "G"]
    assert body["distances"] == {"A": 0, "B": 4, "C": 7, "D": 2, "E": 4, "F": 8, "G": 5}
    assert body["predecessors"]["A"] is None
    assert body["predecessors"]["G"] == "E"
    assert body["trace"][0] == "Init: set distance(A)=0 and others=INF"
    assert "Detailed relax operations:" in body["details"]

    highlighted = {n["id"] for n in body["highlight"]["nodes"] if n["highlighted"]}
    assert highlighted == {"A", "D", "E", "G"}
    on_path = [(e["a"], e["b"]) for e in body["highlight"]["edges"] if e["on_path"]]
    assert on_path == [("A", "D"), ("D", "E"), ("E", "G")]


def test_run_unknown_source(client):
    response = client.post("/dijkstra/run", json={"source": "Z", "target": "G"})
    assert response.status_code == 404
    assert "Z" in response.json()["detail"]


def test_run_unknown_target(client):
    response = client.post("/dijkstra/run", json={"source": "A", "target": "Z"})
    assert response.status_code == 404


def test_run_unreachable_target(client, session_factory):
    from pathtrace.db.models import GraphNode

    db = session_factory()
    try:
        db.add(GraphNode(id="H", x=520, y=200, position=7))
        db.commit()
    finally:
        db.close()

    response = client.post("/dijkstra/run", json={"source": "A", "target": "H"})
    assert response.status_code == 200
    body = response.json()
    assert body["path"] == []
    assert body["distance"] is None
    assert body["total_distance"] is None
    assert body["distances"]["H"] is None


def test_run_does_not_archive(client, session_factory):
    client.post("/dijkstra/run", json={"source": "A", "target": "G"})
    db = session_factory()
    try:
        assert db.query(DijkstraRun).count() == 0
    finally:
        db.close()

# -----------------------------
# Archive endpoints
# -----------------------------

def test_save_and_list_runs(client):
    first = client.post("/dijkstra/runs", json={"source": "A", "target": "G"})
    assert first.status_code == 200
    saved = first.json()
    assert saved["source_node"] == "A"
    assert saved["target_node"] == "G"
    assert saved["path"] == "A->D->E->G"
    assert saved["distance"] == 5.0
    assert saved["details"].startswith("Run at: ")

    client.post("/dijkstra/runs", json={"source": "B", "target": "F"})

    listed = client.get("/dijkstra/runs").json()
    assert [r["target_node"] for r in listed] == ["F", "G"]
    assert len(client.get("/dijkstra/runs", params={"limit": 1}).json()) == 1


def test_save_run_unknown_source(client):
    response = client.post("/dijkstra/runs", json={"source": "Z", "target": "G"})
    assert response.status_code == 404
    assert client.get("/dijkstra/runs").json() == []


def test_save_run_database_error(client, db_engine):
    DijkstraRun.__table__.drop(db_engine)
    response = client.post("/dijkstra/runs", json={"source": "A", "target": "G"})
    assert response.status_code == 500
    assert "Error saving run to database" in response.json()["detail"]
