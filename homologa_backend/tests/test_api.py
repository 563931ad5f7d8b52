import pytest
from fastapi.testclient import TestClient

from app.core.database import get_db
from app.main import app


@pytest.fixture
def client(db, isis):
    app.dependency_overrides[get_db] = lambda: db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_list_programs(client):
    response = client.get("/api/programs")
    assert response.status_code == 200
    assert [p["code"] for p in response.json()] == ["IADM", "ISIS"]


def test_curricula_of_unknown_program(client):
    assert client.get("/api/programs/XXXX/curricula").status_code == 404


def test_curriculum_overview(client, isis):
    response = client.get(f"/api/curricula/{isis.id}")
    assert response.status_code == 200
    assert response.json()["total_subjects"] == 7
    assert client.get("/api/curricula/9999").status_code == 404


def test_parse_text(client):
    response = client.post(
        "/api/transcripts/parse",
        json={"text": "Cálculo Diferencial (1000003)\t4\tFUND. OBLIGATORIA\t2020-1S\t4.5"},
    )
    body = response.json()
    assert response.status_code == 200
    assert body["total_courses"] == 1
    assert body["courses"][0]["code"] == "1000003"
    assert body["courses"][0]["category"] == "FUND. OBLIGATORIA"


def test_parse_pdf_garbage(client):
    response = client.post(
        "/api/transcripts/parse-pdf",
        files={"file": ("historia.pdf", b"garbage", "application/pdf")},
    )
    assert response.status_code == 200
    assert response.json() == {"courses": [], "total_courses": 0}


def test_compare(client, isis):
    response = client.post(
        "/api/compare",
        json={"curriculum_id": isis.id, "courses": [{"code": "1000099", "credits": 4}]},
    )
    body = response.json()
    assert response.status_code == 200
    assert [s["code"] for s in body["equivalent_subjects"]] == ["1000001"]
    assert body["credits_summary"]["foundational_required"] == {"required": 8, "completed": 4, "missing": 4}


def test_compare_by_program_unknown(client):
    response = client.post("/api/compare/by-program", json={"program_code": "XXXX", "courses": []})
    assert response.status_code == 404


def test_compare_text(client):
    response = client.post(
        "/api/compare/text",
        json={
            "academic_history_text": "Inglés I (1000044)\t3\tLIBRE ELECCIÓN\t2020-1S\t4.0",
            "program_code": "ISIS",
        },
    )
    body = response.json()
    assert response.status_code == 200
    assert [c["code"] for c in body["parsed_courses"]] == ["1000044"]
    assert body["comparison"]["credits_summary"]["free_elective"]["missing"] == 0


def test_dual_degree(client):
    response = client.post(
        "/api/dual-degree",
        json={
            "origin_history": "Álgebra Lineal (1000002)\t4\tFUND. OBLIGATORIA\t2019-2S\t3.8",
            "dual_history": "",
            "target_program_code": "ISIS",
        },
    )
    body = response.json()
    assert response.status_code == 200
    assert body["total_credits"] == 4
    assert body["homologable_subjects"][0]["target_code"] == "1000002"


def test_dual_degree_unknown_program(client):
    response = client.post(
        "/api/dual-degree",
        json={"origin_history": "", "dual_history": "", "target_program_code": "XXXX"},
    )
    assert response.status_code == 404


def test_docs_served_outside_production(client):
    assert client.get("/docs").status_code == 200
