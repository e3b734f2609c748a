"""
API tests for /api/notes endpoints.
Tests: create/list/get/update, delete conflict while flashcards reference a
note, cascade delete, content preview.
"""

from app.core.utils import truncate_content


class TestCreateAndRead:

    def test_create_note(self, client):
        r = client.post("/api/notes", json={"title": "History", "content": "Rome was founded."})
        assert r.status_code == 201
        note = r.json()["note"]
        assert note["id"]
        assert note["title"] == "History"
        assert note["content"] == "Rome was founded."
        assert note["userId"] == 1
        assert note["createdAt"] == note["updatedAt"]

    def test_missing_title_gets_placeholder(self, client):
        r = client.post("/api/notes", json={"content": "Text"})
        assert r.json()["note"]["title"] == "Untitled Note"

    def test_blank_content_is_400(self, client):
        assert client.post("/api/notes", json={"content": "  "}).status_code == 400
        assert client.post("/api/notes", json={"title": "t"}).status_code == 400

    def test_get_note(self, client, note_id):
        r = client.get(f"/api/notes/{note_id}")
        assert r.status_code == 200
        assert r.json()["note"]["id"] == note_id

    def test_get_unknown_note_is_404(self, client):
        r = client.get("/api/notes/nope")
        assert r.status_code == 404
        assert r.json() == {"error": "Note not found"}

    def test_list_notes_includes_preview(self, client):
        long_text = "word " * 60
        client.post("/api/notes", json={"content": long_text})

        notes = client.get("/api/notes").json()["notes"]
        assert len(notes) == 1
        assert notes[0]["preview"] == truncate_content(long_text)
        assert notes[0]["preview"].endswith("...")


class TestUpdate:

    def test_update_title_and_content(self, client, note_id):
        r = client.patch(f"/api/notes/{note_id}", json={"title": "New", "content": "Changed"})
        assert r.status_code == 200
        data = r.json()
        assert data["id"] == note_id
        assert data["title"] == "New"
        assert data["updatedAt"]
        assert client.get(f"/api/notes/{note_id}").json()["note"]["content"] == "Changed"

    def test_blank_title_becomes_placeholder(self, client, note_id):
        r = client.patch(f"/api/notes/{note_id}", json={"title": "   "})
        assert r.json()["title"] == "Untitled Note"

    def test_empty_body_is_400(self, client, note_id):
        assert client.patch(f"/api/notes/{note_id}", json={}).status_code == 400

    def test_update_unknown_note_is_404(self, client):
        assert client.patch("/api/notes/nope", json={"title": "x"}).status_code == 404


class TestDelete:

    def test_delete_note_without_flashcards(self, client, note_id):
        r = client.delete(f"/api/notes/{note_id}")
        assert r.status_code == 200
        assert r.json() == {"success": True, "deletedFlashcards": 0}
        assert client.get(f"/api/notes/{note_id}").status_code == 404

    def test_delete_unknown_note_is_404(self, client):
        assert client.delete("/api/notes/nope").status_code == 404

    def test_delete_note_with_flashcards_is_conflict(self, client, note_id):
        batch = client.post("/api/flashcards", json={"noteId": note_id, "count": 2}).json()

        r = client.delete(f"/api/notes/{note_id}")
        assert r.status_code == 409
        assert "associated flashcards" in r.json()["error"]
        assert client.get(f"/api/notes/{note_id}").status_code == 200

        assert client.delete(f"/api/flashcards/batch/{batch['batchId']}").status_code == 200
        assert client.delete(f"/api/notes/{note_id}").status_code == 200

    def test_cascade_delete_removes_flashcards_and_note(self, client, note_id):
        client.post("/api/flashcards", json={"noteId": note_id, "count": 2})

        r = client.delete(f"/api/notes/{note_id}", params={"cascade": "true"})
        assert r.status_code == 200
        assert r.json()["deletedFlashcards"] == 2
        assert client.get(f"/api/notes/{note_id}").status_code == 404
        assert client.get("/api/flashcards").json() == {"batches": []}
