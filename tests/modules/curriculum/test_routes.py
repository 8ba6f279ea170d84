"""
Tests for module, lesson and attachment endpoints.
"""
import json
from uuid import uuid4

import pytest


def _lesson_form(**fields):
    return {"payload": json.dumps(fields)}


class TestLessonRoutes:
    """Multipart lesson endpoints."""

    def test_create_lesson_with_file_and_link(self, client, module):
        response = client.post(
            "/api/v1/lessons",
            data=_lesson_form(
                title="Box model",
                module_id=str(module.id),
                order=1,
                external_links=[{"url": "https://youtu.be/abc", "name": "Walkthrough"}],
            ),
            files=[("attachments", ("box-model.pdf", b"%PDF-1.4", "application/pdf"))],
        )

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Box model"
        assert data["module"]["id"] == str(module.id)
        types = sorted((a["type"], a["is_external"]) for a in data["attachments"])
        assert types == [("pdf", False), ("youtube", True)]

    def test_create_lesson_without_files(self, client, module):
        response = client.post(
            "/api/v1/lessons",
            data=_lesson_form(title="Reading list", module_id=str(module.id)),
        )
        assert response.status_code == 201
        assert response.json()["attachments"] == []

    def test_invalid_payload_is_422(self, client):
        response = client.post("/api/v1/lessons", data=_lesson_form(title="", order=0))
        assert response.status_code == 422
        fields = {tuple(err["loc"]) for err in response.json()["detail"]}
        assert ("title",) in fields
        assert ("order",) in fields

    def test_disallowed_file_is_422(self, client, module):
        response = client.post(
            "/api/v1/lessons",
            data=_lesson_form(title="Tools", module_id=str(module.id)),
            files=[("attachments", ("setup.exe", b"MZ", "application/octet-stream"))],
        )
        assert response.status_code == 422
        assert response.json()["detail"]["field"] == "attachments.0"

    def test_unknown_module_is_404(self, client):
        response = client.post(
            "/api/v1/lessons", data=_lesson_form(title="Lost", module_id=str(uuid4()))
        )
        assert response.status_code == 404

    def test_update_replaces_attachment(self, client, module):
        created = client.post(
            "/api/v1/lessons",
            data=_lesson_form(title="Colors", module_id=str(module.id)),
            files=[("attachments", ("v1.pdf", b"one", "application/pdf"))],
        ).json()
        old_id = created["attachments"][0]["id"]

        response = client.patch(
            f"/api/v1/lessons/{created['id']}",
            data=_lesson_form(content="Updated notes", delete_attachments=[old_id]),
            files=[("attachments", ("v2.png", b"two", "image/png"))],
        )

        assert response.status_code == 200
        data = response.json()
        assert data["content"] == "Updated notes"
        assert data["title"] == "Colors"
        assert [a["type"] for a in data["attachments"]] == ["image"]

    def test_delete_lesson(self, client, lessons):
        response = client.delete(f"/api/v1/lessons/{lessons[0].id}")
        assert response.status_code == 204
        assert client.get(f"/api/v1/lessons/{lessons[0].id}").status_code == 404

    def test_download_urls(self, client, module):
        created = client.post(
            "/api/v1/lessons",
            data=_lesson_form(
                title="Fonts",
                module_id=str(module.id),
                external_links=[{"url": "https://vimeo.com/7", "name": "Talk"}],
            ),
            files=[("attachments", ("fonts.zip", b"PK", "application/zip"))],
        ).json()
        by_type = {a["type"]: a for a in created["attachments"]}

        archive = client.get(f"/api/v1/attachments/{by_type['archive']['id']}/download").json()
        link = client.get(f"/api/v1/attachments/{by_type['vimeo']['id']}/download").json()

        assert archive["url"].startswith("/storage/lessons/attachments/fonts_")
        assert link["url"] == "https://vimeo.com/7"

        fetched = client.get(archive["url"])
        assert fetched.status_code == 200
        assert fetched.content == b"PK"
        assert fetched.headers["content-type"] == "application/zip"

    def test_missing_stored_file_is_404(self, client):
        assert client.get("/storage/lessons/attachments/gone.pdf").status_code == 404

    def test_null_title_is_422(self, client, lessons):
        response = client.patch(f"/api/v1/lessons/{lessons[0].id}", data=_lesson_form(title=None))

        assert response.status_code == 422
        assert [tuple(err["loc"]) for err in response.json()["detail"]] == [("title",)]
        assert client.get(f"/api/v1/lessons/{lessons[0].id}").json()["title"] == "Lesson 1"

    def test_null_module_id_unassigns(self, client, lessons):
        response = client.patch(f"/api/v1/lessons/{lessons[0].id}", data=_lesson_form(module_id=None))

        assert response.status_code == 200
        assert response.json()["module_id"] is None

    def test_attachments_keep_insertion_order(self, client, module):
        response = client.post(
            "/api/v1/lessons",
            data=_lesson_form(
                title="Assets",
                module_id=str(module.id),
                external_links=[
                    {"url": "https://youtu.be/a", "name": "First talk"},
                    {"url": "https://vimeo.com/2", "name": "Second talk"},
                ],
            ),
            files=[
                ("attachments", ("slides.pdf", b"%PDF", "application/pdf")),
                ("attachments", ("logo.png", b"png", "image/png")),
                ("attachments", ("fonts.zip", b"PK", "application/zip")),
            ],
        )
        lesson_id = response.json()["id"]

        expected = ["pdf", "image", "archive", "youtube", "vimeo"]
        assert [a["type"] for a in response.json()["attachments"]] == expected
        fetched = client.get(f"/api/v1/lessons/{lesson_id}").json()
        assert [a["type"] for a in fetched["attachments"]] == expected

    def test_delete_single_attachment(self, client, module):
        created = client.post(
            "/api/v1/lessons",
            data=_lesson_form(
                title="Icons",
                module_id=str(module.id),
                external_links=[{"url": "https://1drv.ms/abc", "name": "Icon pack"}],
            ),
        ).json()
        attachment_id = created["attachments"][0]["id"]

        response = client.delete(f"/api/v1/lessons/{created['id']}/attachments/{attachment_id}")
        assert response.status_code == 204
        assert client.get(f"/api/v1/lessons/{created['id']}").json()["attachments"] == []


class TestModuleRoutes:
    def test_create_and_get_module(self, client, formation):
        response = client.post(
            "/api/v1/modules",
            json={
                "title": "Accessibility",
                "formation_id": str(formation.id),
                "order": 3,
                "lessons": [{"title": "ARIA"}],
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["formation"]["id"] == str(formation.id)
        assert [lesson["title"] for lesson in data["lessons"]] == ["ARIA"]

        assert client.get(f"/api/v1/modules/{data['id']}").status_code == 200

    def test_update_module_mixed_entries(self, client, module, other_module, lessons):
        response = client.patch(
            f"/api/v1/modules/{other_module.id}",
            json={
                "lessons": [
                    {"id": str(lessons[0].id), "order": 1},
                    {"title": "Event loop", "order": 2},
                ],
            },
        )

        assert response.status_code == 200
        titles = [lesson["title"] for lesson in response.json()["lessons"]]
        assert titles == ["Lesson 1", "Event loop"]

    def test_unknown_lesson_id_is_404(self, client, module):
        response = client.patch(
            f"/api/v1/modules/{module.id}", json={"lessons": [{"id": str(uuid4())}]}
        )
        assert response.status_code == 404

    @pytest.mark.parametrize("field", ["title", "order", "formation_id"])
    def test_null_required_field_is_422(self, client, module, field):
        response = client.patch(f"/api/v1/modules/{module.id}", json={field: None})

        assert response.status_code == 422
        assert client.get(f"/api/v1/modules/{module.id}").json()["title"] == "HTML & CSS"

    def test_null_description_is_allowed(self, client, module):
        response = client.patch(f"/api/v1/modules/{module.id}", json={"description": None})
        assert response.status_code == 200
        assert response.json()["description"] is None

    def test_null_title_on_assigned_lesson_is_422(self, client, module, lessons):
        response = client.patch(
            f"/api/v1/modules/{module.id}",
            json={"lessons": [{"id": str(lessons[0].id), "title": None}]},
        )
        assert response.status_code == 422

    def test_delete_module_detaches_lessons(self, client, module, lessons):
        assert client.delete(f"/api/v1/modules/{module.id}").status_code == 204

        lesson = client.get(f"/api/v1/lessons/{lessons[0].id}").json()
        assert lesson["module_id"] is None


class TestInstructorLessonRoutes:
    def test_lists_assigned_module_lessons(
        self, client, formation, module, lessons, course_session, instructor_user
    ):
        assigned = client.post(
            f"/api/v1/course-sessions/{course_session.id}/module-instructors",
            json={"module_id": str(module.id), "instructor_id": str(instructor_user.id)},
        )
        assert assigned.status_code == 201

        response = client.get(f"/api/v1/instructors/{instructor_user.id}/lessons")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 3
        assert data[0]["module"]["formation"]["id"] == str(formation.id)
        assert "lessons" not in data[0]["module"]
        assert data[0]["attachments_count"] == 0
