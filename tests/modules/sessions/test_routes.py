"""
Tests for course-session endpoints.
"""
import datetime as dt

import pytest


class TestCourseSessionRoutes:
    def test_create_session(self, client, formation, instructor_user):
        start = dt.datetime.now(dt.timezone.utc) + dt.timedelta(days=14)
        response = client.post(
            "/api/v1/course-sessions",
            json={
                "formation_id": str(formation.id),
                "instructor_id": str(instructor_user.id),
                "start_date": start.isoformat(),
                "end_date": (start + dt.timedelta(days=60)).isoformat(),
                "location": "Abidjan",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["max_students"] == 30
        assert data["status"] == "scheduled"
        assert data["instructor"]["id"] == str(instructor_user.id)
        assert data["is_full"] is False

    def test_end_before_start_is_422(self, client, formation, instructor_user):
        start = dt.datetime.now(dt.timezone.utc)
        response = client.post(
            "/api/v1/course-sessions",
            json={
                "formation_id": str(formation.id),
                "instructor_id": str(instructor_user.id),
                "start_date": start.isoformat(),
                "end_date": (start - dt.timedelta(days=1)).isoformat(),
            },
        )
        assert response.status_code == 422

    def test_available_students(self, client, course_session, make_student):
        enrolled, free = make_student(), make_student()
        client.post(
            "/api/v1/enrollments",
            json={"student_id": str(enrolled.id), "course_session_id": str(course_session.id)},
        )

        students = client.get(f"/api/v1/course-sessions/{course_session.id}/students").json()
        available = client.get(f"/api/v1/course-sessions/{course_session.id}/available-students").json()

        assert [s["id"] for s in students] == [str(enrolled.id)]
        assert [s["id"] for s in available] == [str(free.id)]

    def test_by_formation_and_instructor(self, client, formation, instructor_user, course_session):
        by_formation = client.get(f"/api/v1/course-sessions/by-formation/{formation.id}").json()
        by_instructor = client.get(f"/api/v1/course-sessions/by-instructor/{instructor_user.id}").json()

        assert [s["id"] for s in by_formation] == [str(course_session.id)]
        assert [s["id"] for s in by_instructor] == [str(course_session.id)]

    @pytest.mark.parametrize(
        "field",
        ["formation_id", "instructor_id", "start_date", "end_date", "status", "max_students"],
    )
    def test_null_required_field_is_422(self, client, course_session, field):
        response = client.patch(f"/api/v1/course-sessions/{course_session.id}", json={field: None})

        assert response.status_code == 422
        fetched = client.get(f"/api/v1/course-sessions/{course_session.id}").json()
        assert fetched["max_students"] == 2

    def test_null_location_is_allowed(self, client, course_session):
        response = client.patch(f"/api/v1/course-sessions/{course_session.id}", json={"location": None})
        assert response.status_code == 200
        assert response.json()["location"] is None
