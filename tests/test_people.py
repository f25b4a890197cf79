from conftest import WEEK, auth

from chore_calendar.controllers.person import PALETTE
from chore_calendar.models import Assignment


class TestAddPerson:
    def test_fields_round_trip(self, client, family_id, admin_headers, person):
        people = client.get(f"/people/family/{family_id}", headers=admin_headers).json()

        assert len(people) == 1
        stored = people[0]
        assert stored["id"] == person["id"]
        assert (stored["name"], stored["email"], stored["phone"]) == ("Jo", "jo@x.com", "555-0100")
        assert stored["family_id"] == family_id
        assert stored["color"] == PALETTE[0]

    def test_colors_go_round_the_palette(self, client, family_id, admin_headers):
        colors = []
        for i in range(len(PALETTE) + 1):
            response = client.post(
                f"/people/family/{family_id}",
                json={"name": f"Kid {i}", "email": f"kid{i}@x.com"},
                headers=admin_headers,
            )
            colors.append(response.json()["color"])

        assert colors == list(PALETTE) + [PALETTE[0]]

    def test_values_are_trimmed(self, client, family_id, admin_headers):
        response = client.post(
            f"/people/family/{family_id}",
            json={"name": "  Sam ", "email": " sam@x.com ", "phone": "   "},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["name"] == "Sam"
        assert response.json()["email"] == "sam@x.com"
        assert response.json()["phone"] is None

    def test_missing_name_or_email(self, client, family_id, admin_headers):
        for payload in ({"email": "a@x.com"}, {"name": "A"}, {"name": "", "email": "a@x.com"}):
            response = client.post(f"/people/family/{family_id}", json=payload, headers=admin_headers)
            assert response.status_code == 400

    def test_duplicate_email(self, client, family_id, admin_headers, person):
        response = client.post(
            f"/people/family/{family_id}", json={"name": "Other Jo", "email": "jo@x.com"}, headers=admin_headers
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Person with this email already exists"

    def test_same_email_in_another_family_is_fine(self, client, person, other_family):
        response = client.post(
            f"/people/family/{other_family['family']['id']}",
            json={"name": "Jo", "email": "jo@x.com"},
            headers=auth(other_family["token"]),
        )

        assert response.status_code == 201

    def test_member_cannot_add(self, client, family_id, member_headers):
        response = client.post(
            f"/people/family/{family_id}", json={"name": "X", "email": "x@x.com"}, headers=member_headers
        )

        assert response.status_code == 403

    def test_cannot_add_to_another_family(self, client, family_id, other_family):
        response = client.post(
            f"/people/family/{family_id}", json={"name": "X", "email": "x@x.com"}, headers=auth(other_family["token"])
        )

        assert response.status_code == 403


class TestUpdatePerson:
    def test_update_fields_and_color(self, client, admin_headers, person):
        response = client.put(
            f"/people/{person['id']}",
            json={"name": "Joanna", "email": "joanna@x.com", "phone": None, "color": "#0ea5e9"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Joanna"
        assert body["email"] == "joanna@x.com"
        assert body["phone"] is None
        assert body["color"] == "#0ea5e9"

    def test_color_is_kept_when_omitted(self, client, admin_headers, person):
        response = client.put(
            f"/people/{person['id']}", json={"name": "Jo", "email": "jo@x.com"}, headers=admin_headers
        )

        assert response.json()["color"] == person["color"]

    def test_bad_color(self, client, admin_headers, person):
        response = client.put(
            f"/people/{person['id']}",
            json={"name": "Jo", "email": "jo@x.com", "color": "blue"},
            headers=admin_headers,
        )

        assert response.status_code == 400

    def test_email_taken_by_someone_else(self, client, family_id, admin_headers, person):
        client.post(f"/people/family/{family_id}", json={"name": "Sam", "email": "sam@x.com"}, headers=admin_headers)

        response = client.put(
            f"/people/{person['id']}", json={"name": "Jo", "email": "sam@x.com"}, headers=admin_headers
        )

        assert response.status_code == 409

    def test_unknown_person(self, client, admin_headers):
        response = client.put("/people/nobody", json={"name": "A", "email": "a@x.com"}, headers=admin_headers)

        assert response.status_code == 404

    def test_member_cannot_update(self, client, person, member_headers):
        response = client.put(
            f"/people/{person['id']}", json={"name": "Me", "email": "jo@x.com"}, headers=member_headers
        )

        assert response.status_code == 403

    def test_other_family_admin_cannot_update(self, client, person, other_family):
        response = client.put(
            f"/people/{person['id']}", json={"name": "X", "email": "x@x.com"}, headers=auth(other_family["token"])
        )

        assert response.status_code == 403


class TestDeletePerson:
    def test_delete_removes_assignments(self, client, db_session, family_id, admin_headers, person, chores_by_label):
        client.post(
            f"/assignments/family/{family_id}/week",
            json={"personId": person["id"], "choreId": chores_by_label["Dishes"]["id"], "weekStartISO": WEEK},
            headers=admin_headers,
        )
        assert db_session.query(Assignment).count() == 7

        response = client.delete(f"/people/{person['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert db_session.query(Assignment).count() == 0
        assert client.get(f"/people/family/{family_id}", headers=admin_headers).json() == []

    def test_delete_unknown(self, client, admin_headers):
        assert client.delete("/people/nobody", headers=admin_headers).status_code == 404
