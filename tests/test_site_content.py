def test_team_listing_hides_inactive(client, admin_headers):
    client.post("/api/site-content/team", json={"name": "Asha", "role": "Head Coach", "order": 2}, headers=admin_headers)
    client.post("/api/site-content/team", json={"name": "Ravi", "role": "Trainer", "order": 1}, headers=admin_headers)
    client.post(
        "/api/site-content/team",
        json={"name": "Meera", "role": "Nutritionist", "is_active": False},
        headers=admin_headers,
    )

    public = client.get("/api/site-content/team").json()["data"]
    assert [m["name"] for m in public] == ["Ravi", "Asha"]

    everyone = client.get("/api/site-content/team", params={"all": "true"}).json()["data"]
    assert len(everyone) == 3


def test_testimonial_defaults_and_update(client, admin_headers):
    created = client.post(
        "/api/site-content/testimonials",
        json={"name": "Kiran", "content": "Lost 8kg in three months!"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    testimonial = created.json()["data"]
    assert (testimonial["role"], testimonial["rating"]) == ("Member", 5)

    updated = client.put(
        f"/api/site-content/testimonials/{testimonial['id']}", json={"rating": 4}, headers=admin_headers
    ).json()["data"]
    assert updated["rating"] == 4
    assert updated["content"] == "Lost 8kg in three months!"


def test_rating_out_of_range(client, admin_headers):
    response = client.post(
        "/api/site-content/testimonials",
        json={"name": "Kiran", "content": "Great", "rating": 6},
        headers=admin_headers,
    )
    assert response.status_code == 400


def test_missing_team_member(client, admin_headers):
    response = client.delete("/api/site-content/team/42", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Team member not found"


def test_members_cannot_edit(client, member_headers):
    response = client.post("/api/site-content/testimonials", json={"name": "x", "content": "y"}, headers=member_headers)
    assert response.status_code == 403
