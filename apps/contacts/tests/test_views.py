import pytest

from apps.contacts.models import Contact

CONTACTS_URL = "/api/contacts"


@pytest.fixture
def contact_payload():
    return {
        "name": "  Asha  ",
        "email": "Asha@Example.com",
        "reason": "Support",
        "message": "I cannot access my course dashboard.",
        "consent": True,
    }


@pytest.mark.django_db
def test_submit_contact(api_client, contact_payload):
    response = api_client.post(CONTACTS_URL, contact_payload, format="json", HTTP_USER_AGENT="pytest")

    assert response.status_code == 201
    contact = Contact.objects.get(pk=response.json()["id"])
    assert contact.name == "Asha"
    assert contact.email == "asha@example.com"
    assert contact.reason == Contact.Reason.SUPPORT
    assert contact.status == Contact.Status.NEW
    assert contact.meta["userAgent"] == "pytest"


@pytest.mark.django_db
def test_honeypot_is_silently_accepted(api_client, contact_payload):
    response = api_client.post(CONTACTS_URL, {**contact_payload, "website": "http://spam.example"}, format="json")

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert not Contact.objects.exists()


@pytest.mark.django_db
@pytest.mark.parametrize(
    "override, message",
    [
        ({"name": ""}, "Name, email and message are required."),
        ({"consent": False}, "Please accept the privacy consent to submit the form."),
        ({"email": "not-an-email"}, "Please provide a valid email."),
        ({"message": "too short"}, "Message is too short."),
    ],
)
def test_submit_validation(api_client, contact_payload, override, message):
    response = api_client.post(CONTACTS_URL, {**contact_payload, **override}, format="json")

    assert response.status_code == 400
    assert response.json() == {"error": message}


@pytest.mark.django_db
def test_submit_truncates_long_values_and_unknown_reason(api_client, contact_payload):
    payload = {**contact_payload, "name": "n" * 300, "message": "m" * 5000, "reason": "spam"}

    response = api_client.post(CONTACTS_URL, payload, format="json")

    assert response.status_code == 201
    contact = Contact.objects.get()
    assert len(contact.name) == 120
    assert len(contact.message) == 2000
    assert contact.reason == Contact.Reason.OTHER


@pytest.fixture
def contacts():
    return [
        Contact.objects.create(name="Asha", email="asha@example.com", message="Need help with payments"),
        Contact.objects.create(
            name="Ravi", email="ravi@example.com", message="Partnership idea", status=Contact.Status.ARCHIVED
        ),
    ]


@pytest.mark.django_db
def test_admin_list_filters(admin_client, contacts):
    everything = admin_client.get("/api/admin/contacts").json()["items"]
    archived = admin_client.get("/api/admin/contacts", {"status": "archived"}).json()["items"]
    searched = admin_client.get("/api/admin/contacts", {"q": "payments"}).json()["items"]

    assert [c["name"] for c in everything] == ["Ravi", "Asha"]
    assert [c["name"] for c in archived] == ["Ravi"]
    assert [c["name"] for c in searched] == ["Asha"]


@pytest.mark.django_db
def test_admin_update_status(admin_client, contacts):
    url = f"/api/admin/contacts/{contacts[0].pk}"

    assert admin_client.patch(url, {"status": "read"}, format="json").json()["contact"]["status"] == "read"

    invalid = admin_client.patch(url, {"status": "done"}, format="json")
    assert invalid.status_code == 400
    assert invalid.json() == {"error": "Invalid status"}


@pytest.mark.django_db
def test_admin_delete(admin_client, contacts):
    url = f"/api/admin/contacts/{contacts[0].pk}"

    assert admin_client.delete(url).status_code == 204
    assert admin_client.delete(url).status_code == 404


@pytest.mark.django_db
def test_student_cannot_list(student_client, contacts):
    assert student_client.get("/api/admin/contacts").status_code == 403
