def test_create_patient_normalizes_contact_fields(client):
    response = client.post(
        "/clientes",
        json={
            "nome": "  Maria Silva  ",
            "email": "Maria.Silva@Email.COM",
            "telefone": "+55 (11) 98765-4321",
            "sexo": "F",
            "estadoCivil": "MARRIED",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["nome"] == "Maria Silva"
    assert body["email"] == "maria.silva@email.com"
    assert body["telefone"] == "(11) 98765-4321"
    assert body["sexo"] == "F"
    assert body["estadoCivil"] == "MARRIED"
    assert body["dataCadastro"]


def test_create_patient_requires_name_email_and_phone(client):
    base = {"nome": "Maria Silva", "email": "maria@example.com", "telefone": "11987654321"}
    for field in ("nome", "email", "telefone"):
        payload = dict(base)
        payload[field] = "   "
        response = client.post("/clientes", json=payload)
        assert response.status_code == 422, field

    missing = dict(base)
    del missing["telefone"]
    assert client.post("/clientes", json=missing).status_code == 422


def test_rejects_bad_email_and_phone(client):
    bad_email = {"nome": "Ana", "email": "not-an-email", "telefone": "11987654321"}
    bad_phone = {"nome": "Ana", "email": "ana@example.com", "telefone": "123"}

    assert client.post("/clientes", json=bad_email).status_code == 422
    assert client.post("/clientes", json=bad_phone).status_code == 422


def test_list_is_ordered_by_name(client, create_patient):
    create_patient("Roberto Costa")
    create_patient("Ana Paula Ferreira")

    names = [p["nome"] for p in client.get("/clientes").json()]

    assert names == ["Ana Paula Ferreira", "Roberto Costa"]


def test_search_matches_name_fragment_case_insensitively(client, create_patient):
    create_patient("Maria Silva Santos")
    create_patient("João Carlos Oliveira", email="joao@example.com")

    results = client.get("/clientes/buscar", params={"nome": "silva"}).json()

    assert [p["nome"] for p in results] == ["Maria Silva Santos"]
    assert len(client.get("/clientes/buscar", params={"nome": ""}).json()) == 2


def test_get_unknown_patient_is_404(client):
    assert client.get("/clientes/999").status_code == 404


def test_patch_changes_only_given_fields(client, create_patient):
    patient = create_patient("Maria Silva", cidade="São Paulo")

    response = client.patch(f"/clientes/{patient['id']}", json={"profissao": "Nurse"})

    assert response.status_code == 200
    body = response.json()
    assert body["profissao"] == "Nurse"
    assert body["cidade"] == "São Paulo"
    assert body["dataCadastro"] == patient["dataCadastro"]


def test_patch_cannot_clear_required_field(client, create_patient):
    patient = create_patient()

    response = client.patch(f"/clientes/{patient['id']}", json={"nome": None})

    assert response.status_code == 422


def test_put_replaces_optional_fields(client, create_patient):
    patient = create_patient("Maria Silva", cidade="São Paulo", bairro="Centro")

    response = client.put(
        f"/clientes/{patient['id']}",
        json={"nome": "Maria S. Santos", "email": "maria@example.com", "telefone": "1134567890"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["nome"] == "Maria S. Santos"
    assert body["telefone"] == "(11) 3456-7890"
    assert body["cidade"] is None
    assert body["bairro"] is None
    assert body["id"] == patient["id"]


def test_delete_cascades_to_sessions_and_assessments(client, create_patient, create_session):
    patient = create_patient()
    session = create_session(patient["id"])
    assessment = client.post("/avaliacoes", json={"clienteId": patient["id"]}).json()

    response = client.delete(f"/clientes/{patient['id']}")

    assert response.status_code == 200
    assert client.get(f"/clientes/{patient['id']}").status_code == 404
    assert client.get(f"/sessoes/{session['id']}").status_code == 404
    assert client.get(f"/avaliacoes/{assessment['id']}").status_code == 404


def test_requires_authentication(anon_client):
    response = anon_client.get("/clientes")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
