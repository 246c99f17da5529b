from material_supermarket.app import ensure_owner
from material_supermarket.models import db
from material_supermarket.models.user import User
from material_supermarket.routes.auth_routes import validate_registration


def test_owner_is_created_on_startup(app):
    with app.app_context():
        owner = User.query.filter_by(username=app.config["OWNER_USERNAME"]).one()
        assert owner.role == "owner"
        assert owner.check_password(app.config["OWNER_PASSWORD"])
        assert not owner.check_password("otra")


def test_owner_found_by_username_when_email_changed(app):
    with app.app_context():
        owner = User.query.filter_by(username=app.config["OWNER_USERNAME"]).one()
        owner.email = "jefe@planta.com"
        owner.role = "operator"
        db.session.commit()

        found = ensure_owner(app)

        assert found.email == "jefe@planta.com"
        assert found.role == "owner"
        assert User.query.count() == 1


def test_login_with_wrong_password(client):
    resp = client.post("/auth/login", data={"username": "admin", "password": "mala"}, follow_redirects=True)
    assert "Credenciales inválidas".encode() in resp.data


def test_login_accepts_email(app, client):
    resp = client.post(
        "/auth/login",
        data={"username": app.config["OWNER_EMAIL"], "password": app.config["OWNER_PASSWORD"]},
    )
    assert resp.status_code == 302
    assert "/materials/" in resp.headers["Location"]


def test_validate_registration_rules():
    errores = validate_registration({
        "username": "ab",
        "email": "no-es-correo",
        "password": "123",
        "confirm_password": "321",
    })
    assert set(errores) == {"username", "email", "password", "confirm_password"}

    assert validate_registration({
        "username": "operador",
        "email": "op@planta.com",
        "password": "secreto1",
        "confirm_password": "secreto1",
    }) == {}


def test_register_then_login(app, client):
    resp = client.post(
        "/auth/register",
        data={
            "username": "operador",
            "email": "op@planta.com",
            "password": "secreto1",
            "confirm_password": "secreto1",
        },
    )
    assert resp.status_code == 302

    with app.app_context():
        user = User.query.filter_by(username="operador").one()
        assert user.role == "operator"

    resp = client.post("/auth/login", data={"username": "OPERADOR", "password": "secreto1"})
    assert resp.status_code == 302
    assert "/materials/" in resp.headers["Location"]


def test_register_duplicate_is_rejected(app, client):
    data = {
        "username": app.config["OWNER_USERNAME"],
        "email": "otro@planta.com",
        "password": "secreto1",
        "confirm_password": "secreto1",
    }
    resp = client.post("/auth/register", data=data)
    assert resp.status_code == 400
    assert "ya está registrado".encode() in resp.data


def test_inactive_user_cannot_login(app, client):
    with app.app_context():
        user = User(username="baja", email="baja@planta.com", status="inactive")
        user.set_password("secreto1")
        db.session.add(user)
        db.session.commit()

    resp = client.post("/auth/login", data={"username": "baja", "password": "secreto1"}, follow_redirects=True)
    assert "Usuario inactivo".encode() in resp.data


def test_logout(auth_client):
    resp = auth_client.get("/auth/logout")
    assert resp.status_code == 302
    assert auth_client.get("/materials/").status_code == 302
