from studio.db import models
from studio.seed import ADMIN_EMAIL, USER_EMAIL, USER_PASSWORD, seed_database


def _counts(session):
    return [
        session.query(model).count()
        for model in (models.User, models.Client, models.Project, models.Asset, models.Variant)
    ]


def test_seed_creates_demo_data(db_session) -> None:
    assert seed_database(db_session) is True
    db_session.commit()

    assert _counts(db_session) == [2, 3, 3, 3, 8]
    admin = db_session.query(models.User).filter(models.User.email == ADMIN_EMAIL).one()
    assert admin.role == models.Role.ADMIN

    variants = db_session.query(models.Variant).all()
    assert {variant.status for variant in variants} == {models.VariantStatus.READY}
    assert all(variant.bindings["headline"] in variant.render_svg for variant in variants)
    assert sum(variant.source == models.VariantSource.USER for variant in variants) == 3


def test_seed_is_idempotent_unless_reset(db_session) -> None:
    seed_database(db_session)
    db_session.commit()

    assert seed_database(db_session) is False
    assert seed_database(db_session, reset=True) is True
    db_session.commit()
    assert _counts(db_session) == [2, 3, 3, 3, 8]


def test_seeded_user_can_log_in_and_sees_own_records(db_session, make_client) -> None:
    seed_database(db_session)
    db_session.commit()

    client = make_client()
    response = client.post("/api/auth/login", json={"email": USER_EMAIL, "password": USER_PASSWORD})
    assert response.status_code == 200
    assert response.json()["data"]["user"]["role"] == "USER"

    clients = client.get("/api/clients").json()["data"]
    assert {record["name"] for record in clients} == {"Acme Corporation", "Brand Studios"}
