import pytest
from sqlalchemy import create_engine, inspect, select
from sqlalchemy.orm import Session

from mrpfleet.master import (
    KTP,
    MCU,
    NPWP,
    Department,
    DepartmentForm,
    Form,
    Jabatan,
    Position,
    Role,
    UserRole,
)
from mrpfleet.models import create_schema


@pytest.fixture
def engine():
    engine = create_engine("sqlite://")
    create_schema(engine)
    return engine


@pytest.fixture
def session(engine):
    with Session(engine) as db:
        yield db


def test_form_tree_round_trip(session):
    parent = Form(form_name="Fuel", sequence=1)
    parent.children = [
        Form(form_name="Fuel In", path="/fuel/in", sequence=1, read_flag=True),
        Form(form_name="Fuel Ratio", path="/fuel/ratio", sequence=2),
    ]
    session.add(parent)
    session.commit()
    session.expire_all()

    root = session.scalars(select(Form).where(Form.parent_id.is_(None))).one()
    assert root.path is None
    assert sorted(child.form_name for child in root.children) == ["Fuel In", "Fuel Ratio"]
    assert all(child.parent_id == root.id for child in root.children)


def test_user_role_links_role_and_department(session):
    link = UserRole(user_id=5, role=Role(name="admin"), department=Department(department_name="Plant"))
    session.add(link)
    session.commit()
    session.expire_all()

    loaded = session.scalars(select(UserRole).where(UserRole.user_id == 5)).one()
    assert loaded.role.name == "admin"
    assert loaded.department.department_name == "Plant"


def test_department_form_relationships(session):
    form = DepartmentForm(department=Department(department_name="HR"), role=Role(name="viewer"))
    session.add(form)
    session.commit()
    assert form.department_id == form.department.id
    assert form.role_id == form.role.id


def test_jabatan_position(session):
    jabatan = Jabatan(employee_id=3, date_move="2024-01-01", position=Position(position_name="Operator"))
    session.add(jabatan)
    session.commit()
    session.expire_all()
    loaded = session.get(Jabatan, jabatan.id)
    assert loaded.position.position_name == "Operator"
    assert loaded.date_move == "2024-01-01"


def test_ktp_short_column_names(engine, session):
    columns = {column["name"] for column in inspect(engine).get_columns("ktps")}
    assert {"kel", "kec", "prov", "rt", "rw", "ring_ktp"} <= columns

    session.add(KTP(nama_sesuai_ktp="Ani", kelurahan="Menteng", provinsi="Jawa"))
    session.commit()
    session.expire_all()
    loaded = session.scalars(select(KTP)).one()
    assert (loaded.kelurahan, loaded.provinsi, loaded.kecamatan) == ("Menteng", "Jawa", "")


def test_npwp_number_is_optional(session):
    session.add(NPWP(status_pajak="TK/0"))
    session.commit()
    loaded = session.scalars(select(NPWP)).one()
    assert loaded.nomor_npwp is None
    assert loaded.status_pajak == "TK/0"


def test_mcu_round_trip(session):
    session.add(MCU(employee_id=1, date_mcu="2024-05-01", hasil_mcu="Fit", mcu="Berkala"))
    session.commit()
    session.expire_all()
    loaded = session.scalars(select(MCU)).one()
    assert loaded.mcu == "Berkala"
    assert loaded.date_end_mcu == ""
    assert loaded.deleted_at is None