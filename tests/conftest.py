import pytest
from fastapi.testclient import TestClient

from maktab.config.school_config import SchoolConfig
from maktab.database import init_db, make_session_factory
from maktab.main import create_app
from maktab.storage import DocumentStore, LocalStore
from maktab.students.schemas import StudentCreate
from maktab.students.service import StudentService
from maktab.uploads.service import UploadService

ADMIN_CONTACT = "9332039381"


@pytest.fixture()
def local_store(tmp_path):
    return LocalStore(str(tmp_path / "store"), app_id="test", latency_ms=0)


@pytest.fixture()
def document_store():
    session_factory = make_session_factory("sqlite:///:memory:")
    init_db(session_factory)
    return DocumentStore(session_factory)


@pytest.fixture(params=["local", "document"])
def storage(request):
    """Every aggregator test runs against both backends."""
    if request.param == "local":
        return request.getfixturevalue("local_store")
    return request.getfixturevalue("document_store")


@pytest.fixture()
def school_config():
    return SchoolConfig(admin_contacts=[ADMIN_CONTACT, "9832414854"])


def make_student(contact, name="Ayesha Khatun", class_name="Class III", roll_number="1", subjects=None):
    return StudentCreate(
        contact=contact,
        name=name,
        father_name="Abdul Karim",
        class_name=class_name,
        roll_number=roll_number,
        subjects=subjects,
    )


@pytest.fixture()
def students(storage):
    """Three registered students of Class III."""
    service = StudentService(storage)
    return [
        service.add_student(make_student("9000000001", name="Ayesha", roll_number="1")),
        service.add_student(make_student("9000000002", name="Bilal", roll_number="2")),
        service.add_student(make_student("9000000003", name="Chand", roll_number="10")),
    ]


@pytest.fixture()
def app(local_store, school_config):
    return create_app(
        storage=local_store,
        school_config=school_config,
        upload_service=UploadService(cloud_name="", api_key="", api_secret=""),
    )


@pytest.fixture()
def client(app):
    """Test client logged in as the admin teacher."""
    with TestClient(app, headers={"Authorization": f"Bearer {ADMIN_CONTACT}"}) as client_instance:
        yield client_instance


@pytest.fixture()
def anon_client(app):
    with TestClient(app) as client_instance:
        yield client_instance
