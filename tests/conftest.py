import pytest

from totp_core.credential import Credential, Label

# RFC 4226 / RFC 6238 test key: ASCII "12345678901234567890"
RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


@pytest.fixture()
def rfc_credential():
    return Credential(
        label=Label(issuer_prefix="RFC", account="tester"),
        secret=RFC_SECRET,
        issuer="RFC",
        digits=8,
        period=30,
    )


@pytest.fixture()
def app():
    from totp_backend.app import app as flask_app

    flask_app.config.update(TESTING=True)
    yield flask_app


@pytest.fixture()
def client(app):
    return app.test_client()
