"""
Test configuration for pytest
"""

import pytest
from flask_jwt_extended import create_access_token

from sitebuilder import create_app
from sitebuilder.extensions import db as _db
from sitebuilder.models import AuditLog, Holding
from sitebuilder.application.landing.get_or_create_landing import get_or_create_landing


@pytest.fixture(scope="function")
def app():
    """Application on a fresh in-memory SQLite schema for each test"""
    app = create_app("testing")

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_holding(app):
    """Factory for active holdings"""
    def make(name, slug):
        holding = Holding(name=name, slug=slug, is_active=True)
        _db.session.add(holding)
        _db.session.commit()
        return holding
    return make


@pytest.fixture
def holding(make_holding):
    return make_holding("Acme Holding", "acme")


@pytest.fixture
def other_holding(make_holding):
    return make_holding("Beta Group", "beta")


@pytest.fixture
def landing(holding):
    return get_or_create_landing(holding_id=holding.id)


@pytest.fixture
def other_landing(other_holding):
    return get_or_create_landing(holding_id=other_holding.id)


@pytest.fixture
def auth_headers(holding):
    """Bearer token and holding header for an editor of ``holding``"""
    token = create_access_token(
        identity="editor-1",
        additional_claims={"holding_id": holding.id},
    )
    return {
        "Authorization": f"Bearer {token}",
        "X-Holding-ID": holding.id,
    }


@pytest.fixture
def audit_count(app):
    """Count audit rows for an action"""
    def count(action):
        return _db.session.execute(
            _db.select(_db.func.count())
            .select_from(AuditLog)
            .where(AuditLog.action == action)
        ).scalar()
    return count
