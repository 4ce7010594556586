import os
from unittest.mock import MagicMock

import pytest
from chalice.test import Client

from app import app
from chalicelib.context import ServiceContext, set_context
from tests.utils.memory_store import MemoryStore
from tests.utils.request_utils import TOKEN_SECRET

PROJECT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

ADMIN_EMAIL = 'admin@restaurant.com'
USER_EMAIL = 'user@restaurant.com'
OTHER_EMAIL = 'other@restaurant.com'


@pytest.fixture
def store() -> MemoryStore:
    store_ = MemoryStore()
    store_.users.insert_one({'id': 'admin-id', 'email': ADMIN_EMAIL, 'name': 'Admin', 'admin': True})
    store_.users.insert_one({'id': 'user-id', 'email': USER_EMAIL, 'name': 'User'})
    return store_


@pytest.fixture
def payment_gateway() -> MagicMock:
    gateway = MagicMock()
    gateway.create_payment_intent.return_value = 'pi_test_secret_123'
    return gateway


@pytest.fixture
def service_context(store, payment_gateway):
    context = ServiceContext(store=store, payment_gateway=payment_gateway, token_secret=TOKEN_SECRET)
    set_context(context)
    yield context
    set_context(None)


@pytest.fixture
def client(service_context):
    with Client(app, stage_name='dev', project_dir=PROJECT_DIR) as chalice_client:
        yield chalice_client
