import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api import customer_router, register_error_handlers, shop_router
from protean.integrations.fastapi import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(customer_router)
    app.include_router(shop_router)
    register_exception_handlers(app)
    register_error_handlers(app)
    return TestClient(app)
