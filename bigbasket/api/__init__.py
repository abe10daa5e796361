# bigbasket/api/__init__.py
from fastapi import FastAPI
from bigbasket.api.routers import admin, customer
from bigbasket.api.routers.health import router as health_router

def create_app():
    app = FastAPI(title="BigBasket", version="1.0.0")
    app.include_router(health_router)
    app.include_router(admin.router)
    app.include_router(customer.router)
    return app
