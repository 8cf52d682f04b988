"""Admin FastAPI application."""

from fastapi import FastAPI
from sqladmin import Admin

from cineroom.admin.auth import AdminAuth
from cineroom.admin.views import FreeSlotsView, RoomAdmin, RoomBookingAdmin
from cineroom.config import settings
from cineroom.database import engine


def create_admin_app() -> FastAPI:
    app = FastAPI(title="CineRoom Admin")
    auth = AdminAuth(secret_key=settings.admin_secret_key)
    admin = Admin(app, engine, authentication_backend=auth, title="CineRoom Admin")
    for view in [RoomAdmin, RoomBookingAdmin, FreeSlotsView]:
        admin.add_view(view)
    return app


admin_app = create_admin_app()
