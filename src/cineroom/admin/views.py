"""SQLAdmin model and tool views."""

from datetime import date

from sqladmin import BaseView, ModelView, expose
from starlette.requests import Request
from starlette.responses import HTMLResponse

from cineroom.database import AsyncSessionLocal
from cineroom.domain.room_schedule import FreeSlot
from cineroom.models.booking import RoomBooking
from cineroom.models.room import RoomRecord
from cineroom.repositories.room_repository import RoomRepository
from cineroom.services.room_service import RoomService


class RoomAdmin(ModelView, model=RoomRecord):
    name = "Room"
    column_list = [
        RoomRecord.identifier,
        RoomRecord.status,
        RoomRecord.screen_size,
        RoomRecord.screen_type,
        RoomRecord.version,
        RoomRecord.updated_at,
    ]
    column_sortable_list = [RoomRecord.identifier, RoomRecord.status]
    # Read-only: rooms change through the API
    can_create = False
    can_edit = False


class RoomBookingAdmin(ModelView, model=RoomBooking):
    name = "Booking"
    column_list = [
        RoomBooking.room_uid,
        RoomBooking.type,
        RoomBooking.start_time,
        RoomBooking.end_time,
        RoomBooking.screening_uid,
    ]
    column_searchable_list = [RoomBooking.screening_uid]
    column_sortable_list = [RoomBooking.start_time, RoomBooking.type]
    can_create = False
    can_edit = False
    can_delete = False


_FREE_SLOTS_TEMPLATE = """\
{% extends "sqladmin/layout.html" %}
{% block content %}
<div class="container-fluid p-4">
  <h2>Free Slots</h2>
  <form method="post" class="mt-3 d-flex align-items-center gap-2 flex-wrap">
    <input type="number" name="identifier" value="{{ identifier or '' }}" min="1" max="100" class="form-control" style="width:90px" title="Room">
    <input type="date" name="day" value="{{ day }}" class="form-control" style="width:auto">
    <input type="number" name="min_minutes" value="{{ min_minutes }}" min="1" class="form-control" style="width:90px" title="Min minutes">
    <button name="action" value="free_slots" class="btn btn-primary">Find</button>
  </form>

  {% if errors %}
  <div class="alert alert-danger mt-3">{{ errors | join(", ") }}</div>
  {% endif %}

  {% if slots is not none %}
  <table class="table table-sm table-bordered mt-4" style="max-width:520px">
    <thead><tr><th>From</th><th>To</th><th class="text-end">Minutes</th></tr></thead>
    <tbody>
    {% for s in slots %}
      <tr>
        <td>{{ s.start_time.strftime("%H:%M") }}</td>
        <td>{{ s.end_time.strftime("%H:%M") }}</td>
        <td class="text-end">{{ s.duration_in_minutes | int }}</td>
      </tr>
    {% else %}
      <tr><td colspan="3">No free slots.</td></tr>
    {% endfor %}
    </tbody>
  </table>
  {% endif %}
</div>
{% endblock %}
"""


class FreeSlotsView(BaseView):
    name = "Free Slots"
    icon = "fa-calendar"

    @expose("/free-slots", methods=["GET", "POST"])
    async def free_slots(self, request: Request) -> HTMLResponse:
        identifier: int | None = None
        day = date.today()
        min_minutes = 30
        slots: list[FreeSlot] | None = None
        errors: list[str] = []

        if request.method == "POST":
            form = await request.form()
            identifier = int(form.get("identifier") or 0) or None
            day = date.fromisoformat(str(form.get("day") or date.today()))
            min_minutes = int(form.get("min_minutes") or 30)

            async with AsyncSessionLocal() as db:
                service = RoomService(RoomRepository(db))
                result = await service.get_free_slots(identifier, day, min_minutes)
            if result.is_valid:
                slots = result.value
            else:
                errors = [f.message for f in result.failures]

        tmpl = self.templates.env.from_string(_FREE_SLOTS_TEMPLATE)
        content = await tmpl.render_async(
            request=request,
            identifier=identifier,
            day=str(day),
            min_minutes=min_minutes,
            slots=slots,
            errors=errors,
        )
        return HTMLResponse(content)
