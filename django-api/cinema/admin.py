from django.contrib import admin

from cinema.models import Booking, Hall, Session


class BookingInline(admin.TabularInline):
    model = Booking
    extra = 0
    readonly_fields = ["full_name", "tickets", "created_at"]
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Hall)
class HallAdmin(admin.ModelAdmin):
    list_display = ["name", "capacity", "created_at"]
    search_fields = ["name"]

    def get_readonly_fields(self, request, obj=None):
        return ["capacity"] if obj else []


@admin.register(Session)
class SessionAdmin(admin.ModelAdmin):
    list_display = ["movie_title", "hall", "starts_at", "duration_minutes"]
    list_filter = ["hall"]
    search_fields = ["movie_title"]
    inlines = [BookingInline]

    def get_readonly_fields(self, request, obj=None):
        # Hall changes go through the API so booked tickets are re-checked.
        return ["hall"] if obj else []


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ["full_name", "session", "tickets", "created_at"]
    list_filter = ["session__hall"]
    search_fields = ["full_name"]
    readonly_fields = ["session", "tickets"]

    def has_add_permission(self, request):
        return False
