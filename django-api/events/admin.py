from django.contrib import admin

from events.models import Event, Registration


class RegistrationInline(admin.TabularInline):
    model = Registration
    extra = 0
    can_delete = False
    readonly_fields = ["phone_number", "name", "flat_no", "wing", "selection", "attachment_ref", "registered_at"]

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["name", "start_time", "end_time", "selection_kind", "created_at"]
    search_fields = ["name"]
    readonly_fields = [
        "id",
        "start_time",
        "end_time",
        "selection_kind",
        "selection_options",
        "qr_link_target",
        "created_at",
    ]
    inlines = [RegistrationInline]

    def has_add_permission(self, request):
        # Events are created through the API so the window and schema get validated.
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    """Registrations are immutable; the admin only lists them."""

    list_display = ["name", "phone_number", "event", "flat_no", "wing", "registered_at"]
    list_filter = ["event"]
    search_fields = ["name", "phone_number"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
