from django.contrib import admin

from ticketing.models import Event, TicketType


class TicketTypeInline(admin.TabularInline):
    model = TicketType
    extra = 1
    fields = [
        "position",
        "name",
        "price",
        "quantity",
        "sold",
        "min_per_order",
        "max_per_order",
        "sales_start_date",
        "sales_end_date",
        "is_active",
    ]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["name", "status", "start_date", "end_date"]
    list_filter = ["status"]
    search_fields = ["name", "location"]
    inlines = [TicketTypeInline]


@admin.register(TicketType)
class TicketTypeAdmin(admin.ModelAdmin):
    list_display = ["name", "event", "price", "quantity", "sold", "is_active"]
    list_filter = ["is_active", "event"]
    list_editable = ["is_active"]
