from django.contrib import admin

from attendance.models import AttendanceEvent, Certificate, Ticket, TicketType


class TicketInline(admin.TabularInline):
    model = Ticket
    extra = 0
    fields = ["name", "email", "unique_code"]


class AttendanceEventInline(admin.TabularInline):
    model = AttendanceEvent
    extra = 1
    fields = ["kind", "timestamp"]
    ordering = ["timestamp"]


@admin.register(TicketType)
class TicketTypeAdmin(admin.ModelAdmin):
    list_display = ["name", "minimum_hours_for_certificate", "created_at"]
    search_fields = ["name"]
    inlines = [TicketInline]


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ["name", "email", "unique_code", "ticket_type", "created_at"]
    list_filter = ["ticket_type"]
    search_fields = ["name", "email", "unique_code"]
    inlines = [AttendanceEventInline]


@admin.register(AttendanceEvent)
class AttendanceEventAdmin(admin.ModelAdmin):
    list_display = ["ticket", "kind", "timestamp", "recorded_at"]
    list_filter = ["kind", "ticket__ticket_type"]
    date_hierarchy = "timestamp"


@admin.register(Certificate)
class CertificateAdmin(admin.ModelAdmin):
    list_display = ["ticket", "participation_hours", "generated_at", "downloaded"]
    list_filter = ["downloaded"]
    readonly_fields = ["ticket", "participation_hours", "generated_at"]
