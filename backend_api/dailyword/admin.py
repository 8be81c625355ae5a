from django.contrib import admin

from .models import Word, DailyProgress


@admin.register(Word)
class WordAdmin(admin.ModelAdmin):
    list_display = ("text", "length", "is_active", "created_at")
    list_filter = ("is_active", "length")
    search_fields = ("text",)
    ordering = ("length", "text")


@admin.register(DailyProgress)
class DailyProgressAdmin(admin.ModelAdmin):
    list_display = ("slot", "state", "date", "updated_at")
    search_fields = ("slot", "state")
    readonly_fields = ("created_at", "updated_at")
