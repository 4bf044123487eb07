from django.contrib import admin

from .models import Result


@admin.register(Result)
class ResultAdmin(admin.ModelAdmin):
    list_display = ('attempt', 'student', 'paper', 'obtained_marks', 'percentage', 'is_passed', 'is_published')
    list_filter = ('is_published', 'is_passed', 'paper')
    readonly_fields = ('attempt', 'student', 'paper', 'graded_by', 'graded_at')
