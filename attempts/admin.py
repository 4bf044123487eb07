from django.contrib import admin

from .models import Attempt, Answer


class AnswerInline(admin.TabularInline):
    model = Answer
    extra = 0
    readonly_fields = ('question', 'question_type', 'max_marks', 'answer', 'verdict', 'auto_graded', 'graded_at')


@admin.register(Attempt)
class AttemptAdmin(admin.ModelAdmin):
    list_display = ('paper', 'student', 'attempt_number', 'status', 'obtained_marks', 'percentage', 'is_passed')
    list_filter = ('status', 'paper')
    inlines = [AnswerInline]
