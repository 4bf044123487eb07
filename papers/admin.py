from django.contrib import admin

# Papers are authored here; the API only exposes the catalog read-side.
from .models import Paper, Question


class QuestionInline(admin.StackedInline):
    model = Question
    extra = 1


@admin.register(Paper)
class PaperAdmin(admin.ModelAdmin):
    list_display = ('title', 'subject', 'created_by', 'start_time', 'end_time', 'max_attempts', 'total_marks')
    list_filter = ('is_active', 'subject')
    search_fields = ('title', 'subject')
    filter_horizontal = ('assigned_to',)
    inlines = [QuestionInline]
    actions = ['recalculate_total_marks']

    @admin.action(description="Recalculate total marks from questions")
    def recalculate_total_marks(self, request, queryset):
        for paper in queryset:
            paper.recalculate_total_marks()


admin.site.register(Question)
