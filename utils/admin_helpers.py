from typing import Optional


class AdminHelperMixin:
    """Show a short explanatory banner on a model's admin pages.

    Set ``admin_helper_message`` on the ModelAdmin; the text is passed to the
    changelist and change form templates as ``admin_helper_message``.
    """

    admin_helper_message: Optional[str] = None

    def _with_helper(self, extra_context):
        extra_context = dict(extra_context or {})
        if self.admin_helper_message:
            extra_context.setdefault("admin_helper_message", self.admin_helper_message)
        return extra_context

    def changelist_view(self, request, extra_context=None):
        return super().changelist_view(request, extra_context=self._with_helper(extra_context))

    def changeform_view(self, request, object_id=None, form_url="", extra_context=None):
        return super().changeform_view(
            request, object_id, form_url, extra_context=self._with_helper(extra_context)
        )
