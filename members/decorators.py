from functools import wraps

from django.shortcuts import redirect, render


def staff_required(view_func):
    """Only logged-in unit administrators (staff or superusers) may continue."""

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        user = request.user

        if not user.is_authenticated:
            return redirect("login")

        if not (user.is_staff or user.is_superuser):
            return render(request, "403.html", status=403)

        return view_func(request, *args, **kwargs)

    return wrapper
