from django.contrib.auth.forms import UserChangeForm, UserCreationForm

from .models import User


class UserAdminCreationForm(UserCreationForm):
    """Admin form for new accounts: customers and restaurant admins sign in by email."""

    class Meta:
        model = User
        fields = ("email", "first_name", "last_name", "role", "phone_number", "address")


class UserAdminChangeForm(UserChangeForm):
    class Meta:
        model = User
        fields = "__all__"
