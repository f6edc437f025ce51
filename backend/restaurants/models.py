import uuid
from django.conf import settings
from django.db import models


class Restaurant(models.Model):
    """
    A restaurant that owns a catalog, promotions and orders.

    Staff membership is the authorization boundary for order status changes:
    only restaurant admins listed in `staff` may move an order through its
    lifecycle.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    slug = models.SlugField(unique=True)
    description = models.TextField(blank=True)
    address = models.CharField(max_length=255, blank=True)
    phone = models.CharField(max_length=50, blank=True)
    email = models.EmailField(blank=True)

    staff = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name="staffed_restaurants",
        help_text="Admins allowed to manage this restaurant's orders.",
    )

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name

    def has_staff_member(self, user) -> bool:
        """True if `user` may mutate this restaurant's orders."""
        if user is None or not getattr(user, "is_authenticated", False):
            return False
        if user.is_superuser:
            return True
        if getattr(user, "role", None) != "ADMIN":
            return False
        return self.staff.filter(pk=user.pk).exists()
