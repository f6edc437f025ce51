import logging
from django.utils import timezone

from .models import Promotion

logger = logging.getLogger(__name__)


class PromotionDirectory:
    """Lookup of the promotions that currently apply at a restaurant."""

    @staticmethod
    def get_effective_promotions(restaurant_id, now=None) -> list:
        """
        Effective promotions for a restaurant, newest first.

        The ordering matters: PromotionResolver picks the first applicable one.
        """
        now = now or timezone.now()
        promotions = list(
            Promotion.objects.effective(now)
            .filter(restaurant_id=restaurant_id)
            .prefetch_related("applicable_items")
            .order_by("-created_at")
        )
        logger.debug(f"{len(promotions)} effective promotion(s) for restaurant {restaurant_id}")
        return promotions
