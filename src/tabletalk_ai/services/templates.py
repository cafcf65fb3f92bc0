"""Deterministic, network-free fallback copy for the AI features."""

from tabletalk_ai.entities import PlanDraft, QueryKind, RestaurantSnapshot, UserPreferences

GENERIC_WHY_THIS_TABLE = "Based on your preferences"
DEFAULT_PLAN_COPY = "Let's make a plan!"
AMBIENCE_PRIORITY = ("lively", "casual", "romantic")


class TemplateFallbackGenerator:
    """Builds fallback text for each cacheable query kind.

    Every method is pure: the same inputs always produce the same string,
    and nothing here touches the network or storage.
    """

    def generate(
        self,
        kind: QueryKind,
        restaurant: RestaurantSnapshot,
        preferences: UserPreferences | None = None,
        plan: PlanDraft | None = None,
    ) -> str:
        """Return the fallback text for ``kind``."""
        kind = QueryKind(kind)
        if kind is QueryKind.WHY_THIS_TABLE:
            return self.why_this_table(restaurant, preferences)
        if kind is QueryKind.TABLE_STARTER_INVITE:
            return self.table_starter_invite(restaurant)
        if kind is QueryKind.PLAN_COPILOT_SUGGEST_TIMES:
            return "How about this week or weekend?"
        if kind is QueryKind.PLAN_COPILOT_DRAFT_INVITE:
            return f"Let's grab {restaurant.name} - who's in?"
        if kind is QueryKind.PLAN_COPILOT_MAKE_GROUP_FRIENDLY:
            return self.group_friendly(plan)
        return DEFAULT_PLAN_COPY

    def why_this_table(
        self,
        restaurant: RestaurantSnapshot,
        preferences: UserPreferences | None,
    ) -> str:
        """Explain why a restaurant was queued, from at most two matched reasons.

        Reasons are checked in order: cuisine, ambience, budget. A restaurant
        without categories deliberately matches no cuisine, instead of
        matching every picked one.
        """
        if preferences is None:
            return GENERIC_WHY_THIS_TABLE

        reasons: list[str] = []

        cuisine = self._matched_cuisine(restaurant, preferences)
        if cuisine:
            reasons.append(f"you picked {cuisine}")

        for flag in AMBIENCE_PRIORITY:
            if restaurant.ambience.get(flag):
                reasons.append(flag)
                break

        if restaurant.price and restaurant.price in preferences.budget:
            reasons.append(f"${len(restaurant.price)}")

        if reasons:
            return f"Queued because {' + '.join(reasons[:2])}"
        return GENERIC_WHY_THIS_TABLE

    def table_starter_invite(self, restaurant: RestaurantSnapshot) -> str:
        return f"Want to try {restaurant.name}? Let's make it happen!"

    def group_friendly(self, plan: PlanDraft | None) -> str:
        if plan is not None and plan.vibe == "quickBite":
            return "Perfect for groups - quick and casual"
        return "Great for groups - spacious and welcoming"

    @staticmethod
    def _matched_cuisine(
        restaurant: RestaurantSnapshot,
        preferences: UserPreferences,
    ) -> str | None:
        # Substring match in either direction, against the primary category only
        primary = (restaurant.primary_cuisine or "").lower()
        if not primary:
            return None
        for cuisine in preferences.cuisines:
            picked = cuisine.lower()
            if picked and (picked in primary or primary in picked):
                return cuisine
        return None
