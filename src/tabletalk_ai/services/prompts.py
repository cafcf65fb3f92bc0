"""Prompt construction for the primary and secondary providers."""

from tabletalk_ai.entities import PlanAction, PlanDraft, RestaurantSnapshot, UserPreferences

ONE_LINE_ASSISTANT = (
    "You write short, upbeat copy for a social dining app. "
    "Answer with a single line of at most 15 words, no quotes, no emoji."
)

_TIME_WINDOW_LABELS = {"tonight": "tonight", "thisWeek": "this week", "weekend": "this weekend"}
_VIBE_LABELS = {"quickBite": "a quick bite", "drinks": "drinks", "dinner": "dinner"}


def build_system_prompt(restaurant: RestaurantSnapshot) -> str:
    """Restaurant-specific system prompt for the chat assistant.

    Attributes that are unknown are left out entirely.
    """
    parts = [
        f"You are a helpful assistant for {restaurant.name}.",
        restaurant.primary_cuisine and f"It's a {restaurant.primary_cuisine} restaurant.",
        restaurant.price and f"Price range: {restaurant.price}.",
        restaurant.rating is not None and f"Rating: {restaurant.rating:g}/5.",
        restaurant.location and f"Location: {restaurant.location}.",
        "Answer questions about the restaurant in a friendly, helpful way.",
        "If asked about specific facts (hours, menu items, reservations), "
        "mention that you can help find that information.",
        "Keep responses concise (1-3 sentences) and conversational.",
    ]
    return " ".join(part for part in parts if part)


def build_facts_query(restaurant_name: str, question: str) -> str:
    """Reformulate a question for the restaurant-facts provider."""
    return f"About {restaurant_name}: {question}"


def build_why_this_table_prompt(
    restaurant: RestaurantSnapshot,
    preferences: UserPreferences,
) -> str:
    lines = [f"Explain in one line why {restaurant.name} fits this diner."]
    if preferences.cuisines:
        lines.append(f"Favorite cuisines: {', '.join(preferences.cuisines)}.")
    if preferences.budget:
        lines.append(f"Budget: {', '.join(preferences.budget)}.")
    if preferences.dietary:
        lines.append(f"Dietary needs: {', '.join(preferences.dietary)}.")
    lines.append('Start with "Queued because".')
    return " ".join(lines)


def build_invite_prompt(restaurant: RestaurantSnapshot) -> str:
    return f"Write a one-line invite asking friends to try {restaurant.name} together."


def build_plan_copilot_prompt(
    action: PlanAction,
    restaurant: RestaurantSnapshot,
    plan: PlanDraft | None = None,
) -> str:
    """Prompt for one plan-copilot action, including the current draft."""
    action = PlanAction(action)
    context: list[str] = []
    if plan is not None and plan.time_window in _TIME_WINDOW_LABELS:
        context.append(f"The group is leaning towards {_TIME_WINDOW_LABELS[plan.time_window]}.")
    if plan is not None and plan.vibe in _VIBE_LABELS:
        context.append(f"The vibe is {_VIBE_LABELS[plan.vibe]}.")

    if action is PlanAction.SUGGEST_TIMES:
        task = f"Suggest when a group should go to {restaurant.name}."
    elif action is PlanAction.DRAFT_INVITE:
        task = f"Draft a casual group invite to {restaurant.name}."
    else:
        task = f"Say why {restaurant.name} works well for a group outing."
    return " ".join([task, *context])
