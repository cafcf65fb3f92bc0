"""Restaurant and user context entities."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RestaurantSnapshot:
    """The subset of restaurant data the resolution layer reads.

    Attributes:
        id: Stable restaurant identifier (the cache and conversation partition)
        name: Display name
        categories: Category titles, primary first (e.g., ("Thai", "Noodles"))
        price: Price tier such as "$$", if known
        rating: Average rating out of 5, if known
        formatted_address: Full address, if known
        city: City, used when no formatted address is available
        latitude: Latitude, if known
        longitude: Longitude, if known
        ambience: Ambience flags such as {"lively": True}
    """

    id: str
    name: str
    categories: tuple[str, ...] = ()
    price: str | None = None
    rating: float | None = None
    formatted_address: str | None = None
    city: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    ambience: dict[str, bool] = field(default_factory=dict)

    @property
    def primary_cuisine(self) -> str | None:
        return self.categories[0] if self.categories else None

    @property
    def location(self) -> str | None:
        return self.formatted_address or self.city


@dataclass(frozen=True)
class UserPreferences:
    """Onboarding preferences of the current user."""

    cuisines: tuple[str, ...] = ()
    budget: tuple[str, ...] = ("$", "$$", "$$$")
    dietary: tuple[str, ...] = ()
    name: str | None = None


@dataclass(frozen=True)
class PlanDraft:
    """The plan being edited when the copilot is invoked.

    Attributes:
        time_window: "tonight", "thisWeek" or "weekend", if chosen
        vibe: "quickBite", "drinks" or "dinner", if chosen
    """

    time_window: str | None = None
    vibe: str | None = None


@dataclass(frozen=True)
class TableStarter:
    """Choices offered when a user starts a table for a restaurant."""

    time_windows: tuple[str, ...]
    vibes: tuple[str, ...]
    invite_copy: str
