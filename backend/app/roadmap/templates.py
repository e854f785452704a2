"""Seed itineraries, follow-up day templates and reply pools for the keyword generator.

Destinations are matched in priority order; the first keyword found in the
prompt wins. Coordinates are [longitude, latitude].
"""

from dataclasses import dataclass, field

from backend.app.models.common import Coordinates


@dataclass(frozen=True)
class ActivityTemplate:
    """Activity blueprint; ``coordinates`` of None means "use the map center"."""

    title: str
    time: str
    location: str
    description: str | None = None
    coordinates: Coordinates | None = None


@dataclass(frozen=True)
class DayTemplate:
    """Day blueprint without day number or date."""

    summary: str
    activities: tuple[ActivityTemplate, ...]


@dataclass(frozen=True)
class DestinationTemplate:
    """Seed itinerary for a known destination."""

    name: str
    keywords: tuple[str, ...]
    center: Coordinates | None
    zoom: float
    days: tuple[DayTemplate, ...] = field(default_factory=tuple)


TOKYO = DestinationTemplate(
    name="Tokyo",
    keywords=("tokyo",),
    center=(139.7525, 35.6846),
    zoom=12,
    days=(
        DayTemplate(
            summary="Arrival and First Impressions",
            activities=(
                ActivityTemplate(
                    "Airport Transfer & Hotel Check-in",
                    "14:00",
                    "City Center Hotel",
                    "Settle in and get oriented",
                    (139.7525, 35.6846),
                ),
                ActivityTemplate(
                    "Welcome Dinner",
                    "19:00",
                    "Local Restaurant",
                    "Taste authentic local cuisine",
                    (139.7675, 35.6762),
                ),
            ),
        ),
        DayTemplate(
            summary="Temples and Traditional Tokyo",
            activities=(
                ActivityTemplate(
                    "Senso-ji Temple", "09:00", "Asakusa", "Tokyo's oldest temple", (139.7966, 35.7148)
                ),
                ActivityTemplate(
                    "Ramen Lunch", "12:30", "Ueno", "Classic shoyu ramen", (139.7745, 35.7138)
                ),
                ActivityTemplate(
                    "Evening in Shibuya",
                    "18:00",
                    "Shibuya Crossing",
                    "The world's busiest crossing",
                    (139.7005, 35.6595),
                ),
            ),
        ),
        DayTemplate(
            summary="Markets and Modern Tokyo",
            activities=(
                ActivityTemplate(
                    "Tsukiji Outer Market",
                    "08:00",
                    "Tsukiji",
                    "Sushi breakfast among the stalls",
                    (139.7707, 35.6655),
                ),
                ActivityTemplate(
                    "teamLab Planets", "14:00", "Toyosu", "Immersive digital art", (139.7840, 35.6491)
                ),
            ),
        ),
    ),
)

PARIS = DestinationTemplate(
    name="Paris",
    keywords=("paris",),
    center=(2.3522, 48.8566),
    zoom=12,
    days=(
        DayTemplate(
            summary="Arrival and First Impressions",
            activities=(
                ActivityTemplate(
                    "Airport Transfer & Hotel Check-in",
                    "14:00",
                    "City Center Hotel",
                    "Settle in and get oriented",
                    (2.3522, 48.8566),
                ),
                ActivityTemplate(
                    "Welcome Dinner",
                    "19:00",
                    "Local Restaurant",
                    "Taste authentic local cuisine",
                    (2.3387, 48.8606),
                ),
            ),
        ),
        DayTemplate(
            summary="Icons of the City of Light",
            activities=(
                ActivityTemplate(
                    "Eiffel Tower", "09:30", "Champ de Mars", "Go up before the crowds", (2.2945, 48.8584)
                ),
                ActivityTemplate(
                    "Seine River Cruise",
                    "16:00",
                    "Port de la Bourdonnais",
                    "See the city from the water",
                    (2.2950, 48.8600),
                ),
            ),
        ),
        DayTemplate(
            summary="Art and Montmartre",
            activities=(
                ActivityTemplate(
                    "Louvre Museum", "09:00", "Rue de Rivoli", "Mona Lisa and beyond", (2.3376, 48.8606)
                ),
                ActivityTemplate(
                    "Sacre-Coeur at Sunset",
                    "18:30",
                    "Montmartre",
                    "Views over the rooftops",
                    (2.3431, 48.8867),
                ),
            ),
        ),
    ),
)

COSTA_RICA = DestinationTemplate(
    name="Costa Rica",
    keywords=("costa rica",),
    center=(-84.0907, 9.7489),
    zoom=8,
    days=(
        DayTemplate(
            summary="Arrival and First Impressions",
            activities=(
                ActivityTemplate(
                    "Airport Transfer & Hotel Check-in",
                    "14:00",
                    "San Jose",
                    "Settle in and get oriented",
                    (-84.0907, 9.9281),
                ),
                ActivityTemplate(
                    "Welcome Dinner",
                    "19:00",
                    "Local Soda",
                    "Casado and fresh fruit juices",
                    (-84.0807, 9.9331),
                ),
            ),
        ),
        DayTemplate(
            summary="Volcanoes and Hot Springs",
            activities=(
                ActivityTemplate(
                    "Arenal Volcano Hike",
                    "08:00",
                    "La Fortuna",
                    "Lava fields and rainforest trails",
                    (-84.7034, 10.4626),
                ),
                ActivityTemplate(
                    "Hot Springs", "17:00", "Tabacon", "Soak in volcanic waters", (-84.7234, 10.4922)
                ),
            ),
        ),
        DayTemplate(
            summary="Cloud Forest",
            activities=(
                ActivityTemplate(
                    "Hanging Bridges",
                    "09:00",
                    "Monteverde",
                    "Walk above the canopy",
                    (-84.8255, 10.3010),
                ),
            ),
        ),
    ),
)

CALIFORNIA = DestinationTemplate(
    name="California",
    keywords=("california",),
    center=(-122.4194, 37.7749),
    zoom=7,
    days=(
        DayTemplate(
            summary="Arrival and First Impressions",
            activities=(
                ActivityTemplate(
                    "Airport Transfer & Hotel Check-in",
                    "14:00",
                    "Union Square",
                    "Settle in and get oriented",
                    (-122.4075, 37.7880),
                ),
                ActivityTemplate(
                    "Welcome Dinner",
                    "19:00",
                    "Ferry Building",
                    "Local seafood by the bay",
                    (-122.3937, 37.7955),
                ),
            ),
        ),
        DayTemplate(
            summary="Golden Gate and the Bay",
            activities=(
                ActivityTemplate(
                    "Golden Gate Bridge Walk",
                    "09:00",
                    "Golden Gate Bridge",
                    "Cross on foot or by bike",
                    (-122.4783, 37.8199),
                ),
                ActivityTemplate(
                    "Alcatraz Tour", "14:00", "Pier 33", "Ferry to the island", (-122.4230, 37.8270)
                ),
            ),
        ),
        DayTemplate(
            summary="Coastal Drive",
            activities=(
                ActivityTemplate(
                    "Highway 1 to Half Moon Bay",
                    "10:00",
                    "Half Moon Bay",
                    "Cliffs and beaches",
                    (-122.4286, 37.4636),
                ),
            ),
        ),
    ),
)

GENERIC = DestinationTemplate(
    name="Your Destination",
    keywords=(),
    center=(0.0, 20.0),
    zoom=2,
    days=(
        DayTemplate(
            summary="Arrival and First Impressions",
            activities=(
                ActivityTemplate(
                    "Airport Transfer & Hotel Check-in",
                    "14:00",
                    "City Center Hotel",
                    "Settle in and get oriented",
                ),
                ActivityTemplate(
                    "Welcome Dinner", "19:00", "Local Restaurant", "Taste authentic local cuisine"
                ),
            ),
        ),
        DayTemplate(
            summary="Exploring the Highlights",
            activities=(
                ActivityTemplate("Guided Walking Tour", "10:00", "Old Town"),
                ActivityTemplate("Sunset Viewpoint", "18:00", "Scenic Lookout"),
            ),
        ),
    ),
)

# Priority order: first match wins
DESTINATIONS: tuple[DestinationTemplate, ...] = (TOKYO, PARIS, COSTA_RICA, CALIFORNIA)

# Follow-up categories, checked in order
LODGING_KEYWORDS = ("hotel", "hostel", "accommodation", "lodging", "airbnb", "place to stay")
FOOD_KEYWORDS = ("restaurant", "food", "eating", "dinner", "lunch", "breakfast", "cuisine")

LODGING_DAY = DayTemplate(
    summary="Hotel check-in and exploring the area",
    activities=(ActivityTemplate("Check-in at hotel", "15:00", "City Center Hotel"),),
)

FOOD_DAY = DayTemplate(
    summary="Culinary exploration day",
    activities=(
        ActivityTemplate("Breakfast at local cafe", "09:00", "Morning Brew Cafe"),
        ActivityTemplate("Food tour", "13:00", "City Center"),
        ActivityTemplate("Dinner at recommended restaurant", "19:00", "Traditional Restaurant"),
    ),
)

HIGHLIGHTS_DAY = DayTemplate(
    summary="Exploring the highlights",
    activities=(
        ActivityTemplate("Visit main attractions", "10:00", "City Center"),
        ActivityTemplate("Lunch break", "13:00", "Local Cafe"),
        ActivityTemplate("Shopping and relaxation", "15:00", "Shopping District"),
    ),
)

BOOTSTRAP_REPLY = (
    'Perfect! I\'m creating a personalized itinerary for "{prompt}". '
    "I've analyzed your preferences and found some amazing experiences. "
    "What dates were you thinking of traveling?"
)

LODGING_REPLIES = (
    "I've found several hotels that would be perfect for your trip. "
    "Would you like luxury options or more budget-friendly accommodations?",
    "I've set aside a day to check in and settle into your neighborhood. "
    "Let me know if you'd prefer somewhere quieter or closer to the action.",
)

FOOD_REPLIES = (
    "I've added some fantastic local restaurants to your itinerary. "
    "These places are known for their authentic cuisine and great atmosphere!",
    "Your trip now has a full day dedicated to eating well, from breakfast "
    "at a neighborhood cafe to dinner at a local favorite.",
)

GENERAL_REPLIES = (
    "Great choice! I've updated your itinerary to include more local experiences. "
    "The roadmap now features authentic restaurants and hidden gems that locals love.",
    "Perfect! I've added some exciting activities based on your preferences. "
    "Your trip now includes both must-see attractions and off-the-beaten-path discoveries.",
    "Excellent suggestion! I've incorporated your feedback and enhanced the itinerary "
    "with personalized recommendations that match your travel style.",
    "Wonderful! Your updated itinerary now includes the experiences you mentioned, "
    "plus some surprise additions I think you'll love.",
)

TIMEOUT_REPLY = (
    "Sorry, planning that took longer than expected. Your itinerary is unchanged; "
    "please try again."
)

ERROR_REPLY = (
    "Sorry, something went wrong while updating your itinerary. "
    "Your itinerary is unchanged; please try again."
)
