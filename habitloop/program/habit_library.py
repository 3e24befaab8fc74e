"""Seed habit library.

Small, concrete habits grouped by the categories the program generator
rotates through. The store is seeded with these once, when its library
is empty. Every category in HABIT_CATEGORIES has at least three habits,
so generated programs never run short with the seed library.
"""

from habitloop.models import Habit
from habitloop.program import (
    DIGITAL_BALANCE,
    EMOTIONAL_REGULATION,
    FOCUS_DEEP_WORK,
    MINDFUL_PAUSING,
    SLEEP_WIND_DOWN,
    SPENDING_AWARENESS,
)


HABIT_LIBRARY: list[Habit] = [
    # Spending Awareness
    Habit(
        id="spend-24h-rule",
        action="Leave one non-essential item in your cart for 24 hours before buying",
        duration=2,
        difficulty=2,
        when_to_cue="When you reach the checkout page",
        rationale="A waiting period separates the impulse from the decision.",
        category=SPENDING_AWARENESS,
    ),
    Habit(
        id="spend-unsubscribe",
        action="Unsubscribe from one promotional email list",
        duration=3,
        difficulty=1,
        when_to_cue="When a sale email lands in your inbox",
        rationale="Fewer promotions means fewer cues to shop.",
        category=SPENDING_AWARENESS,
    ),
    Habit(
        id="spend-log-purchase",
        action="Write down every online purchase today with how you felt just before",
        duration=5,
        difficulty=2,
        when_to_cue="Right after any purchase confirmation",
        rationale="Linking purchases to feelings exposes emotional spending.",
        category=SPENDING_AWARENESS,
    ),
    Habit(
        id="spend-remove-card",
        action="Remove a saved card from one shopping site",
        duration=3,
        difficulty=1,
        when_to_cue="The next time you open a shopping app",
        rationale="Adding friction to one-click buying slows impulse purchases.",
        category=SPENDING_AWARENESS,
    ),
    # Mindful Pausing
    Habit(
        id="pause-three-breaths",
        action="Take three slow breaths before opening any app",
        duration=1,
        difficulty=1,
        when_to_cue="When your thumb reaches for an app icon",
        rationale="A short pause turns an automatic action into a choice.",
        category=MINDFUL_PAUSING,
    ),
    Habit(
        id="pause-name-urge",
        action="Name the urge out loud before acting on it",
        duration=1,
        difficulty=2,
        when_to_cue="When you notice a craving to check, buy or scroll",
        rationale="Labeling a craving weakens its pull.",
        category=MINDFUL_PAUSING,
    ),
    Habit(
        id="pause-ten-minute-delay",
        action="Set a 10-minute timer before giving in to an urge",
        duration=10,
        difficulty=2,
        when_to_cue="When an urge feels strong",
        rationale="Most urges peak and fade within minutes.",
        category=MINDFUL_PAUSING,
    ),
    Habit(
        id="pause-body-scan",
        action="Do a one-minute body scan",
        duration=1,
        difficulty=1,
        when_to_cue="Between finishing one task and starting the next",
        rationale="Checking in with your body interrupts autopilot.",
        category=MINDFUL_PAUSING,
    ),
    # Emotional Regulation
    Habit(
        id="emotion-journal",
        action="Write three sentences about how you feel right now",
        duration=5,
        difficulty=1,
        when_to_cue="When you notice a strong emotion while online",
        rationale="Writing an emotion down lowers its intensity.",
        category=EMOTIONAL_REGULATION,
    ),
    Habit(
        id="emotion-walk",
        action="Take a short walk without your phone",
        duration=10,
        difficulty=2,
        when_to_cue="When you feel stressed or restless",
        rationale="Movement shifts mood without reaching for a screen.",
        category=EMOTIONAL_REGULATION,
    ),
    Habit(
        id="emotion-reach-out",
        action="Message a friend to talk instead of posting",
        duration=5,
        difficulty=2,
        when_to_cue="When you want to vent online",
        rationale="Direct connection meets the need the feed only imitates.",
        category=EMOTIONAL_REGULATION,
    ),
    Habit(
        id="emotion-gratitude",
        action="List three things that went well today",
        duration=3,
        difficulty=1,
        when_to_cue="Before you close your laptop for the day",
        rationale="Deliberate positives balance a negativity-biased feed.",
        category=EMOTIONAL_REGULATION,
    ),
    # Sleep & Wind-down
    Habit(
        id="sleep-phone-outside",
        action="Charge your phone outside the bedroom",
        duration=2,
        difficulty=3,
        when_to_cue="When you get ready for bed",
        rationale="Out of reach means out of mind at night.",
        category=SLEEP_WIND_DOWN,
    ),
    Habit(
        id="sleep-screen-curfew",
        action="Stop all screens 30 minutes before bed",
        duration=30,
        difficulty=3,
        when_to_cue="At your set curfew alarm",
        rationale="A screen-free buffer protects sleep quality.",
        category=SLEEP_WIND_DOWN,
    ),
    Habit(
        id="sleep-paper-book",
        action="Read a few pages of a paper book in bed",
        duration=15,
        difficulty=1,
        when_to_cue="When you get into bed",
        rationale="Replacing the phone with a book keeps the ritual without the feed.",
        category=SLEEP_WIND_DOWN,
    ),
    Habit(
        id="sleep-no-morning-check",
        action="Wait 15 minutes after waking before checking your phone",
        duration=15,
        difficulty=2,
        when_to_cue="When your alarm goes off",
        rationale="A calm start sets the tone before notifications do.",
        category=SLEEP_WIND_DOWN,
    ),
    # Digital Balance
    Habit(
        id="digital-notifications-off",
        action="Turn off notifications for one non-essential app",
        duration=2,
        difficulty=1,
        when_to_cue="The next time a notification interrupts you",
        rationale="Fewer pings means fewer cues to check.",
        category=DIGITAL_BALANCE,
    ),
    Habit(
        id="digital-grayscale",
        action="Switch your phone to grayscale for the afternoon",
        duration=1,
        difficulty=2,
        when_to_cue="After lunch",
        rationale="Muted colors make apps less rewarding to open.",
        category=DIGITAL_BALANCE,
    ),
    Habit(
        id="digital-move-apps",
        action="Move your most-scrolled app off the home screen",
        duration=2,
        difficulty=1,
        when_to_cue="When you unlock your phone in the morning",
        rationale="An extra tap is often enough to break the reflex.",
        category=DIGITAL_BALANCE,
    ),
    Habit(
        id="digital-scroll-timer",
        action="Set a 10-minute timer before opening a social feed",
        duration=10,
        difficulty=2,
        when_to_cue="When you open a social app",
        rationale="A visible limit puts an end on an endless feed.",
        category=DIGITAL_BALANCE,
    ),
    # Focus & Deep Work
    Habit(
        id="focus-single-tab",
        action="Work with a single browser tab for 25 minutes",
        duration=25,
        difficulty=2,
        when_to_cue="When you start a focused task",
        rationale="One tab removes the temptation to drift.",
        category=FOCUS_DEEP_WORK,
    ),
    Habit(
        id="focus-phone-away",
        action="Put your phone in another room during one work block",
        duration=45,
        difficulty=3,
        when_to_cue="At the start of your first work block",
        rationale="Even a face-down phone pulls attention.",
        category=FOCUS_DEEP_WORK,
    ),
    Habit(
        id="focus-intention",
        action="Write down one goal before opening your laptop",
        duration=2,
        difficulty=1,
        when_to_cue="When you sit down at your desk",
        rationale="A stated intention makes drift easier to notice.",
        category=FOCUS_DEEP_WORK,
    ),
]


def ensure_library(existing: list[Habit]) -> list[Habit]:
    """Return the stored library, or the seed library when none exists yet."""
    return existing if existing else list(HABIT_LIBRARY)
