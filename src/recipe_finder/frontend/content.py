"""Landing page content: feature cards and testimonials.

Feature icons are a closed enum; each member carries the glyph and label it
is drawn with.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final


class FeatureIcon(Enum):
    """Feature card icons and how each one is drawn."""

    SEARCH = ("search", "🔍", "Search")
    SAVE = ("save", "💾", "Save")
    DETAILS = ("details", "📋", "Details")
    FAST = ("fast", "⚡", "Fast")

    def __init__(self, tag: str, glyph: str, label: str) -> None:
        self.tag = tag
        self.glyph = glyph
        self.label = label

    @classmethod
    def parse(cls, tag: str) -> FeatureIcon:
        """Look an icon up by tag.

        Raises:
            ValueError: If ``tag`` names no icon.
        """
        for icon in cls:
            if icon.tag == tag:
                return icon
        msg = f"Unknown feature icon: {tag!r}"
        raise ValueError(msg)

    def render(self) -> str:
        return f"{self.glyph} {self.label}"


@dataclass(frozen=True, slots=True)
class Feature:
    title: str
    description: str
    icon: FeatureIcon


@dataclass(frozen=True, slots=True)
class Testimonial:
    name: str
    address: str
    message: str
    stars: int


FEATURES: Final[tuple[Feature, ...]] = (
    Feature(
        "Smart Search",
        "Find meals by ingredients, dietary needs, or cravings, instantly and intuitively.",
        FeatureIcon.SEARCH,
    ),
    Feature(
        "Save Recipes",
        "One-click save to revisit your favorites anytime, anywhere.",
        FeatureIcon.SAVE,
    ),
    Feature(
        "Detailed Recipes",
        "Step-by-step instructions and tips for perfect results every time.",
        FeatureIcon.DETAILS,
    ),
    Feature(
        "Free & Fast",
        "No ads, no clutter. Just food, quick and always free.",
        FeatureIcon.FAST,
    ),
)

TESTIMONIALS: Final[tuple[Testimonial, ...]] = (
    Testimonial(
        "Ava",
        "San Francisco",
        "JRF makes it so easy to find new recipes! I love the clean design and how fast everything loads.",
        5,
    ),
    Testimonial(
        "Liam",
        "New York",
        "I've saved so many recipes and the step-by-step instructions are super helpful. Highly recommend!",
        5,
    ),
    Testimonial(
        "Maya",
        "Austin",
        "The best part? No ads! Just great food and a super easy interface.",
        5,
    ),
    Testimonial(
        "Noah",
        "Chicago",
        "I use JRF every week. The search is smart and the recipes are always spot on!",
        5,
    ),
)


class HomeContent:
    """Read-only access to the landing page content."""

    def __init__(
        self,
        features: tuple[Feature, ...] = FEATURES,
        testimonials: tuple[Testimonial, ...] = TESTIMONIALS,
    ) -> None:
        self.features = features
        self.testimonials = testimonials

    def feature_at(self, index: int) -> Feature | None:
        if 0 <= index < len(self.features):
            return self.features[index]
        return None

    def testimonial_at(self, index: int) -> Testimonial | None:
        if 0 <= index < len(self.testimonials):
            return self.testimonials[index]
        return None

    def features_matching(self, term: str) -> list[Feature]:
        """Features whose title or description contains ``term``."""
        term = term.lower()
        return [
            f
            for f in self.features
            if term in f.title.lower() or term in f.description.lower()
        ]

    def testimonials_matching(self, term: str) -> list[Testimonial]:
        """Testimonials whose name, address or message contains ``term``."""
        term = term.lower()
        return [
            t
            for t in self.testimonials
            if term in t.name.lower()
            or term in t.address.lower()
            or term in t.message.lower()
        ]

    def testimonials_with_stars(self, stars: int) -> list[Testimonial]:
        return [t for t in self.testimonials if t.stars == stars]
