"""
Sample Classifier

Labels the statistical character of a sampled color set so the engine can pick
a synthesis strategy: mostly gray (monochrome), some color but little spread
(low diversity), or enough hue/lightness spread to map every ANSI hue to its
own sample (chromatic).
"""

from enum import Enum
from typing import List, Sequence

from loguru import logger

from .model import HSL, hue_distance


# Saturation percentage under which a sample counts as gray
MONOCHROME_SAT_THRESHOLD = 15.0
# Share of gray samples above which the set is monochrome
MONOCHROME_RATIO = 0.7
# Share of similar chromatic pairs above which the set has low diversity
LOW_DIVERSITY_RATIO = 0.6
SIMILAR_HUE_RANGE = 30.0
SIMILAR_LIGHTNESS_RANGE = 20.0


class SampleKind(str, Enum):
    """Classification labels for a sample set."""
    MONOCHROME = "monochrome"
    LOW_DIVERSITY = "low_diversity"
    CHROMATIC = "chromatic"


def is_low_saturation(color: HSL) -> bool:
    return color.s * 100.0 < MONOCHROME_SAT_THRESHOLD


def chromatic_subset(samples: Sequence[HSL]) -> List[HSL]:
    """Samples saturated enough to carry a hue, in sample order."""
    return [c for c in samples if not is_low_saturation(c)]


def is_monochrome(samples: Sequence[HSL]) -> bool:
    low_sat = sum(1 for c in samples if is_low_saturation(c))
    return low_sat / len(samples) > MONOCHROME_RATIO


def has_low_diversity(samples: Sequence[HSL]) -> bool:
    """
    Check whether chromatic samples cluster in hue and lightness.

    Compares every unordered pair of chromatic samples; a pair is similar when
    both its hue distance and lightness distance are small.
    """
    chromatic = chromatic_subset(samples)
    if len(chromatic) < 2:
        return True

    similar = 0
    total = 0
    for i in range(len(chromatic)):
        for j in range(i + 1, len(chromatic)):
            total += 1
            hue_diff = hue_distance(chromatic[i].h, chromatic[j].h)
            l_diff = abs(chromatic[i].l - chromatic[j].l) * 100.0
            if hue_diff < SIMILAR_HUE_RANGE and l_diff < SIMILAR_LIGHTNESS_RANGE:
                similar += 1

    if total == 0:
        return True

    return similar / total > LOW_DIVERSITY_RATIO


def classify(samples: Sequence[HSL]) -> SampleKind:
    """
    Classify a non-empty list of HSL samples.

    Args:
        samples: HSL samples in upstream frequency order

    Returns:
        Exactly one SampleKind

    Raises:
        ValueError: If samples is empty
    """
    if not samples:
        raise ValueError("Cannot classify an empty sample set")

    if is_monochrome(samples):
        kind = SampleKind.MONOCHROME
    elif has_low_diversity(samples):
        kind = SampleKind.LOW_DIVERSITY
    else:
        kind = SampleKind.CHROMATIC

    logger.debug(f"Classified {len(samples)} samples as {kind.value}")
    return kind
