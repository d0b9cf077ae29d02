from __future__ import annotations

from enum import Enum


class MessageTier(Enum):
    """
    End-of-round verdict, one band per 10%.

    value = (lower bound in percent, headline, emoji, tagline)
    """

    PERFECT = (100, "Perfect!", "😎 🏆", "Legendary Level!")
    EXCELLENT = (90, "Excellent!", "😃 ⭐", "Almost flawless!")
    VERY_GOOD = (80, "Very Good!", "😄 ✨", "Keep it up!")
    GOOD = (70, "Good!", "🙂 👍", "On the right track")
    SO_SO = (60, "So-so...", "🙃 ⚖️", "Barely passing")
    WEAK = (50, "Weak!", "🤨 ⚠️", "Need to push harder")
    BAD = (40, "Bad!", "🤔 📉", "Rethink your strategy")
    VERY_BAD = (30, "Very Bad!", "🥺 🆘", "Red alert!")
    HORRIBLE = (20, "Horrible!", "🙄 🤦‍♂️", "Can't even describe it...")
    TERRIBLE = (10, "Terrible!", "🫠 🌋", "Total disaster")
    SPEECHLESS = (0, "Speechless!", "🤯 💀", "What happened here?")

    @property
    def threshold(self) -> int:
        return self.value[0]

    @property
    def headline(self) -> str:
        return self.value[1]

    @property
    def emoji(self) -> str:
        return self.value[2]

    @property
    def tagline(self) -> str:
        return self.value[3]

    @property
    def message(self) -> str:
        return f"{self.headline} {self.emoji} ({self.tagline})"

    @classmethod
    def for_percentage(cls, percentage: int) -> "MessageTier":
        """
        Members are declared from the highest band down, so the first
        threshold the percentage reaches wins.
        """
        if not 0 <= percentage <= 100:
            raise ValueError(f"percentage out of range: {percentage}")
        for tier in cls:
            if percentage >= tier.threshold:
                return tier
        return cls.SPEECHLESS
