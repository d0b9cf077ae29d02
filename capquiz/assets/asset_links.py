from __future__ import annotations


class AssetLinks:
    """
    Central catalog for externally hosted assets (images, icons).

    Keeps URLs out of game logic; the quiz core never builds URLs itself.

    Usage example:
      embed.set_image(url=AssetLinks.flag_url(country.code))
    """

    FLAG_CDN = "https://flagcdn.com"
    FLAG_WIDTH = 640

    # Icon shown on help/final embeds
    QUIZ_ICON = "https://flagcdn.com/w80/un.png"

    @classmethod
    def flag_url(cls, code: str, *, width: int | None = None) -> str:
        w = int(width or cls.FLAG_WIDTH)
        return f"{cls.FLAG_CDN}/w{w}/{code.strip().lower()}.png"
