"""Default observing site."""

from stargazer.config.schema import SiteConfig

# Shiga Kogen, Yamanouchi (Nagano)
DEFAULT_SITE = SiteConfig(
    name="Shiga Kogen",
    latitude=36.70,
    longitude=138.50,
    timezone="Asia/Tokyo",
)
