"""Default spot configurations."""

from surfcheck.config.schema import SpotConfig

DEFAULT_SPOTS: list[SpotConfig] = [
    SpotConfig(
        id="5842041f4e65fad6a7708a01",
        name="Belmar (16th Ave)",
        slug="16th-ave-belmar",
    ),
    SpotConfig(
        id="630d04654da1381c5cb8aeb7",
        name="Long Branch",
        slug="long-branch",
    ),
]
