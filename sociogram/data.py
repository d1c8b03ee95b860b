"""
Built-in relationship data for Sociogram.

A small class roster used when no custom data has been saved. Each key
names the people that person picked as friends.
"""

DEFAULT_RELATIONSHIPS: dict[str, list[str]] = {
    "Hannah": ["Hayden", "Kaley", "Kaylee"],
    "Hayden": ["Hannah", "Kaley", "Mila"],
    "Kaley": ["Hannah", "Kaylee", "Livvy"],
    "Kaylee": ["Kaley", "Hannah", "Charlotte"],
    "Nate": ["Cooper B", "Tamia", "Charlotte"],
    "Cooper B": ["Nate", "Hunter", "Owen"],
    "Tamia": ["Charlotte", "Mila", "Livvy"],
    "Charlotte": ["Tamia", "Kaylee", "Nate"],
    "Hunter": ["Mila", "Livvy", "Tamia"],
    "Mila": ["Livvy", "Hunter", "Hayden"],
    "Livvy": ["Mila", "Kaley", "Tamia"],
    "Owen": ["Cooper B", "Nate", "Hunter"],
    "Jasper": ["Owen", "Cooper B", "Hunter"],
    "Ruby": ["Charlotte", "Tamia", "Hannah"],
}


def default_relationships() -> dict[str, list[str]]:
    """Return a fresh copy of the built-in data."""
    return {name: list(friends) for name, friends in DEFAULT_RELATIONSHIPS.items()}
