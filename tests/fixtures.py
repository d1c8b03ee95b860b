"""
Test fixtures for Sociogram.

This module provides sample relationship data for testing the
graph, community, layout and encoding modules.
"""

# The worked example: A and B name each other, B also names C
SIMPLE_TRIANGLE = {
    "A": ["B"],
    "B": ["A", "C"],
    "C": [],
}

# Two separate friendships plus a loner who names nobody
TWO_GROUPS = {
    "A": ["B"],
    "C": ["D"],
    "E": [],
}

# One component with hubs of known degree
#   Hub: 15 named + 1 naming it = 16
#   X: 8, Y: 5, Z: 3, P13/P14: 2
HUBS = {
    "Hub": [f"P{i}" for i in range(15)],
    "X": [f"P{i}" for i in range(8)],
    "Y": [f"P{i}" for i in range(8, 13)],
    "Z": ["P13", "P14", "Hub"],
}

# One hub naming eight leaves; the degree fallback splits it into ids 0 and 3
STAR = {
    "H": [f"L{i}" for i in range(8)],
}

# The same pair listed twice
DUPLICATE_PAIR = {
    "A": ["B", "B"],
}

# Someone naming themselves
SELF_LOOP = {
    "A": ["A", "B"],
}

# Pasted text in the data-entry format
VALID_TEXT = """
Hannah: Hayden, Kaley, Kaylee
Nate: Cooper B, Tamia, Charlotte

Hunter: Mila, Livvy, Tamia
"""

MALFORMED_TEXT = """
Hannah: Hayden, Kaley
Nate Cooper B
"""
