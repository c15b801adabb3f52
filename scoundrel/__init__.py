"""
Scoundrel - Single-player dungeon crawl card game engine.

A deterministic, rules-driven engine for the Scoundrel solitaire game:
- Deck construction and seeded shuffling
- Room lifecycle (face, avoid, carry one card forward)
- Card resolution with the weapon durability rule
- Scoring and save/restore of whole games
"""

__version__ = "0.1.0"
