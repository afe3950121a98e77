"""Règles et constantes du noyau de placement.

Ce module expose le contrat minimal partagé par le plateau et les joueurs:
- types de ressources et de cartes développement
- limites de pièces par joueur (`MAX_ROADS`, `MAX_VILLAGES`, `MAX_CITIES`)
- ratios d'échange banque/ports
"""

from enum import IntEnum


class ResourceType(IntEnum):
    """Types de ressources."""

    WOOD = 0  # Bois
    BRICK = 1  # Argile
    SHEEP = 2  # Mouton
    WHEAT = 3  # Blé
    ORE = 4  # Minerai


class DevelopmentCardType(IntEnum):
    """Types de cartes développement."""

    KNIGHT = 0
    VICTORY_POINT = 1
    ROAD_BUILDING = 2
    YEAR_OF_PLENTY = 3
    MONOPOLY = 4


NUM_RESOURCES: int = len(ResourceType)

# Limites de pièces par joueur (requêtes "remaining" uniquement)
MAX_ROADS: int = 15
MAX_VILLAGES: int = 5
MAX_CITIES: int = 4

# Règles de commerce
BANK_TRADE_RATIO: int = 4  # 4:1 par défaut
GENERAL_PORT_RATIO: int = 3  # 3:1 port générique
SPECIAL_PORT_RATIO: int = 2  # 2:1 port spécialisé

# Quantité rapportée par une construction (production et points de victoire)
SETTLEMENT_RESOURCE_AMOUNTS = {
    "VILLAGE": 1,
    "CITY": 2,
}
VICTORY_POINTS_PER_CARD: int = 1

__all__ = [
    "ResourceType",
    "DevelopmentCardType",
    "NUM_RESOURCES",
    "MAX_ROADS",
    "MAX_VILLAGES",
    "MAX_CITIES",
    "BANK_TRADE_RATIO",
    "GENERAL_PORT_RATIO",
    "SPECIAL_PORT_RATIO",
    "SETTLEMENT_RESOURCE_AMOUNTS",
    "VICTORY_POINTS_PER_CARD",
]
