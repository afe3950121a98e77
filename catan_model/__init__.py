"""Noyau de règles d'un jeu de colonisation sur plateau hexagonal."""

__version__ = "0.1.0"
