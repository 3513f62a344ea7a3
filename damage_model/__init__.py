"""
Damage Model Module.

Contract for the surge damage model that consumes city characteristics.

CRITICAL PRINCIPLES:
- Declares the collaborator interface only
- Ships NO damage algorithm
- NEVER modifies cost or zone calculations
"""

from damage_model.base import DamageModel, DamageVector

__all__ = [
    'DamageModel',
    'DamageVector',
]
