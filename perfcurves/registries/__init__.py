"""Registries.

Measures are looked up by name instead of through if/else chains:
- implement the formula
- register it with ``@register_measure``
- the builder and averager pick it up unchanged
"""

from .measures import MeasureSpec, list_measures, parse_measure, register_measure
