"""
SWC structure types and parsing constants.

Type codes follow the standard SWC convention (www.neuromorpho.org):
0 - undefined, 1 - soma, 2 - axon, 3 - basal dendrite, 4 - apical dendrite,
5+ - custom.
"""

from typing import Dict

UNDEFINED = 0
SOMA = 1
AXON = 2
BASAL_DENDRITE = 3
APICAL_DENDRITE = 4
CUSTOM = 5

TYPEVALUE_TO_TYPENAME: Dict[int, str] = {
    UNDEFINED: "undefined",
    SOMA: "soma",
    AXON: "axon",
    BASAL_DENDRITE: "basal_dendrite",
    APICAL_DENDRITE: "apical_dendrite",
    CUSTOM: "custom",
}

TYPENAME_TO_TYPEVALUE: Dict[str, int] = {name: value for value, name in TYPEVALUE_TO_TYPENAME.items()}

# Parent id of a root point in the point table
NO_PARENT = -1

# A point line needs: id, type, x, y, z, radius, parent id
MIN_FIELDS = 7

# The soma has no id in the point table, it gets this one
SOMA_ID = 0


def type_name(type_value: int) -> str:
    """Returns the name of an SWC type code. Every code above 5 is 'custom'."""
    if type_value >= CUSTOM:
        return TYPEVALUE_TO_TYPENAME[CUSTOM]
    try:
        return TYPEVALUE_TO_TYPENAME[type_value]
    except KeyError:
        raise ValueError(f"Invalid SWC type value: {type_value}")


def type_value(name: str) -> int:
    """Returns the SWC type code of a type name."""
    try:
        return TYPENAME_TO_TYPEVALUE[name]
    except KeyError:
        raise ValueError(
            f"Invalid SWC type name '{name}'. Must be one of: {', '.join(TYPENAME_TO_TYPEVALUE)}"
        )
