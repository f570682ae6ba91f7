"""
Tracura - Line Item Master Data

Item types, items, specs and the UOM options allowed for each item type.
"""

LABOUR = "Labour"

# [item_type][item] -> specs
ITEM_TYPES: dict[str, dict[str, list[str]]] = {
    "Raw material": {
        "Steel": ["Fe500 • 6 mm", "Fe500 • 8 mm", "Fe500 • 10 mm", "Fe500 • 12 mm", "Fe500 • 16 mm", "Fe500 • 20 mm"],
        "Cement": ["OPC 43", "OPC 53", "PPC"],
        "Sand": ["M-Sand • Zone I", "M-Sand • Zone II", "River Sand (Coarse)", "River Sand (Fine)"],
    },
    LABOUR: {
        "Men & Women": ["Unskilled", "Semi-skilled", "Skilled", "Mason", "Helper"],
    },
    "Machines & eq": {
        "JCB": ["Per-day hire", "Per-hour hire"],
        "Tractor / Trolley": ["Per-trip", "Per-day"],
        "Concrete Mixer": ["Per-day hire"],
        "Vibrator": ["Per-day hire"],
    },
    "Electrical": {
        "Wires & Cables": ["1.5 sq mm", "2.5 sq mm", "4 sq mm", "6 sq mm", "10 sq mm", "16 sq mm", "25 sq mm"],
        "Switches & Sockets": ["Single pole", "Double pole", "Triple pole", "5A socket", "15A socket", "Modular switches"],
        "MCB & DB": ["6A MCB", "10A MCB", "16A MCB", "20A MCB", "32A MCB", "Distribution Board"],
        "Lighting": ["LED Bulb", "LED Tube", "LED Panel", "LED Strip", "CFL", "Halogen"],
        "Conduits & Accessories": ["20mm PVC", "25mm PVC", "32mm PVC", "40mm PVC", "Elbow", "Coupler", "Bend"],
    },
}

UOM_OPTIONS: dict[str, tuple[str, ...]] = {
    "Raw material": ("Kg", "Ton", "Bag", "Cft", "Cum", "Sqft", "Nos"),
    LABOUR: ("Day", "Hour", "Week", "Month"),
    "Machines & eq": ("Hour", "Day", "Trip", "Month"),
    "Electrical": ("Nos", "Meter", "Coil", "Box", "Set"),
}

ALL_UOM_OPTIONS: tuple[str, ...] = tuple(sorted({uom for options in UOM_OPTIONS.values() for uom in options}))


def is_labour(item_type: str) -> bool:
    """True for the Labour item type (case-insensitive)."""
    return item_type.strip().lower() == LABOUR.lower()


def item_type_keys() -> list[str]:
    """All item types, sorted."""
    return sorted(ITEM_TYPES)


def items_for(item_type: str) -> list[str]:
    """Items available for an item type (empty for unknown types)."""
    return sorted(ITEM_TYPES.get(item_type, {}))


def specs_for(item_type: str, item: str) -> list[str]:
    """Specs available for an item of the given type."""
    return list(ITEM_TYPES.get(item_type, {}).get(item, []))


def uom_options_for(item_type: str) -> tuple[str, ...]:
    """
    UOM options allowed for an item type.

    Unset and unknown item types (e.g. custom template categories) allow
    every known UOM.
    """
    if not item_type:
        return ALL_UOM_OPTIONS
    return UOM_OPTIONS.get(item_type, ALL_UOM_OPTIONS)
